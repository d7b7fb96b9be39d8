"""
Tool Cache

On-disk store of installed runtimes laid out as `<root>/<tool>/<version>/<arch>`. An
entry counts as installed only once its `<arch>.complete` marker exists, so an
interrupted store never becomes visible.
"""

import os
import shutil
from typing import List, Optional

from javafetch.constants import COMPLETE_MARKER_SUFFIX
from javafetch.exceptions import DownloadOrExtractFailure
from javafetch.log_utils import logger

from .files import remove_path
from .interfaces import CacheKey
from .version import VersionSpec


def get_version_from_tool_path(tool_path: str) -> str:
    """Return the version component of a `<root>/<tool>/<version>/<arch>` path."""
    return os.path.basename(os.path.dirname(os.path.normpath(tool_path)))


class ToolCache:
    """Find and store installations under a tool cache root directory."""

    def __init__(self, root_dir: str):
        self.root_dir = root_dir

    def _entry_path(self, tool_name: str, version: str, arch: str) -> str:
        return os.path.join(self.root_dir, tool_name, version, arch)

    def _is_complete(self, tool_name: str, version: str, arch: str) -> bool:
        entry = self._entry_path(tool_name, version, arch)
        return os.path.isdir(entry) and os.path.isfile(
            entry + COMPLETE_MARKER_SUFFIX
        )

    def find_all_versions(self, tool_name: str, arch: str) -> List[str]:
        """List every completely installed version of a tool for an architecture."""
        tool_dir = os.path.join(self.root_dir, tool_name)
        if not os.path.isdir(tool_dir):
            return []
        return [
            version
            for version in sorted(os.listdir(tool_dir))
            if self._is_complete(tool_name, version, arch)
        ]

    def find(
        self, tool_name: str, version_spec: VersionSpec, arch: str
    ) -> Optional[str]:
        """
        Look up an installation satisfying a version range.

        An exact semver request prefers its own directory; otherwise the highest cached
        version inside the range is used (build metadata such as `+9` is ignored when
        matching).

        Returns:
            Optional[str]: The installation path, or None on a miss.
        """
        version: Optional[str] = None
        if version_spec.satisfied_by(version_spec.raw) and self._is_complete(
            tool_name, version_spec.raw, arch
        ):
            version = version_spec.raw
        else:
            version = version_spec.max_satisfying(
                self.find_all_versions(tool_name, arch)
            )

        if version is None:
            logger.debug(f"Tool cache miss for {tool_name} {version_spec} ({arch})")
            return None

        path = self._entry_path(tool_name, version, arch)
        logger.debug(f"Tool cache hit for {tool_name} {version_spec}: {path}")
        return path

    def store(self, source_dir: str, tool_name: str, version: str, arch: str) -> str:
        """
        Copy an extracted runtime into the cache under an exact version.

        Any previous entry for the same key is replaced. The completion marker is
        written last; a failed copy removes the partial entry.

        Raises:
            DownloadOrExtractFailure: When the copy cannot be completed.
        """
        if not os.path.isdir(source_dir):
            raise DownloadOrExtractFailure(
                f"Cannot cache {source_dir}: not a directory"
            )

        dest = self._entry_path(tool_name, version, arch)
        marker = dest + COMPLETE_MARKER_SUFFIX
        logger.debug(f"Caching {source_dir} as {tool_name} {version} ({arch})")
        remove_path(marker)
        remove_path(dest)
        try:
            os.makedirs(os.path.dirname(dest), exist_ok=True)
            shutil.copytree(source_dir, dest, symlinks=True)
            with open(marker, "w", encoding="utf-8"):
                pass
        except OSError as e:
            remove_path(marker)
            remove_path(dest)
            raise DownloadOrExtractFailure(
                f"Failed to store {tool_name} {version} in the tool cache",
                details=str(e),
            ) from e
        return dest

    def store_key(self, source_dir: str, key: CacheKey) -> str:
        return self.store(source_dir, key.tool_name, key.version, key.architecture)
