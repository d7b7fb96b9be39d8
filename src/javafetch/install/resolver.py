"""
Release Resolution

Selects exactly one release from a catalog listing. The policy is the same for every
vendor: the highest version satisfying the range wins, and releases with equal
versions are ordered by their position in the catalog.
"""

from typing import List, Optional, Sequence

import semantic_version

from javafetch.exceptions import NoBinaryForPlatform, NoSatisfyingVersion
from javafetch.log_utils import logger

from .interfaces import ReleaseDescriptor
from .version import VersionSpec, parse_version


class ReleaseResolver:
    """Pick the maximum satisfying release from an unordered listing."""

    def select(
        self, spec: VersionSpec, releases: Sequence[ReleaseDescriptor]
    ) -> ReleaseDescriptor:
        """
        Return the highest release whose version satisfies `spec`, link not checked.

        Raises:
            NoSatisfyingVersion: When nothing matches; carries every input version.
        """
        best: Optional[ReleaseDescriptor] = None
        best_version: Optional[semantic_version.Version] = None
        for release in releases:
            parsed = parse_version(release.resolved_version)
            if parsed is None:
                logger.debug(
                    f"Ignoring release with non-semver version {release.resolved_version!r}"
                )
                continue
            if not spec.matcher.match(parsed):
                continue
            if best_version is None or parsed > best_version:
                best, best_version = release, parsed

        if best is None:
            available: List[str] = [r.resolved_version for r in releases]
            raise NoSatisfyingVersion(spec.raw, available)

        logger.debug(
            f"Resolved {spec} to {best.resolved_version} among {len(releases)} releases"
        )
        return best

    def resolve(
        self, spec: VersionSpec, releases: Sequence[ReleaseDescriptor]
    ) -> ReleaseDescriptor:
        """
        Return the highest satisfying release, which must carry a download link.

        Raises:
            NoSatisfyingVersion: When nothing matches.
            NoBinaryForPlatform: When the selected release has no download link.
        """
        release = self.select(spec, releases)
        if not release.download_link:
            raise NoBinaryForPlatform(
                f"No binaries were found for semver {spec}",
                details=f"Release {release.resolved_version} has no download link",
            )
        return release
