"""
File Operations for the Install Subsystem

Archive extraction with path-traversal protection, working-directory management and
best-effort cleanup.
"""

import os
import shutil
import tarfile
import tempfile
import zipfile
from typing import Optional

from javafetch.exceptions import DownloadOrExtractFailure
from javafetch.log_utils import logger


def _is_within_base(real_base_dir: str, candidate: str) -> bool:
    """
    Determine whether the candidate path resides within the given base directory.

    Returns:
        True if the candidate path is inside `real_base_dir`, False otherwise.
    """
    try:
        return os.path.commonpath([real_base_dir, candidate]) == real_base_dir
    except ValueError:
        return False


def safe_extract_path(extract_dir: str, member_path: str) -> str:
    """
    Resolve a safe absolute extraction path and prevent directory traversal.

    Raises:
        ValueError: If the resolved path is outside extract_dir.
    """
    real_extract_dir = os.path.realpath(extract_dir)
    prospective_path = os.path.join(real_extract_dir, member_path)
    normalized_path = os.path.realpath(prospective_path)

    if not _is_within_base(real_extract_dir, normalized_path):
        raise ValueError(
            f"Unsafe extraction path '{member_path}' is outside base '{extract_dir}'"
        )

    return normalized_path


def make_work_dir(base_dir: Optional[str], prefix: str) -> str:
    """Create a fresh working directory under `base_dir` (system temp when None)."""
    if base_dir:
        os.makedirs(base_dir, exist_ok=True)
    return tempfile.mkdtemp(prefix=prefix, dir=base_dir or None)


def remove_path(path: Optional[str]) -> None:
    """Remove a file or directory tree; failures are logged, never raised."""
    if not path or not os.path.lexists(path):
        return
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            shutil.rmtree(path)
        else:
            os.remove(path)
        logger.debug(f"Removed {path}")
    except OSError as e:
        logger.warning(f"Could not remove {path}: {e}")


def _extract_zip(archive_path: str, extract_dir: str) -> None:
    with zipfile.ZipFile(archive_path, "r") as zip_ref:
        for info in zip_ref.infolist():
            target = safe_extract_path(extract_dir, info.filename)
            if info.is_dir():
                os.makedirs(target, exist_ok=True)
                continue
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with zip_ref.open(info) as source, open(target, "wb") as dest:
                shutil.copyfileobj(source, dest)
            # Unix permission bits live in the high word of external_attr
            mode = (info.external_attr >> 16) & 0o777
            if mode and os.name != "nt":
                os.chmod(target, mode)


def _extract_tar(archive_path: str, extract_dir: str) -> None:
    with tarfile.open(archive_path, "r:*") as tar_ref:
        members = []
        for member in tar_ref.getmembers():
            safe_extract_path(extract_dir, member.name)
            if member.issym() or member.islnk():
                link_base = os.path.dirname(member.name) if member.issym() else ""
                safe_extract_path(extract_dir, os.path.join(link_base, member.linkname))
            elif not (member.isfile() or member.isdir()):
                logger.debug(f"Skipping special archive member {member.name}")
                continue
            members.append(member)
        if hasattr(tarfile, "data_filter"):
            tar_ref.extractall(extract_dir, members=members, filter="data")
        else:
            tar_ref.extractall(extract_dir, members=members)


def extract_archive(archive_path: str, extract_dir: str) -> str:
    """
    Extract a .zip or tar archive into `extract_dir`.

    Returns:
        str: `extract_dir`.

    Raises:
        DownloadOrExtractFailure: When the archive is corrupt, unsupported or would
            write outside `extract_dir`.
    """
    os.makedirs(extract_dir, exist_ok=True)
    logger.info(f"Extracting {os.path.basename(archive_path)}...")
    try:
        if zipfile.is_zipfile(archive_path):
            _extract_zip(archive_path, extract_dir)
        elif tarfile.is_tarfile(archive_path):
            _extract_tar(archive_path, extract_dir)
        else:
            raise DownloadOrExtractFailure(
                f"Unsupported archive format: {os.path.basename(archive_path)}"
            )
    except (zipfile.BadZipFile, tarfile.TarError, ValueError, OSError) as e:
        raise DownloadOrExtractFailure(
            f"Error extracting archive {archive_path}", details=str(e)
        ) from e
    return extract_dir


def find_content_root(extract_dir: str) -> str:
    """
    Return the directory holding the runtime inside an extracted archive.

    Vendor archives wrap the runtime in a single top-level folder (e.g.
    `jdk-11.0.9+11/`); that folder is returned. Archives without one return
    `extract_dir` itself.
    """
    entries = sorted(os.listdir(extract_dir))
    if not entries:
        raise DownloadOrExtractFailure(f"Archive extracted to {extract_dir} is empty")
    if len(entries) == 1:
        candidate = os.path.join(extract_dir, entries[0])
        if os.path.isdir(candidate):
            return candidate
    return extract_dir
