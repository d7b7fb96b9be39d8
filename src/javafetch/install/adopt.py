"""
AdoptOpenJDK Release Catalog

Queries the AdoptOpenJDK v3 API. The catalog does not report a page count, so the
version listing is enumerated page by page until the API signals the end.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

import requests

from javafetch.constants import (
    ADOPT_ASSETS_VERSION_URL,
    ADOPT_AVAILABLE_RELEASES_URL,
    ADOPT_DISPLAY_NAME,
    ADOPT_FULL_VERSION_RANGE,
    ADOPT_PAGE_SIZE,
    DISTRIBUTOR_ADOPT,
)
from javafetch.exceptions import CatalogUnavailable, HTTPError
from javafetch.log_utils import logger
from javafetch.utils import create_session, fetch_json

from .interfaces import ReleaseCatalog, ReleaseDescriptor
from .resolver import ReleaseResolver
from .version import VersionSpec, coerce_version


class PageStatus(Enum):
    """Outcome of requesting one catalog page."""

    PAGE = "page"
    END_OF_DATA = "end_of_data"
    FAILED = "failed"


@dataclass
class PageResult:
    status: PageStatus
    records: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None


def create_release_from_adopt_data(
    release_data: Dict[str, Any],
) -> Optional[ReleaseDescriptor]:
    """
    Decode one AdoptOpenJDK version record into a ReleaseDescriptor.

    The API filters binaries by os/arch/image type already, so the first binary is the
    one to install.

    Returns:
        Optional[ReleaseDescriptor]: None when the release has no binaries.

    Raises:
        KeyError, TypeError, ValueError: When the record is malformed.
    """
    version_data = release_data["version_data"]
    semver = version_data["semver"]
    if not isinstance(semver, str) or not semver:
        raise ValueError(f"invalid semver field {semver!r}")

    binaries = release_data.get("binaries") or []
    if not isinstance(binaries, list):
        raise TypeError(f"expected binaries list, got {type(binaries).__name__}")
    if not binaries:
        return None

    link = binaries[0]["package"]["link"]
    major = version_data.get("major")
    return ReleaseDescriptor(
        resolved_version=semver,
        download_link=link,
        major=int(major) if major is not None else None,
    )


class AdoptReleaseCatalog(ReleaseCatalog):
    """
    Release catalog for AdoptOpenJDK HotSpot builds.

    When possible the major-version index narrows the listing to a single feature
    release; otherwise every version in the catalog is enumerated.
    """

    distributor = DISTRIBUTOR_ADOPT
    display_name = ADOPT_DISPLAY_NAME
    macos_bundle_layout = True

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        resolver: Optional[ReleaseResolver] = None,
        page_size: int = ADOPT_PAGE_SIZE,
    ):
        self.session = session or create_session()
        self.resolver = resolver or ReleaseResolver()
        self.page_size = page_size

    def find_release(
        self,
        spec: VersionSpec,
        architecture: str,
        package_type: str,
        platform: str,
    ) -> ReleaseDescriptor:
        releases = self.list_releases(spec, architecture, package_type, platform)
        return self.resolver.resolve(spec, releases)

    def list_releases(
        self,
        spec: VersionSpec,
        architecture: str,
        package_type: str,
        platform: str,
    ) -> List[ReleaseDescriptor]:
        major = self.resolve_major_version(spec)
        if major is not None:
            version_range = f"[{major},{major + 1})"
            logger.debug(f"Narrowed {self.display_name} search to {version_range}")
        else:
            version_range = ADOPT_FULL_VERSION_RANGE

        records = self.get_available_versions(
            version_range, architecture, package_type, platform
        )
        releases: List[ReleaseDescriptor] = []
        for record in records:
            if not isinstance(record, dict):
                logger.warning(
                    "Skipping malformed %s release entry: expected dict, got %s",
                    self.display_name,
                    type(record).__name__,
                )
                continue
            try:
                release = create_release_from_adopt_data(record)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(
                    "Skipping malformed %s release entry: %s", self.display_name, exc
                )
                continue
            if release is not None:
                releases.append(release)

        logger.debug(
            f"{self.display_name} catalog returned {len(releases)} installable releases"
        )
        return releases

    def resolve_major_version(self, spec: VersionSpec) -> Optional[int]:
        """
        Find the highest feature release satisfying `spec` from the major-version index.

        Returns:
            Optional[int]: The major version, or None when the index is unavailable or
            lists no satisfying major (the caller then enumerates the full catalog).
        """
        try:
            data = fetch_json(self.session, ADOPT_AVAILABLE_RELEASES_URL)
        except HTTPError as e:
            logger.debug(f"Major version index unavailable, using full listing: {e}")
            return None

        available = data.get("available_releases") if isinstance(data, dict) else None
        if not isinstance(available, list) or not available:
            logger.debug("Major version index returned no releases")
            return None

        coerced = [coerce_version(str(item)) for item in available]
        best = spec.max_satisfying(v for v in coerced if v)
        if best is None:
            logger.debug(
                f"No major version in {available} satisfies {spec}; using full listing"
            )
            return None
        return int(best.split(".")[0])

    def _build_query(
        self, architecture: str, package_type: str, platform: str, page_index: int
    ) -> Dict[str, Any]:
        return {
            "architecture": architecture,
            "heap_size": "normal",
            "image_type": package_type,
            "jvm_impl": "hotspot",
            "os": platform,
            "project": "jdk",
            "vendor": "adoptopenjdk",
            "sort_method": "DEFAULT",
            "sort_order": "DESC",
            "page_size": self.page_size,
            "page": page_index,
        }

    def fetch_page(
        self,
        version_range: str,
        architecture: str,
        package_type: str,
        platform: str,
        page_index: int,
    ) -> PageResult:
        """Request one page and classify the outcome."""
        url = f"{ADOPT_ASSETS_VERSION_URL}/{version_range}"
        params = self._build_query(architecture, package_type, platform, page_index)
        try:
            data = fetch_json(self.session, url, params=params)
        except HTTPError as e:
            if e.status_code == 404:
                return PageResult(PageStatus.END_OF_DATA)
            return PageResult(PageStatus.FAILED, error=str(e))

        if isinstance(data, dict):
            data = data.get("versions")
        if not isinstance(data, list):
            return PageResult(
                PageStatus.FAILED,
                error=f"expected a list of versions, got {type(data).__name__}",
            )
        if not data:
            return PageResult(PageStatus.END_OF_DATA)
        return PageResult(PageStatus.PAGE, records=data)

    def get_available_versions(
        self,
        version_range: str,
        architecture: str,
        package_type: str,
        platform: str,
    ) -> List[Dict[str, Any]]:
        """
        Enumerate every page of the version listing, starting at page 0.

        Enumeration stops at the end of data or at the first failed request. A failure
        after at least one page keeps the pages already read.

        Raises:
            CatalogUnavailable: When the very first request fails.
        """
        results: List[Dict[str, Any]] = []
        page_index = 0
        while True:
            page = self.fetch_page(
                version_range, architecture, package_type, platform, page_index
            )
            if page.status is PageStatus.END_OF_DATA:
                break
            if page.status is PageStatus.FAILED:
                if page_index == 0:
                    raise CatalogUnavailable(
                        f"Unable to list {self.display_name} releases",
                        endpoint=f"{ADOPT_ASSETS_VERSION_URL}/{version_range}",
                        details=page.error,
                    )
                logger.warning(
                    f"Stopped listing {self.display_name} releases after {page_index} pages: {page.error}"
                )
                break
            results.extend(page.records)
            page_index += 1

        logger.debug(
            f"Read {page_index} pages ({len(results)} records) from {self.display_name}"
        )
        return results
