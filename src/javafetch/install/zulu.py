"""
Azul Zulu Release Catalog

The Zulu bundle listing reports versions only; the binary link for the selected
version comes from a second "latest bundle" query.
"""

from typing import Any, Dict, List, Optional

import requests

from javafetch.constants import (
    DISTRIBUTOR_ZULU,
    ZULU_BUNDLES_URL,
    ZULU_DISPLAY_NAME,
    ZULU_LATEST_BUNDLE_URL,
)
from javafetch.exceptions import CatalogUnavailable, HTTPError, NoBinaryForPlatform
from javafetch.log_utils import logger
from javafetch.platforms import archive_extension, map_architecture
from javafetch.utils import create_session, fetch_json

from .interfaces import ReleaseCatalog, ReleaseDescriptor
from .resolver import ReleaseResolver
from .version import VersionSpec, coerce_version


def create_release_from_zulu_data(
    bundle_data: Dict[str, Any],
) -> Optional[ReleaseDescriptor]:
    """
    Decode one Zulu bundle record into a link-less ReleaseDescriptor.

    `jdk_version` is a list of integers such as [11, 0, 9, 1]; only the first three
    components form the semver version.

    Raises:
        KeyError, TypeError, ValueError: When the record is malformed.
    """
    jdk_version = bundle_data["jdk_version"]
    if not isinstance(jdk_version, list) or not jdk_version:
        raise ValueError(f"invalid jdk_version field {jdk_version!r}")
    version = coerce_version(".".join(str(part) for part in jdk_version))
    if version is None:
        return None
    return ReleaseDescriptor(resolved_version=version, major=int(jdk_version[0]))


class ZuluReleaseCatalog(ReleaseCatalog):
    """Release catalog for Azul Zulu community builds."""

    distributor = DISTRIBUTOR_ZULU
    display_name = ZULU_DISPLAY_NAME

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        resolver: Optional[ReleaseResolver] = None,
        host_os: str = "linux",
    ):
        self.session = session or create_session()
        self.resolver = resolver or ReleaseResolver()
        self.extension = archive_extension(host_os)

    def _base_query(
        self, architecture: str, package_type: str, platform: str
    ) -> Dict[str, Any]:
        arch, bitness = map_architecture(self.distributor, architecture)
        return {
            "os": platform,
            "arch": arch,
            "hw_bitness": bitness,
            "ext": self.extension,
            "bundle_type": package_type,
        }

    def list_releases(
        self,
        spec: VersionSpec,
        architecture: str,
        package_type: str,
        platform: str,
    ) -> List[ReleaseDescriptor]:
        params = self._base_query(architecture, package_type, platform)
        try:
            data = fetch_json(self.session, ZULU_BUNDLES_URL, params=params)
        except HTTPError as e:
            raise CatalogUnavailable(
                f"Unable to list {self.display_name} releases",
                endpoint=ZULU_BUNDLES_URL,
                details=str(e),
            ) from e

        if not isinstance(data, list) or not data:
            raise CatalogUnavailable(
                f"No Zulu Java versions were found for arch {architecture}, "
                f"extension {self.extension}, platform {platform}",
                endpoint=ZULU_BUNDLES_URL,
            )

        releases: List[ReleaseDescriptor] = []
        for bundle in data:
            if not isinstance(bundle, dict):
                logger.warning(
                    "Skipping malformed Zulu bundle entry: expected dict, got %s",
                    type(bundle).__name__,
                )
                continue
            try:
                release = create_release_from_zulu_data(bundle)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed Zulu bundle entry: %s", exc)
                continue
            if release is not None:
                releases.append(release)
        return releases

    def get_download_link(
        self,
        version: str,
        architecture: str,
        package_type: str,
        platform: str,
    ) -> Optional[str]:
        """Ask the catalog for the binary URL of an exact version."""
        params = self._base_query(architecture, package_type, platform)
        params["jdk_version"] = version
        try:
            data = fetch_json(self.session, ZULU_LATEST_BUNDLE_URL, params=params)
        except HTTPError as e:
            if e.status_code == 404:
                return None
            raise CatalogUnavailable(
                f"Unable to look up the {self.display_name} bundle for {version}",
                endpoint=ZULU_LATEST_BUNDLE_URL,
                details=str(e),
            ) from e
        if not isinstance(data, dict):
            return None
        url = data.get("url")
        return url if isinstance(url, str) and url else None

    def find_release(
        self,
        spec: VersionSpec,
        architecture: str,
        package_type: str,
        platform: str,
    ) -> ReleaseDescriptor:
        releases = self.list_releases(spec, architecture, package_type, platform)
        selected = self.resolver.select(spec, releases)
        link = self.get_download_link(
            selected.resolved_version, architecture, package_type, platform
        )
        logger.debug(f"Zulu bundle for {selected.resolved_version}: {link}")
        release = ReleaseDescriptor(
            resolved_version=selected.resolved_version,
            download_link=link,
            major=selected.major,
        )
        if not release.download_link:
            raise NoBinaryForPlatform(
                f"No Zulu binary was found for version {release.resolved_version}",
                details=f"platform {platform}, arch {architecture}, package {package_type}",
            )
        return release
