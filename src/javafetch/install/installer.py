"""
Installer

Coordinates one installation: normalize the requested version, consult the tool cache
and, on a miss, resolve a release from the distributor's catalog, download it, extract
it and store it in the cache.
"""

import os
from typing import Callable, Dict, Optional

import requests

from javafetch.constants import (
    DISTRIBUTOR_ADOPT,
    DISTRIBUTOR_ALIASES,
    DISTRIBUTOR_ZULU,
    MACOS_JAVA_CONTENT_DIR,
    SUPPORTED_PACKAGE_TYPES,
)
from javafetch.exceptions import ConfigurationError
from javafetch.log_utils import logger
from javafetch.platforms import HostPlatform, map_platform
from javafetch.utils import create_session, download_file

from .adopt import AdoptReleaseCatalog
from .cache import ToolCache, get_version_from_tool_path
from .files import extract_archive, find_content_root, make_work_dir, remove_path
from .interfaces import (
    CacheKey,
    InstallationResult,
    InstallerOptions,
    ReleaseCatalog,
    ReleaseDescriptor,
    tool_cache_name,
)
from .version import VersionSpec, normalize_version
from .zulu import ZuluReleaseCatalog

CatalogFactory = Callable[[requests.Session, HostPlatform], ReleaseCatalog]

CATALOG_FACTORIES: Dict[str, CatalogFactory] = {
    DISTRIBUTOR_ADOPT: lambda session, host: AdoptReleaseCatalog(session=session),
    DISTRIBUTOR_ZULU: lambda session, host: ZuluReleaseCatalog(
        session=session, host_os=host.os
    ),
}


def canonical_distributor(name: str) -> str:
    """
    Map a user-supplied distributor name onto a registered identifier.

    Raises:
        ConfigurationError: For unknown distributors.
    """
    key = (name or "").strip().lower()
    key = DISTRIBUTOR_ALIASES.get(key, key)
    if key not in CATALOG_FACTORIES:
        supported = ", ".join(sorted(CATALOG_FACTORIES))
        raise ConfigurationError(
            f"No supported distributor was found for '{name}'",
            details=f"Supported distributors: {supported}",
        )
    return key


class Installer:
    """
    Install one Java runtime for a fixed distributor, package type and host.

    The distributor's catalog strategy is chosen once at construction. install() never
    touches the process environment; see javafetch.environment for that.
    """

    def __init__(
        self,
        options: InstallerOptions,
        host: HostPlatform,
        tool_cache: ToolCache,
        catalog: Optional[ReleaseCatalog] = None,
        session: Optional[requests.Session] = None,
        temp_dir: Optional[str] = None,
    ):
        package_type = (options.package_type or "").strip().lower()
        if package_type not in SUPPORTED_PACKAGE_TYPES:
            raise ConfigurationError(
                f"Unsupported Java package type '{options.package_type}'",
                details=f"Supported package types: {', '.join(SUPPORTED_PACKAGE_TYPES)}",
            )

        self.options = options
        self.host = host
        self.architecture = options.architecture or host.arch
        self.package_type = package_type
        self.tool_cache = tool_cache
        self.temp_dir = temp_dir
        self.session = session or create_session()
        if catalog is None:
            distributor = canonical_distributor(options.distributor)
            catalog = CATALOG_FACTORIES[distributor](self.session, host)
        self.catalog = catalog
        self.platform = map_platform(catalog.distributor, host.os)

    @property
    def tool_name(self) -> str:
        return tool_cache_name(self.catalog.display_name, self.package_type)

    def install(self) -> InstallationResult:
        """
        Run the installation and return where the runtime lives.

        Raises:
            InvalidVersionSpec, CatalogUnavailable, NoSatisfyingVersion,
            NoBinaryForPlatform, DownloadOrExtractFailure
        """
        spec = normalize_version(self.options.version)

        result = self.find_in_tool_cache(spec)
        if result is not None:
            logger.info(
                f"Resolved Java {result.installed_version} from tool cache: {result.install_path}"
            )
        else:
            logger.info(
                f"Trying to resolve the latest version of {self.catalog.display_name} {self.package_type} for {spec}"
            )
            release = self.catalog.find_release(
                spec, self.architecture, self.package_type, self.platform
            )
            logger.info(f"Resolved Java {release.resolved_version}")
            result = self.download_and_store(release)

        return self.finalize(result)

    def cache_key(self, version: str) -> CacheKey:
        return CacheKey(
            distributor_name=self.catalog.display_name,
            package_type=self.package_type,
            version=version,
            architecture=self.architecture,
        )

    def find_in_tool_cache(self, spec: VersionSpec) -> Optional[InstallationResult]:
        tool_path = self.tool_cache.find(self.tool_name, spec, self.architecture)
        if not tool_path:
            return None
        return InstallationResult(
            install_path=tool_path,
            installed_version=get_version_from_tool_path(tool_path),
        )

    def download_and_store(self, release: ReleaseDescriptor) -> InstallationResult:
        """
        Download, extract and cache a release.

        The working directory holding the archive and its extracted contents is
        removed whichever way this returns.
        """
        work_dir = make_work_dir(self.temp_dir, prefix="javafetch-")
        try:
            logger.info(
                f"Downloading Java {release.resolved_version} ({self.catalog.display_name}) from {release.download_link} ..."
            )
            archive_path = download_file(
                self.session, release.download_link, os.path.join(work_dir, "download")
            )
            extracted_dir = extract_archive(
                archive_path, os.path.join(work_dir, "extract")
            )
            content_root = find_content_root(extracted_dir)
            install_path = self.tool_cache.store_key(
                content_root, self.cache_key(release.resolved_version)
            )
        finally:
            remove_path(work_dir)

        return InstallationResult(
            install_path=install_path, installed_version=release.resolved_version
        )

    def finalize(self, result: InstallationResult) -> InstallationResult:
        """
        Point macOS installations at the `Contents/Home` bundle directory.

        Only catalogs whose macOS archives use the bundle layout are adjusted; other
        installations are returned unchanged.
        """
        if self.host.is_macos and self.catalog.macos_bundle_layout:
            return InstallationResult(
                install_path=os.path.join(result.install_path, MACOS_JAVA_CONTENT_DIR),
                installed_version=result.installed_version,
            )
        return result
