"""
Core Interfaces for the javafetch Install Subsystem

This module defines the data structures passed between the installer stages and
the capability interface each distributor implements.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional, Union

from javafetch.constants import TOOL_FAMILY

Pathish = Union[str, Path]

if TYPE_CHECKING:
    from .version import VersionSpec


@dataclass(frozen=True)
class ReleaseDescriptor:
    """One installable version and its binary link for a given platform/arch."""

    resolved_version: str
    """Canonical semver string (e.g. '11.0.9+11')"""

    download_link: Optional[str] = None
    """Direct URL of the binary archive; None until the vendor has resolved it"""

    major: Optional[int] = None
    """Feature release number, when the vendor reports it"""


@dataclass(frozen=True)
class CacheKey:
    """Identity under which an installation is stored in and looked up from the tool cache."""

    distributor_name: str
    package_type: str
    version: str
    architecture: str

    @property
    def tool_name(self) -> str:
        """Tool cache folder name: `Java_<distributor>_<package type>`, spaces removed."""
        return tool_cache_name(self.distributor_name, self.package_type)


@dataclass(frozen=True)
class InstallationResult:
    """Terminal artifact of a successful installation."""

    install_path: str
    """Directory to use as JAVA_HOME"""

    installed_version: str
    """Exact version that was installed or found in the cache"""


@dataclass(frozen=True)
class InstallerOptions:
    """Caller-supplied request for one installation."""

    version: str
    architecture: str
    package_type: str = "jdk"
    distributor: str = "adopt"


def tool_cache_name(distributor_name: str, package_type: str) -> str:
    """Build the tool cache folder name for a distributor display name and package type."""
    return f"{TOOL_FAMILY}_{distributor_name.replace(' ', '')}_{package_type}"


class ReleaseCatalog(ABC):
    """
    Abstract base class for vendor release catalogs.

    A ReleaseCatalog queries one vendor's HTTP API and reports the releases available
    for a platform/arch/package type as ReleaseDescriptor objects.
    """

    distributor: str
    """Canonical distributor identifier (e.g. 'adopt')"""

    display_name: str
    """Vendor name used in tool cache folder names (e.g. 'AdoptOpenJDK')"""

    macos_bundle_layout: bool = False
    """True when macOS archives nest the runtime under `Contents/Home`"""

    @abstractmethod
    def list_releases(
        self,
        spec: "VersionSpec",
        architecture: str,
        package_type: str,
        platform: str,
    ) -> List[ReleaseDescriptor]:
        """
        Retrieve the releases available for the given filters.

        Releases without a binary for the platform/arch are not returned. `spec` may be
        used to narrow the query but implementations must not filter by it otherwise.

        Raises:
            CatalogUnavailable: When the catalog produced no usable page at all.
        """

    @abstractmethod
    def find_release(
        self,
        spec: "VersionSpec",
        architecture: str,
        package_type: str,
        platform: str,
    ) -> ReleaseDescriptor:
        """
        Select the release to install and return it with a usable download link.

        Raises:
            CatalogUnavailable, NoSatisfyingVersion, NoBinaryForPlatform
        """
