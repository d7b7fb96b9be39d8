"""
javafetch Install Subsystem

Resolves a requested Java version against a distributor's release catalog and installs
the matching binary into the tool cache.

Core Components:
- interfaces: Data structures and the catalog capability interface
- version: Version normalization and range matching
- resolver: Release selection
- adopt / zulu: Vendor release catalogs
- cache: Tool cache facade
- files: Archive extraction and working directories
- installer: Installation pipeline coordination
"""

from .adopt import AdoptReleaseCatalog
from .cache import ToolCache
from .installer import Installer
from .interfaces import (
    CacheKey,
    InstallationResult,
    InstallerOptions,
    ReleaseCatalog,
    ReleaseDescriptor,
)
from .resolver import ReleaseResolver
from .version import VersionSpec, normalize_version
from .zulu import ZuluReleaseCatalog

__all__ = [
    # Interfaces
    "CacheKey",
    "InstallationResult",
    "InstallerOptions",
    "ReleaseCatalog",
    "ReleaseDescriptor",
    # Catalogs
    "AdoptReleaseCatalog",
    "ZuluReleaseCatalog",
    # Core components
    "Installer",
    "ReleaseResolver",
    "ToolCache",
    "VersionSpec",
    "normalize_version",
]
