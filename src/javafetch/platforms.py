"""
Host platform detection and vendor vocabulary mapping.

Every OS and architecture decision is made here; the rest of the package only
sees a HostPlatform value injected at Installer construction.
"""

import platform
import sys
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from javafetch.constants import (
    DISTRIBUTOR_ADOPT,
    DISTRIBUTOR_ZULU,
    TAR_GZ_EXTENSION,
    ZIP_EXTENSION,
)

HOST_MACOS = "darwin"
HOST_WINDOWS = "win32"
HOST_LINUX = "linux"

_PLATFORM_NAMES: Dict[str, Dict[str, str]] = {
    DISTRIBUTOR_ADOPT: {HOST_MACOS: "mac", HOST_WINDOWS: "windows"},
    DISTRIBUTOR_ZULU: {HOST_MACOS: "macos", HOST_WINDOWS: "windows"},
}

_MACHINE_ARCHITECTURES = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "armv7l": "arm",
    "arm": "arm",
}

# Zulu describes an architecture as (arch, hw_bitness)
_ZULU_ARCHITECTURES: Dict[str, Tuple[str, str]] = {
    "x64": ("x86", "64"),
    "x86": ("x86", "32"),
    "aarch64": ("arm", "64"),
    "arm": ("arm", "32"),
}


@dataclass(frozen=True)
class HostPlatform:
    """The operating system and architecture the installation is for."""

    os: str
    """Host OS identifier as reported by sys.platform ('linux', 'darwin', 'win32')"""

    arch: str
    """Architecture in installer vocabulary ('x64', 'x86', 'aarch64', 'arm')"""

    @property
    def is_macos(self) -> bool:
        return self.os == HOST_MACOS


def default_architecture(machine: Optional[str] = None) -> str:
    """
    Translate a machine identifier (platform.machine() by default) into installer vocabulary.

    Unknown identifiers are returned lower-cased and unchanged.
    """
    machine = (machine if machine is not None else platform.machine()).lower()
    return _MACHINE_ARCHITECTURES.get(machine, machine)


def detect_host(arch: Optional[str] = None) -> HostPlatform:
    """Capture the running platform, optionally overriding the architecture."""
    os_name = sys.platform
    if os_name.startswith("linux"):
        os_name = HOST_LINUX
    return HostPlatform(os=os_name, arch=arch or default_architecture())


def map_platform(distributor: str, host_os: str) -> str:
    """
    Return the vendor's name for the host OS.

    Parameters:
        distributor (str): Canonical distributor identifier.
        host_os (str): Host OS identifier ('linux', 'darwin', 'win32').

    Returns:
        str: The vendor-specific OS name, or `host_os` unchanged when the vendor uses the host value.
    """
    return _PLATFORM_NAMES.get(distributor, {}).get(host_os, host_os)


def map_architecture(distributor: str, arch: str) -> Tuple[str, Optional[str]]:
    """
    Return the vendor's (architecture, bitness) pair for an installer architecture.

    Bitness is None for vendors that encode it in the architecture name.
    """
    if distributor == DISTRIBUTOR_ZULU:
        return _ZULU_ARCHITECTURES.get(arch, (arch, "64"))
    return arch, None


def archive_extension(host_os: str) -> str:
    """Archive format the vendors publish for this OS."""
    return ZIP_EXTENSION if host_os == HOST_WINDOWS else TAR_GZ_EXTENSION
