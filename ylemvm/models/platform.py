"""Supported target platforms for ylem binaries."""

from __future__ import annotations

import platform as _host
from enum import Enum

from ylemvm.errors import PlatformParseError, UnsupportedHostError


class Platform(str, Enum):
    """The (OS, CPU architecture) pairs ylem publishes binaries for."""

    LINUX_AMD64 = "linux-amd64"
    LINUX_AARCH64 = "linux-aarch64"
    MACOSX_AMD64 = "macosx-amd64"
    MACOSX_AARCH64 = "macosx-aarch64"
    WINDOWS_AMD64 = "windows-amd64"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> Platform:
        """Return the platform whose canonical name is exactly ``value``."""
        try:
            return cls(value)
        except ValueError:
            raise PlatformParseError(value) from None

    @classmethod
    def current(cls) -> Platform:
        """Detect the host platform.

        Raises ``UnsupportedHostError`` when the host OS/architecture pair
        has no ylem build at all.
        """
        return detect_platform(_host.system(), _host.machine())

    @property
    def arch(self) -> str:
        """CPU family of the platform (``amd64`` or ``aarch64``)."""
        return self.value.split("-", 1)[1]

    @property
    def os_name(self) -> str:
        return self.value.split("-", 1)[0]


_OS_NAMES = {"linux": "linux", "darwin": "macosx", "windows": "windows"}
_ARCH_NAMES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "aarch64",
    "arm64": "aarch64",
}


def detect_platform(system: str, machine: str) -> Platform:
    """Map ``platform.system()`` / ``platform.machine()`` values to a Platform."""
    os_name = _OS_NAMES.get(system.lower())
    arch = _ARCH_NAMES.get(machine.lower())
    if os_name is None or arch is None:
        raise UnsupportedHostError(f"Unsupported platform {system} for arch {machine}")
    try:
        return Platform(f"{os_name}-{arch}")
    except ValueError:
        raise UnsupportedHostError(
            f"Unsupported platform {system} for arch {machine}"
        ) from None
