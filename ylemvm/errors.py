"""Error hierarchy shared by the catalog, resolver, URL builder and compiler.

Run-time operations raise these instead of returning a default catalog.
The build step wraps any of them in :class:`CompilerError`, which the CLI
turns into a non-zero exit.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ylemvm.models.platform import Platform


class YlemVmError(RuntimeError):
    """Base class for every error raised by ylemvm."""


class PlatformParseError(YlemVmError, ValueError):
    """Raised when a platform identifier is not one of the canonical names."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Unsupported platform identifier: {value!r}")


class UnsupportedPlatformError(YlemVmError):
    """Raised for a recognised platform that has no catalog source or URL grammar."""

    def __init__(self, platform: Platform) -> None:
        self.platform = platform
        super().__init__(f"Platform {platform} is not supported")


class UnsupportedHostError(YlemVmError):
    """Raised when the running host maps to none of the platforms."""


class FetchError(YlemVmError):
    """Raised when the transport fails while acquiring a catalog."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Failed to fetch release list from {source}: {reason}")


class DeserializeError(YlemVmError):
    """Raised for malformed catalog JSON.

    ``source`` names where the document came from (bundled snapshot,
    remote URL, or file override) so the failure can be traced.
    """

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        super().__init__(f"Couldn't parse ylem releases from {source}: {reason}")


class CatalogIOError(YlemVmError):
    """Raised when a pre-fetched catalog file cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"Cannot read release list {self.path}: {reason}")


class ChecksumMismatchError(YlemVmError):
    """Raised when downloaded bytes do not hash to the catalog checksum."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Checksum mismatch: expected {expected}, got {actual}")


class CompilerError(YlemVmError):
    """Fatal Catalog Compiler failure; the build cannot continue."""
