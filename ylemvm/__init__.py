"""ylemvm: release catalog, verification and embedding for the ylem compiler.

  - Platform model for the five published ylem targets
  - Release catalog (versions, artifact names, SHA-256 checksums)
  - Per-CPU-family catalog resolution, blocking and async
  - Download URL derivation for published artifacts
  - Catalog Compiler that embeds a catalog as generated constants
"""

__version__ = "0.3.0"
__description__ = "Version manager core for the ylem compiler toolchain"

from ylemvm.core.checksum import verify_checksum
from ylemvm.core.sources import all_releases, blocking_all_releases
from ylemvm.core.urls import artifact_url
from ylemvm.errors import (
    ChecksumMismatchError,
    CompilerError,
    DeserializeError,
    FetchError,
    PlatformParseError,
    UnsupportedHostError,
    UnsupportedPlatformError,
    YlemVmError,
)
from ylemvm.models.platform import Platform
from ylemvm.models.releases import BuildInfo, ReleaseCatalog

__all__ = [
    "Platform",
    "BuildInfo",
    "ReleaseCatalog",
    "all_releases",
    "blocking_all_releases",
    "artifact_url",
    "verify_checksum",
    "YlemVmError",
    "PlatformParseError",
    "UnsupportedPlatformError",
    "UnsupportedHostError",
    "FetchError",
    "DeserializeError",
    "ChecksumMismatchError",
    "CompilerError",
    "__version__",
]
