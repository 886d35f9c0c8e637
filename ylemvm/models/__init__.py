"""ylemvm data models: the Platform enum and the frozen Pydantic v2 catalog models."""

from ylemvm.models.platform import Platform, detect_platform
from ylemvm.models.releases import (
    CHECKSUM_LENGTH,
    BuildInfo,
    ReleaseCatalog,
    parse_version,
)

__all__ = [
    # platform
    "Platform",
    "detect_platform",
    # releases
    "CHECKSUM_LENGTH",
    "BuildInfo",
    "ReleaseCatalog",
    "parse_version",
]
