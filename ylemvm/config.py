"""Environment-driven configuration.

Centralized settings using pydantic-settings. Reads YVM_* environment
variables and an optional .env file in the working directory.

The two build-time overrides keep the names the build step has always
used::

    export YVM_TARGET_PLATFORM=linux-aarch64
    export YVM_RELEASES_LIST_JSON=/path/to/list.json

and ``YVM_OFFLINE=true`` disallows network access for a build, which makes
the compiler fall back to an empty catalog.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

TARGET_PLATFORM_ENV = "YVM_TARGET_PLATFORM"
RELEASES_LIST_JSON_ENV = "YVM_RELEASES_LIST_JSON"
OFFLINE_ENV = "YVM_OFFLINE"

DEFAULT_REMOTE_LIST_URL = (
    "https://raw.githubusercontent.com/nikitastupin/ylem/main/linux/{arch}/list.json"
)


class AcquisitionMode(str, Enum):
    """How the Catalog Compiler obtains its catalog for one build."""

    LIVE_FETCH = "live-fetch"
    FROM_FILE = "from-file"
    EMPTY = "empty"


class YvmSettings(BaseSettings):
    """Settings with YVM_* environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="YVM_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Build-time overrides
    target_platform: str | None = None
    releases_list_json: Path | None = None
    offline: bool = False

    # Catalog source used by the resolver's lazy cells
    catalog_source: Literal["bundled", "remote"] = "bundled"
    remote_list_url: str = DEFAULT_REMOTE_LIST_URL
    fetch_timeout_seconds: float = 30.0

    log_level: str = "INFO"

    @property
    def acquisition_mode(self) -> AcquisitionMode:
        """A file override wins over everything, then the offline flag."""
        if self.releases_list_json is not None:
            return AcquisitionMode.FROM_FILE
        if self.offline:
            return AcquisitionMode.EMPTY
        return AcquisitionMode.LIVE_FETCH


# Module-level singleton: import as `from ylemvm.config import settings`
settings = YvmSettings()
