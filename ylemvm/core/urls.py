"""Artifact URL Builder: where a ylem binary can be downloaded from."""

from __future__ import annotations

import httpx
import semver

from ylemvm.errors import UnsupportedPlatformError
from ylemvm.models.platform import Platform

YLEM_RELEASES_URL = "https://github.com/core-coin/ylem/releases/download"

URL_PLATFORMS = frozenset({Platform.LINUX_AMD64, Platform.LINUX_AARCH64})


def artifact_url(platform: Platform, version: semver.Version, artifact: str) -> httpx.URL:
    """Construct the download URL for ``artifact`` of ``version``.

    Pure projection: nothing is fetched and the artifact is not checked
    for existence.
    """
    if platform not in URL_PLATFORMS:
        raise UnsupportedPlatformError(platform)
    return httpx.URL(f"{YLEM_RELEASES_URL}/{version}/{artifact}")
