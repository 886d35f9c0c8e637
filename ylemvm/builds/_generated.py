"""Embedded ylem build constants.

Generated by ``ylemvm compile``; do not edit.
"""

from __future__ import annotations

from typing import Final

import semver

#: The ylemvm Platform all constants were built for
TARGET_PLATFORM: Final[str] = 'linux-amd64'

#: All available releases for linux-amd64
ALL_YLEM_VERSIONS: Final[tuple[semver.Version, ...]] = ()


def get_checksum(version: semver.Version) -> bytes | None:
    """Get the checksum of a ylem version's binary if it exists."""
    match (
        version.major,
        version.minor,
        version.patch,
        version.prerelease,
        version.build,
    ):
        case _:
            return None
    return bytes.fromhex(checksum)

#: JSON release list
RELEASE_LIST_JSON: Final[str] = '{"builds":[],"releases":{}}'
