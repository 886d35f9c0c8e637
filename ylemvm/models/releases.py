"""Release catalog models — versions, artifact names and checksums.

The JSON document these models read and write looks like::

    {
        "builds": [
            {
                "version": "0.8.7",
                "sha256": "0xcc5c663d1fe17d4eb4aca09253787ac86b8785235fca71d9200569e662677990"
            }
        ],
        "releases": {
            "0.8.7": "ylem-linux-amd64-v0.8.7+commit.e28d00a7",
            "0.8.6": "ylem-linux-amd64-v0.8.6+commit.11564f7e"
        }
    }

Checksums may be ``0x``-prefixed on input but are always emitted as bare
lowercase hex, and ``releases`` is emitted in ascending version order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import semver
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from ylemvm.core.checksum import decode_hex, encode_hex
from ylemvm.errors import CatalogIOError, DeserializeError

CHECKSUM_LENGTH = 32


def parse_version(value: Any) -> semver.Version:
    """Coerce ``value`` to a ``semver.Version``; raises ValueError on bad text."""
    if isinstance(value, semver.Version):
        return value
    if isinstance(value, str):
        return semver.Version.parse(value)
    raise ValueError(f"Expected a semver string, got {type(value).__name__}")


class BuildInfo(BaseModel):
    """SHA-256 fingerprint of one published ylem binary.

    Equality and hashing consider the version only.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    version: semver.Version
    sha256: bytes

    @field_validator("version", mode="before")
    @classmethod
    def _parse_version(cls, value: Any) -> semver.Version:
        return parse_version(value)

    @field_validator("sha256", mode="before")
    @classmethod
    def _decode_sha256(cls, value: Any) -> Any:
        if isinstance(value, str):
            return decode_hex(value)
        return value

    @field_validator("sha256")
    @classmethod
    def _check_length(cls, value: bytes) -> bytes:
        if len(value) != CHECKSUM_LENGTH:
            raise ValueError(
                f"sha256 must be {CHECKSUM_LENGTH} bytes, got {len(value)}"
            )
        return value

    @field_serializer("version")
    def _serialize_version(self, value: semver.Version) -> str:
        return str(value)

    @field_serializer("sha256")
    def _serialize_sha256(self, value: bytes) -> str:
        return encode_hex(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BuildInfo):
            return NotImplemented
        return self.version == other.version

    def __hash__(self) -> int:
        return hash(self.version)


class ReleaseCatalog(BaseModel):
    """Known ylem releases for one CPU family.

    ``builds`` keeps listing order; ``releases`` maps each version to the
    artifact file name. The two need not cover the same versions: lookups
    simply report ``None`` for anything missing. Instances are never
    mutated, callers that share one hand out ``model_copy(deep=True)``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    builds: tuple[BuildInfo, ...] = ()
    releases: dict[semver.Version, str] = Field(default_factory=dict)

    @field_validator("releases", mode="before")
    @classmethod
    def _parse_release_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        # semver.Version equality ignores build metadata, so keys that differ
        # only there would silently merge.
        parsed: dict[semver.Version, Any] = {}
        seen: dict[semver.Version, str] = {}
        for key, artifact in value.items():
            version = parse_version(key)
            if version in seen:
                raise ValueError(
                    f"release versions {seen[version]} and {version} collide"
                )
            seen[version] = str(version)
            parsed[version] = artifact
        return parsed

    @field_serializer("releases")
    def _serialize_releases(self, value: dict[semver.Version, str]) -> dict[str, str]:
        return {str(version): artifact for version, artifact in sorted(value.items())}

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_checksum(self, version: semver.Version | str) -> bytes | None:
        """Checksum of the first build listed for ``version``, if any."""
        wanted = parse_version(version)
        for build in self.builds:
            if build.version == wanted:
                return build.sha256
        return None

    def get_artifact(self, version: semver.Version | str) -> str | None:
        """Artifact name published for ``version``, if any."""
        return self.releases.get(parse_version(version))

    def into_versions(self) -> list[semver.Version]:
        """All released versions in ascending SemVer precedence.

        The returned list belongs to the caller.
        """
        return sorted(self.releases)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @classmethod
    def empty(cls) -> ReleaseCatalog:
        """The offline fallback: no builds and no releases."""
        return cls()

    @classmethod
    def from_json(cls, data: str | bytes, *, source: str = "<memory>") -> ReleaseCatalog:
        """Parse a release list document.

        Raises DeserializeError naming ``source`` on any schema, hex or
        version error.
        """
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise DeserializeError(source, str(exc)) from exc

    @classmethod
    def from_file(cls, path: Path | str) -> ReleaseCatalog:
        """Read a pre-fetched release list from disk.

        Raises CatalogIOError if the file cannot be read and
        DeserializeError if its content is not a valid release list.
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise CatalogIOError(path, exc.strerror or str(exc)) from exc
        return cls.from_json(data, source=str(path))

    def to_json(self) -> str:
        """Compact JSON; ``releases`` ordered by version."""
        return self.model_dump_json()
