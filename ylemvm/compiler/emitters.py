"""Declaration emitters — target-language syntax for compiled catalogs.

The manifest compiler decides *what* to declare; an emitter decides how a
constant, a version array or a checksum lookup is spelled in one language.
``PythonEmitter`` produces an importable module, ``RustEmitter`` produces
the declarations a Rust build script includes.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Protocol

import semver

from ylemvm.errors import CompilerError


class DeclarationEmitter(Protocol):
    """Collects declarations and renders them as one source text."""

    version_type: str
    string_type: str

    def declare_constant(
        self, name: str, type_name: str, value: str, *, doc: str | None = None
    ) -> None:
        """Declare a typed constant whose value is an expression literal."""
        ...

    def declare_raw(self, block: str) -> None:
        """Append a pre-formatted block verbatim."""
        ...

    def version_literal(self, version: semver.Version) -> str: ...

    def string_literal(self, text: str) -> str: ...

    def version_array(self, doc: str, names: Sequence[str]) -> str:
        """Block declaring ``ALL_YLEM_VERSIONS`` from constant names."""
        ...

    def checksum_lookup(
        self, doc: str, arms: Sequence[tuple[semver.Version, str]]
    ) -> str:
        """Block declaring ``get_checksum`` with one arm per version constant."""
        ...

    def render(self) -> str: ...


class _BaseEmitter:
    def __init__(self) -> None:
        self._blocks: list[str] = []

    def declare_raw(self, block: str) -> None:
        self._blocks.append(block.rstrip("\n"))

    def _header(self) -> str:
        return ""

    def render(self) -> str:
        parts = [self._header(), *self._blocks]
        return "\n\n".join(part for part in parts if part) + "\n"


class PythonEmitter(_BaseEmitter):
    """Emits a Python module; constants are annotated ``Final``."""

    version_type = "semver.Version"
    string_type = "str"

    def _header(self) -> str:
        return (
            '"""Embedded ylem build constants.\n\n'
            'Generated by ``ylemvm compile``; do not edit.\n"""\n\n'
            "from __future__ import annotations\n\n"
            "from typing import Final\n\n"
            "import semver"
        )

    def declare_constant(
        self, name: str, type_name: str, value: str, *, doc: str | None = None
    ) -> None:
        line = f"{name}: Final[{type_name}] = {value}"
        self.declare_raw(f"#: {doc}\n{line}" if doc else line)

    def version_literal(self, version: semver.Version) -> str:
        if version.prerelease is None and version.build is None:
            return f"semver.Version({version.major}, {version.minor}, {version.patch})"
        return f"semver.Version.parse({str(version)!r})"

    def string_literal(self, text: str) -> str:
        return repr(text)

    def version_array(self, doc: str, names: Sequence[str]) -> str:
        body = "".join(f"    {name},\n" for name in names)
        value = f"(\n{body})" if names else "()"
        return (
            f"#: {doc}\n"
            f"ALL_YLEM_VERSIONS: Final[tuple[semver.Version, ...]] = {value}"
        )

    def checksum_lookup(
        self, doc: str, arms: Sequence[tuple[semver.Version, str]]
    ) -> str:
        # Match the whole version: releases and pre-releases share a triple.
        cases = "".join(
            f"        case ({v.major}, {v.minor}, {v.patch}, {v.prerelease!r}, {v.build!r}):\n"
            f"            checksum = {name}\n"
            for v, name in arms
        )
        return (
            "\n"
            "def get_checksum(version: semver.Version) -> bytes | None:\n"
            f'    """{doc}"""\n'
            "    match (\n"
            "        version.major,\n"
            "        version.minor,\n"
            "        version.patch,\n"
            "        version.prerelease,\n"
            "        version.build,\n"
            "    ):\n"
            f"{cases}"
            "        case _:\n"
            "            return None\n"
            "    return bytes.fromhex(checksum)"
        )


class RustEmitter(_BaseEmitter):
    """Emits Rust items for ``include!`` from a build script output."""

    version_type = "semver::Version"
    string_type = "&str"

    def declare_constant(
        self, name: str, type_name: str, value: str, *, doc: str | None = None
    ) -> None:
        line = f"pub const {name}: {type_name} = {value};"
        self.declare_raw(f"/// {doc}\n{line}" if doc else line)

    def version_literal(self, version: semver.Version) -> str:
        # Version::new is the only const constructor; it has no pre-release
        # or build metadata.
        if version.prerelease is not None or version.build is not None:
            raise CompilerError(
                f"Rust constants cannot represent version {version}"
            )
        return f"semver::Version::new({version.major},{version.minor},{version.patch})"

    def string_literal(self, text: str) -> str:
        if '"#' not in text:
            return f'r#"{text}"#'
        return json.dumps(text, ensure_ascii=False)

    def version_array(self, doc: str, names: Sequence[str]) -> str:
        return (
            f"/// {doc}\n"
            f"pub static ALL_YLEM_VERSIONS: [semver::Version; {len(names)}] = [\n"
            + "".join(f"    {name},\n" for name in names)
            + "];"
        )

    def checksum_lookup(
        self, doc: str, arms: Sequence[tuple[semver.Version, str]]
    ) -> str:
        cases = "".join(
            f"        ({v.major},{v.minor},{v.patch}) => {name},\n" for v, name in arms
        )
        return (
            f"/// {doc}\n"
            "pub fn get_checksum(version: &semver::Version) -> Option<Vec<u8>> {\n"
            "    let checksum = match (version.major, version.minor, version.patch) {\n"
            f"{cases}"
            "        _ => return None\n"
            "    };\n"
            '    Some(hex::decode(checksum).expect("valid hex;"))\n'
            "}"
        )


EMITTERS: dict[str, type[_BaseEmitter]] = {
    "python": PythonEmitter,
    "rust": RustEmitter,
}
