"""Manifest compiler — turns a release catalog into constant declarations.

For every build, in listing order:

- ``YLEM_VERSION_<major>_<minor>_<patch>[_<pre>][_BUILD_<build>]`` holding
  the version,
- the same name suffixed ``_CHECKSUM`` holding its hex checksum,

followed by ``ALL_YLEM_VERSIONS``, a ``get_checksum`` lookup over every
checksum constant, ``TARGET_PLATFORM`` and ``RELEASE_LIST_JSON``. The same
catalog and platform always produce byte-identical text.

Each build needs its own pair of names. A catalog where two builds map to
the same name cannot be compiled and raises ``CompilerError``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable

import semver

from ylemvm.compiler.emitters import DeclarationEmitter, PythonEmitter
from ylemvm.core.checksum import encode_hex
from ylemvm.errors import CompilerError
from ylemvm.models.platform import Platform
from ylemvm.models.releases import ReleaseCatalog

logger = logging.getLogger(__name__)

_NON_IDENTIFIER = re.compile(r"[^0-9A-Za-z]+")


def _sanitize(label: str) -> str:
    return _NON_IDENTIFIER.sub("_", label).strip("_").upper()


def version_const_name(version: semver.Version) -> str:
    name = f"YLEM_VERSION_{version.major}_{version.minor}_{version.patch}"
    if version.prerelease:
        name += f"_{_sanitize(version.prerelease)}"
    if version.build:
        name += f"_BUILD_{_sanitize(version.build)}"
    return name


def checksum_const_name(version: semver.Version) -> str:
    return f"{version_const_name(version)}_CHECKSUM"


class ManifestCompiler:
    """Maps a catalog onto declarations through a ``DeclarationEmitter``.

    Parameters
    ----------
    emitter_factory:
        Builds a fresh emitter per ``compile`` call. Defaults to Python.
    """

    def __init__(
        self, emitter_factory: Callable[[], DeclarationEmitter] = PythonEmitter
    ) -> None:
        self._emitter_factory = emitter_factory

    def compile(self, catalog: ReleaseCatalog, platform: Platform) -> str:
        emitter = self._emitter_factory()
        self._add_platform_const(emitter, platform)
        self._add_build_info_constants(emitter, catalog, platform)
        self._add_release_list(emitter, catalog)
        logger.info(
            "Compiled %d ylem builds for %s", len(catalog.builds), platform
        )
        return emitter.render()

    @staticmethod
    def _add_platform_const(emitter: DeclarationEmitter, platform: Platform) -> None:
        emitter.declare_constant(
            "TARGET_PLATFORM",
            emitter.string_type,
            emitter.string_literal(str(platform)),
            doc="The ylemvm Platform all constants were built for",
        )

    @staticmethod
    def _add_build_info_constants(
        emitter: DeclarationEmitter, catalog: ReleaseCatalog, platform: Platform
    ) -> None:
        version_names: list[str] = []
        checksum_arms: list[tuple[semver.Version, str]] = []
        declared: dict[str, semver.Version] = {}

        for build in catalog.builds:
            version = build.version
            version_name = version_const_name(version)
            checksum_name = checksum_const_name(version)
            for name in (version_name, checksum_name):
                if name in declared:
                    raise CompilerError(
                        f"Builds {declared[name]} and {version} both map to constant {name}"
                    )
                declared[name] = version

            emitter.declare_constant(
                version_name, emitter.version_type, emitter.version_literal(version)
            )
            version_names.append(version_name)

            emitter.declare_constant(
                checksum_name,
                emitter.string_type,
                emitter.string_literal(encode_hex(build.sha256)),
            )
            checksum_arms.append((version, checksum_name))

        emitter.declare_raw(
            emitter.version_array(f"All available releases for {platform}", version_names)
        )
        emitter.declare_raw(
            emitter.checksum_lookup(
                "Get the checksum of a ylem version's binary if it exists.",
                checksum_arms,
            )
        )

    @staticmethod
    def _add_release_list(emitter: DeclarationEmitter, catalog: ReleaseCatalog) -> None:
        emitter.declare_constant(
            "RELEASE_LIST_JSON",
            emitter.string_type,
            emitter.string_literal(catalog.to_json()),
            doc="JSON release list",
        )
