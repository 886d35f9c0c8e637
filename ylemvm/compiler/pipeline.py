"""Catalog Compiler build step: platform, catalog, declarations, output.

Linear and single-pass, run once per build:

1. Determine the target platform (``YVM_TARGET_PLATFORM`` or the host).
2. Acquire the catalog according to the ``AcquisitionMode``:
   ``YVM_RELEASES_LIST_JSON`` file, live resolution, or the empty catalog
   when ``YVM_OFFLINE`` disallows network access.
3. Compile declarations with the ``ManifestCompiler``.
4. Write them to the build output.

Every failure is fatal and surfaces as ``CompilerError``; substituting the
empty catalog in offline mode is the only fallback.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ylemvm.compiler.emitters import DeclarationEmitter, PythonEmitter
from ylemvm.compiler.manifest import ManifestCompiler
from ylemvm.config import (
    RELEASES_LIST_JSON_ENV,
    TARGET_PLATFORM_ENV,
    AcquisitionMode,
    YvmSettings,
)
from ylemvm.core.fetchers import fetcher_from_settings
from ylemvm.core.sources import CatalogSourceResolver
from ylemvm.errors import (
    CatalogIOError,
    CompilerError,
    DeserializeError,
    PlatformParseError,
    UnsupportedHostError,
    YlemVmError,
)
from ylemvm.models.platform import Platform
from ylemvm.models.releases import ReleaseCatalog

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = Path(__file__).resolve().parent.parent / "builds" / "_generated.py"


class BuildResult(BaseModel):
    """Summary of one compiler run."""

    model_config = ConfigDict(frozen=True)

    platform: Platform
    mode: AcquisitionMode
    output: Path
    build_count: int
    release_count: int


def resolve_target_platform(settings: YvmSettings) -> Platform:
    """The override platform if set, otherwise the host platform."""
    if settings.target_platform is not None:
        try:
            return Platform.parse(settings.target_platform)
        except PlatformParseError as exc:
            raise CompilerError(f"Invalid {TARGET_PLATFORM_ENV}: {exc}") from exc
    try:
        return Platform.current()
    except UnsupportedHostError as exc:
        raise CompilerError(str(exc)) from exc


def acquire_catalog(
    settings: YvmSettings,
    platform: Platform,
    resolver: CatalogSourceResolver | None = None,
) -> ReleaseCatalog:
    """Obtain the catalog to compile, following ``settings.acquisition_mode``."""
    mode = settings.acquisition_mode
    logger.info("Acquiring ylem release catalog (%s)", mode.value)

    if mode is AcquisitionMode.FROM_FILE:
        path = settings.releases_list_json
        try:
            return ReleaseCatalog.from_file(path)
        except CatalogIOError as exc:
            raise CompilerError(
                f"{RELEASES_LIST_JSON_ENV} defined, but cannot read the file referenced: {exc}"
            ) from exc
        except DeserializeError as exc:
            raise CompilerError(
                f"Failed to parse the JSON from {RELEASES_LIST_JSON_ENV} file: {exc}"
            ) from exc

    if mode is AcquisitionMode.EMPTY:
        logger.warning("Network access disallowed; compiling an empty release catalog")
        return ReleaseCatalog.empty()

    if resolver is None:
        resolver = CatalogSourceResolver(fetcher_from_settings(settings))
    try:
        return resolver.blocking_all_releases(platform)
    except YlemVmError as exc:
        raise CompilerError(f"Failed to fetch releases: {exc}") from exc


def write_output(text: str, output: Path) -> None:
    """Replace ``output`` with ``text`` atomically."""
    output = Path(output)
    tmp = output.with_name(f".{output.name}.tmp")
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, output)
    except OSError as exc:
        raise CompilerError(f"Cannot write build output {output}: {exc}") from exc


def run_build(
    settings: YvmSettings | None = None,
    output: Path = DEFAULT_OUTPUT,
    *,
    emitter_factory: Callable[[], DeclarationEmitter] = PythonEmitter,
    resolver: CatalogSourceResolver | None = None,
) -> BuildResult:
    """Run the whole build step and return what was written.

    ``settings`` defaults to a fresh read of the environment.
    """
    settings = settings if settings is not None else YvmSettings()
    platform = resolve_target_platform(settings)
    logger.info("Generating ylem build constants for %s", platform)

    catalog = acquire_catalog(settings, platform, resolver)
    text = ManifestCompiler(emitter_factory).compile(catalog, platform)
    write_output(text, output)
    logger.info("Wrote %s", output)

    return BuildResult(
        platform=platform,
        mode=settings.acquisition_mode,
        output=Path(output),
        build_count=len(catalog.builds),
        release_count=len(catalog.releases),
    )
