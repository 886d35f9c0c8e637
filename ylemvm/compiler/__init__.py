"""Catalog Compiler — build-time embedding of the ylem release catalog."""

from ylemvm.compiler.emitters import (
    EMITTERS,
    DeclarationEmitter,
    PythonEmitter,
    RustEmitter,
)
from ylemvm.compiler.manifest import (
    ManifestCompiler,
    checksum_const_name,
    version_const_name,
)
from ylemvm.compiler.pipeline import (
    DEFAULT_OUTPUT,
    BuildResult,
    acquire_catalog,
    resolve_target_platform,
    run_build,
    write_output,
)

__all__ = [
    "EMITTERS",
    "DeclarationEmitter",
    "PythonEmitter",
    "RustEmitter",
    "ManifestCompiler",
    "checksum_const_name",
    "version_const_name",
    "DEFAULT_OUTPUT",
    "BuildResult",
    "acquire_catalog",
    "resolve_target_platform",
    "run_build",
    "write_output",
]
