"""Tests for the ManifestCompiler and its declaration emitters."""

from __future__ import annotations

import hashlib
import json
from typing import Any

import pytest
import semver

from ylemvm.compiler.emitters import PythonEmitter, RustEmitter
from ylemvm.compiler.manifest import (
    ManifestCompiler,
    checksum_const_name,
    version_const_name,
)
from ylemvm.errors import CompilerError
from ylemvm.models.platform import Platform
from ylemvm.models.releases import ReleaseCatalog


def _exec(source: str) -> dict[str, Any]:
    namespace: dict[str, Any] = {}
    exec(compile(source, "<generated>", "exec"), namespace)
    return namespace


def _builds_catalog(*versions: str) -> ReleaseCatalog:
    return ReleaseCatalog.from_json(
        json.dumps(
            {
                "builds": [
                    {"version": v, "sha256": hashlib.sha256(v.encode()).hexdigest()}
                    for v in versions
                ],
                "releases": {},
            }
        )
    )


class TestNaming:
    def test_constant_names(self):
        v = semver.Version(0, 8, 7)
        assert version_const_name(v) == "YLEM_VERSION_0_8_7"
        assert checksum_const_name(v) == "YLEM_VERSION_0_8_7_CHECKSUM"

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0.9.0-rc.1", "YLEM_VERSION_0_9_0_RC_1"),
            ("0.9.0-alpha-2", "YLEM_VERSION_0_9_0_ALPHA_2"),
            ("0.8.7+commit.e28d00a7", "YLEM_VERSION_0_8_7_BUILD_COMMIT_E28D00A7"),
            ("1.0.0-rc.1+nightly", "YLEM_VERSION_1_0_0_RC_1_BUILD_NIGHTLY"),
        ],
    )
    def test_prerelease_and_build_metadata_in_name(self, text: str, expected: str):
        assert version_const_name(semver.Version.parse(text)) == expected

    def test_release_and_prerelease_names_differ(self):
        names = {
            version_const_name(semver.Version.parse("0.9.0-rc.1")),
            version_const_name(semver.Version.parse("0.9.0")),
        }
        assert len(names) == 2


class TestPythonOutput:
    def test_generated_module_executes(self, catalog: ReleaseCatalog):
        module = _exec(ManifestCompiler().compile(catalog, Platform.LINUX_AMD64))
        assert module["TARGET_PLATFORM"] == "linux-amd64"
        assert module["YLEM_VERSION_0_8_7"] == semver.Version(0, 8, 7)
        assert module["YLEM_VERSION_0_8_6_CHECKSUM"] == catalog.get_checksum("0.8.6").hex()
        assert module["ALL_YLEM_VERSIONS"] == (
            semver.Version(0, 8, 6),
            semver.Version(0, 8, 7),
        )

    def test_generated_lookup(self, catalog: ReleaseCatalog):
        module = _exec(ManifestCompiler().compile(catalog, Platform.LINUX_AMD64))
        get_checksum = module["get_checksum"]
        assert get_checksum(semver.Version(0, 8, 7)) == catalog.get_checksum("0.8.7")
        assert get_checksum(semver.Version(0, 9, 0)) is None

    def test_embedded_json_round_trips(self, catalog: ReleaseCatalog):
        module = _exec(ManifestCompiler().compile(catalog, Platform.LINUX_AMD64))
        assert module["RELEASE_LIST_JSON"] == catalog.to_json()
        embedded = ReleaseCatalog.from_json(module["RELEASE_LIST_JSON"])
        assert embedded.model_dump() == catalog.model_dump()

    def test_empty_catalog(self):
        source = ManifestCompiler().compile(ReleaseCatalog.empty(), Platform.LINUX_AARCH64)
        module = _exec(source)
        assert module["ALL_YLEM_VERSIONS"] == ()
        assert module["get_checksum"](semver.Version(0, 8, 7)) is None
        assert module["RELEASE_LIST_JSON"] == '{"builds":[],"releases":{}}'
        assert not [name for name in module if name.startswith("YLEM_VERSION_")]

    def test_constants_follow_build_order(self):
        digest = hashlib.sha256(b"x").hexdigest()
        catalog = ReleaseCatalog.from_json(
            json.dumps(
                {
                    "builds": [
                        {"version": "0.8.7", "sha256": digest},
                        {"version": "0.8.6", "sha256": digest},
                    ],
                    "releases": {},
                }
            )
        )
        source = ManifestCompiler().compile(catalog, Platform.LINUX_AMD64)
        assert source.index("YLEM_VERSION_0_8_7:") < source.index("YLEM_VERSION_0_8_6:")
        assert _exec(source)["ALL_YLEM_VERSIONS"] == (
            semver.Version(0, 8, 7),
            semver.Version(0, 8, 6),
        )

    def test_prerelease_version_literal(self):
        digest = hashlib.sha256(b"rc").hexdigest()
        catalog = ReleaseCatalog.from_json(
            json.dumps({"builds": [{"version": "0.9.0-rc.1", "sha256": digest}], "releases": {}})
        )
        module = _exec(ManifestCompiler().compile(catalog, Platform.LINUX_AMD64))
        assert str(module["YLEM_VERSION_0_9_0_RC_1"]) == "0.9.0-rc.1"

    def test_prerelease_and_release_kept_apart(self):
        catalog = _builds_catalog("0.9.0-rc.1", "0.9.0")
        module = _exec(ManifestCompiler().compile(catalog, Platform.LINUX_AMD64))
        assert [str(v) for v in module["ALL_YLEM_VERSIONS"]] == ["0.9.0-rc.1", "0.9.0"]
        get_checksum = module["get_checksum"]
        assert get_checksum(semver.Version.parse("0.9.0")) == catalog.get_checksum("0.9.0")
        assert get_checksum(semver.Version.parse("0.9.0-rc.1")) == catalog.get_checksum(
            "0.9.0-rc.1"
        )
        assert get_checksum(semver.Version.parse("0.9.0")) != get_checksum(
            semver.Version.parse("0.9.0-rc.1")
        )

    def test_lookup_matches_build_metadata(self):
        catalog = _builds_catalog("0.8.7+commit.e28d00a7")
        get_checksum = _exec(ManifestCompiler().compile(catalog, Platform.LINUX_AMD64))[
            "get_checksum"
        ]
        assert get_checksum(semver.Version.parse("0.8.7+commit.e28d00a7")) is not None
        assert get_checksum(semver.Version.parse("0.8.7")) is None

    @pytest.mark.parametrize(
        "versions",
        [
            ("0.8.7", "0.8.7"),
            ("0.9.0-rc.1", "0.9.0-rc-1"),
        ],
    )
    def test_colliding_constant_names_rejected(self, versions: tuple[str, ...]):
        with pytest.raises(CompilerError, match="YLEM_VERSION_"):
            ManifestCompiler().compile(_builds_catalog(*versions), Platform.LINUX_AMD64)

    def test_deterministic(self, make_list_document):
        document = make_list_document(["0.8.5", "0.8.7", "0.8.6"])
        first = ManifestCompiler().compile(ReleaseCatalog.from_json(document), Platform.LINUX_AMD64)
        second = ManifestCompiler().compile(ReleaseCatalog.from_json(document), Platform.LINUX_AMD64)
        assert first == second

    def test_checksums_never_prefixed(self, catalog: ReleaseCatalog):
        source = ManifestCompiler().compile(catalog, Platform.LINUX_AMD64)
        assert "0x" not in source


class TestRustOutput:
    @pytest.fixture
    def rust_source(self, catalog: ReleaseCatalog) -> str:
        return ManifestCompiler(RustEmitter).compile(catalog, Platform.LINUX_AARCH64)

    def test_platform_const(self, rust_source: str):
        assert 'pub const TARGET_PLATFORM: &str = r#"linux-aarch64"#;' in rust_source

    def test_version_constants(self, rust_source: str):
        assert (
            "pub const YLEM_VERSION_0_8_7: semver::Version = semver::Version::new(0,8,7);"
            in rust_source
        )

    def test_static_array_length(self, rust_source: str):
        assert "pub static ALL_YLEM_VERSIONS: [semver::Version; 2] = [" in rust_source

    def test_match_arms(self, rust_source: str):
        assert "(0,8,6) => YLEM_VERSION_0_8_6_CHECKSUM," in rust_source
        assert "_ => return None" in rust_source

    def test_raw_json_string(self, rust_source: str, catalog: ReleaseCatalog):
        assert f'r#"{catalog.to_json()}"#' in rust_source

    def test_string_literal_falls_back_to_escaped(self):
        assert RustEmitter().string_literal('a"#b') == '"a\\"#b"'

    def test_escaped_fallback_keeps_non_ascii(self):
        assert RustEmitter().string_literal('\u00e9"#') == '"\u00e9\\"#"'

    def test_prerelease_versions_rejected(self):
        with pytest.raises(CompilerError):
            ManifestCompiler(RustEmitter).compile(
                _builds_catalog("0.9.0-rc.1"), Platform.LINUX_AMD64
            )


class TestPythonEmitter:
    def test_constant_with_doc(self):
        emitter = PythonEmitter()
        emitter.declare_constant("NAME", "str", "'x'", doc="A name")
        assert "#: A name\nNAME: Final[str] = 'x'" in emitter.render()

    def test_raw_blocks_in_order(self):
        emitter = PythonEmitter()
        emitter.declare_raw("A = 1\n")
        emitter.declare_raw("B = 2")
        rendered = emitter.render()
        assert rendered.index("A = 1") < rendered.index("B = 2")
        assert rendered.endswith("B = 2\n")
