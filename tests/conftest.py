"""Shared test fixtures for ylemvm."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from ylemvm.config import YvmSettings
from ylemvm.core.sources import CatalogSourceResolver
from ylemvm.errors import FetchError
from ylemvm.models.releases import ReleaseCatalog


def checksum_hex(label: str) -> str:
    """Deterministic 32-byte checksum for test catalogs."""
    return hashlib.sha256(label.encode()).hexdigest()


class StaticFetcher:
    """CatalogFetcher serving fixed documents and counting fetches."""

    def __init__(self, documents: dict[str, str], *, fail: bool = False) -> None:
        self.documents = documents
        self.fail = fail
        self.calls: list[str] = []

    def fetch(self, arch: str) -> ReleaseCatalog:
        self.calls.append(arch)
        if self.fail:
            raise FetchError(f"static {arch}", "network disabled in tests")
        return ReleaseCatalog.from_json(self.documents[arch], source=f"static {arch}")


@pytest.fixture
def make_list_document() -> Callable[..., str]:
    """Factory fixture: build a release list JSON document."""

    def _factory(
        versions: list[str] | None = None,
        *,
        prefix: str = "0x",
        arch: str = "amd64",
        **overrides: Any,
    ) -> str:
        versions = versions if versions is not None else ["0.8.6", "0.8.7"]
        document: dict[str, Any] = {
            "builds": [
                {"version": v, "sha256": prefix + checksum_hex(f"ylem-{arch}-{v}")}
                for v in versions
            ],
            "releases": {
                v: f"ylem-linux-{arch}-v{v}+commit.e28d00a7" for v in versions
            },
        }
        document.update(overrides)
        return json.dumps(document)

    return _factory


@pytest.fixture
def list_document(make_list_document: Callable[..., str]) -> str:
    """Convenience: a two-release amd64 list document."""
    return make_list_document()


@pytest.fixture
def catalog(list_document: str) -> ReleaseCatalog:
    return ReleaseCatalog.from_json(list_document, source="test")


@pytest.fixture
def list_file(tmp_path: Path, list_document: str) -> Path:
    """A pre-fetched release list on disk."""
    path = tmp_path / "list.json"
    path.write_text(list_document, encoding="utf-8")
    return path


@pytest.fixture
def static_fetcher(make_list_document: Callable[..., str]) -> StaticFetcher:
    return StaticFetcher(
        {
            "amd64": make_list_document(["0.8.6", "0.8.7"], arch="amd64"),
            "aarch64": make_list_document(["0.8.7"], arch="aarch64"),
        }
    )


@pytest.fixture
def resolver(static_fetcher: StaticFetcher) -> CatalogSourceResolver:
    """A resolver backed by the static fetcher, independent of the default one."""
    return CatalogSourceResolver(static_fetcher)


@pytest.fixture
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Callable[..., YvmSettings]:
    """Factory fixture: settings isolated from the caller's YVM_* environment."""
    for field in YvmSettings.model_fields:
        monkeypatch.delenv(f"YVM_{field.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)

    def _factory(**overrides: Any) -> YvmSettings:
        return YvmSettings(**overrides)

    return _factory
