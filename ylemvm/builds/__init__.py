"""Embedded ylem builds: constants produced by the Catalog Compiler.

``ylemvm compile`` regenerates ``_generated.py`` for the target platform;
the copy shipped in the package was compiled offline and is empty.
"""

from __future__ import annotations

import threading

from ylemvm.builds._generated import (
    ALL_YLEM_VERSIONS,
    RELEASE_LIST_JSON,
    TARGET_PLATFORM,
    get_checksum,
)
from ylemvm.models.releases import ReleaseCatalog

_catalog: ReleaseCatalog | None = None
_catalog_lock = threading.Lock()


def release_catalog() -> ReleaseCatalog:
    """The embedded release list, parsed once and copied per call."""
    global _catalog
    if _catalog is None:
        with _catalog_lock:
            if _catalog is None:
                _catalog = ReleaseCatalog.from_json(
                    RELEASE_LIST_JSON, source="embedded RELEASE_LIST_JSON"
                )
    return _catalog.model_copy(deep=True)


__all__ = [
    "ALL_YLEM_VERSIONS",
    "RELEASE_LIST_JSON",
    "TARGET_PLATFORM",
    "get_checksum",
    "release_catalog",
]
