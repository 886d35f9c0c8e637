"""Catalog Source Resolver — maps a platform to its release catalog.

Catalogs are partitioned by CPU family, not by the full platform list:
one catalog for ``aarch64`` and one for ``amd64``. Only the Linux
platforms are routed to them today; every other platform parses fine but
resolves to ``UnsupportedPlatformError``.

Each family's catalog lives in a ``LazyCatalogCell`` that loads it on first
access and then shares it read-only. Callers always receive a deep copy.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from functools import partial

from ylemvm.config import settings
from ylemvm.core.fetchers import CatalogFetcher, fetcher_from_settings
from ylemvm.errors import UnsupportedPlatformError
from ylemvm.models.platform import Platform
from ylemvm.models.releases import ReleaseCatalog

logger = logging.getLogger(__name__)

CATALOG_ARCHES: tuple[str, ...] = ("aarch64", "amd64")

_PLATFORM_ARCH: dict[Platform, str] = {
    Platform.LINUX_AARCH64: "aarch64",
    Platform.LINUX_AMD64: "amd64",
}


def catalog_arch(platform: Platform) -> str:
    """CPU family whose catalog serves ``platform``."""
    try:
        return _PLATFORM_ARCH[platform]
    except KeyError:
        raise UnsupportedPlatformError(platform) from None


class LazyCatalogCell:
    """Thread-safe, initialise-once holder for a shared catalog.

    The first caller runs the loader under the lock; everyone else reuses
    the stored value. A loader failure leaves the cell empty.
    """

    def __init__(self, loader: Callable[[], ReleaseCatalog]) -> None:
        self._loader = loader
        self._lock = threading.Lock()
        self._value: ReleaseCatalog | None = None

    @property
    def initialized(self) -> bool:
        return self._value is not None

    def get(self) -> ReleaseCatalog:
        value = self._value
        if value is None:
            with self._lock:
                if self._value is None:
                    self._value = self._loader()
                value = self._value
        return value


class CatalogSourceResolver:
    """Resolves platforms to independent copies of their family catalog.

    Parameters
    ----------
    fetcher:
        Source of the per-family catalogs. Defaults to the bundled
        snapshots.
    """

    def __init__(self, fetcher: CatalogFetcher | None = None) -> None:
        self._fetcher = fetcher if fetcher is not None else fetcher_from_settings(settings)
        self._cells = {
            arch: LazyCatalogCell(partial(self._load, arch)) for arch in CATALOG_ARCHES
        }

    def _load(self, arch: str) -> ReleaseCatalog:
        logger.debug("Initialising %s release catalog", arch)
        return self._fetcher.fetch(arch)

    def _cell_for(self, platform: Platform) -> LazyCatalogCell:
        return self._cells[catalog_arch(platform)]

    def blocking_all_releases(self, platform: Platform) -> ReleaseCatalog:
        """Return the catalog for ``platform``, blocking until it is loaded."""
        return self._cell_for(platform).get().model_copy(deep=True)

    async def all_releases(self, platform: Platform) -> ReleaseCatalog:
        """Return the catalog for ``platform`` without blocking the event loop.

        A cold cell is loaded on a worker thread; abandoning the await
        leaves the cell either untouched or fully initialised.
        """
        cell = self._cell_for(platform)
        if cell.initialized:
            catalog = cell.get()
        else:
            catalog = await asyncio.to_thread(cell.get)
        return catalog.model_copy(deep=True)


_default_resolver: CatalogSourceResolver | None = None
_default_lock = threading.Lock()


def default_resolver() -> CatalogSourceResolver:
    """Process-wide resolver, built from settings on first use."""
    global _default_resolver
    if _default_resolver is None:
        with _default_lock:
            if _default_resolver is None:
                _default_resolver = CatalogSourceResolver()
    return _default_resolver


def blocking_all_releases(platform: Platform) -> ReleaseCatalog:
    """Blocking form of :func:`all_releases`."""
    return default_resolver().blocking_all_releases(platform)


async def all_releases(platform: Platform) -> ReleaseCatalog:
    """All releases available for ``platform``."""
    return await default_resolver().all_releases(platform)
