"""Catalog fetchers — where a per-architecture release list comes from.

Bridge boundary
---------------
The resolver only depends on the ``CatalogFetcher`` protocol. Two
implementations ship with ylemvm:

1. **Bundled** (default): the snapshot packaged under ``ylemvm/lists``.
   No network access.
2. **Remote**: an HTTP GET of the upstream ``list.json`` via httpx. One
   attempt, no retries; retry policy belongs to the caller.
"""

from __future__ import annotations

import logging
from importlib import resources
from typing import Protocol, runtime_checkable

import httpx

from ylemvm.config import YvmSettings
from ylemvm.errors import FetchError
from ylemvm.models.releases import ReleaseCatalog

logger = logging.getLogger(__name__)


@runtime_checkable
class CatalogFetcher(Protocol):
    """Anything that can produce the release catalog for a CPU family."""

    def fetch(self, arch: str) -> ReleaseCatalog:
        """Return the catalog for ``arch`` or raise a YlemVmError."""
        ...


class BundledCatalogFetcher:
    """Reads the release list snapshot shipped inside the package."""

    def __init__(self, package: str = "ylemvm", directory: str = "lists") -> None:
        self._package = package
        self._directory = directory

    def fetch(self, arch: str) -> ReleaseCatalog:
        source = f"bundled {arch} list"
        resource = resources.files(self._package) / self._directory / f"{arch}.json"
        try:
            data = resource.read_text(encoding="utf-8")
        except OSError as exc:
            raise FetchError(source, str(exc)) from exc
        logger.debug("Loaded %s (%d bytes)", source, len(data))
        return ReleaseCatalog.from_json(data, source=source)


class HttpCatalogFetcher:
    """Fetches ``list.json`` from the upstream release host.

    Parameters
    ----------
    url_template:
        URL with an ``{arch}`` placeholder.
    timeout:
        Seconds handed to httpx for the single request.
    client:
        Optional pre-configured ``httpx.Client`` (tests pass one backed by
        ``httpx.MockTransport``).
    """

    def __init__(
        self,
        url_template: str,
        *,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        self._template = url_template
        self._timeout = timeout
        self._client = client

    def url_for(self, arch: str) -> str:
        return self._template.format(arch=arch)

    def fetch(self, arch: str) -> ReleaseCatalog:
        url = self.url_for(arch)
        logger.info("Fetching ylem release list from %s", url)
        try:
            if self._client is not None:
                response = self._client.get(url)
            else:
                response = httpx.get(url, timeout=self._timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise FetchError(url, str(exc)) from exc
        return ReleaseCatalog.from_json(response.content, source=url)


def fetcher_from_settings(settings: YvmSettings) -> CatalogFetcher:
    """Build the fetcher selected by ``settings.catalog_source``."""
    if settings.catalog_source == "remote":
        return HttpCatalogFetcher(
            settings.remote_list_url, timeout=settings.fetch_timeout_seconds
        )
    return BundledCatalogFetcher()
