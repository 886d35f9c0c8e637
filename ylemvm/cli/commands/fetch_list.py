"""``ylemvm fetch-list ARCH`` — download an upstream release list.

The written file can refresh the bundled snapshot or be handed to a build
through ``YVM_RELEASES_LIST_JSON``.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from ylemvm.config import YvmSettings
from ylemvm.core.fetchers import HttpCatalogFetcher
from ylemvm.core.sources import CATALOG_ARCHES
from ylemvm.errors import YlemVmError

console = Console()


def fetch_list_cmd(
    arch: str = typer.Argument(..., help="CPU family: aarch64 or amd64."),
    output: Path = typer.Option(
        Path("list.json"), "--output", "-o", help="Where to write the list."
    ),
) -> None:
    """Fetch the release list for ARCH and write it as JSON."""
    if arch not in CATALOG_ARCHES:
        console.print(
            f"[bold red]Unknown arch:[/bold red] {arch} "
            f"(expected one of {', '.join(CATALOG_ARCHES)})"
        )
        raise typer.Exit(code=1)

    settings = YvmSettings()
    fetcher = HttpCatalogFetcher(
        settings.remote_list_url, timeout=settings.fetch_timeout_seconds
    )
    try:
        catalog = fetcher.fetch(arch)
    except YlemVmError as exc:
        console.print(f"[bold red]Fetch failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    try:
        output.write_text(catalog.to_json() + "\n", encoding="utf-8")
    except OSError as exc:
        console.print(f"[bold red]Cannot write {output}:[/bold red] {exc}")
        raise typer.Exit(code=1)
    console.print(
        f"[green]Wrote {len(catalog.builds)} builds and "
        f"{len(catalog.releases)} releases to {output}[/green]"
    )
