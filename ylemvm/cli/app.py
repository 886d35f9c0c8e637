"""Main Typer application — imports and registers all CLI commands.

Entry point: ``ylemvm`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from ylemvm.cli.commands.compile import compile_cmd
from ylemvm.cli.commands.fetch_list import fetch_list_cmd
from ylemvm.config import settings
from ylemvm.core.urls import artifact_url
from ylemvm.errors import UnsupportedHostError, YlemVmError
from ylemvm.models.platform import Platform
from ylemvm.models.releases import parse_version

console = Console()

app = typer.Typer(
    name="ylemvm",
    help="ylemvm: resolve, verify and embed ylem compiler releases.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure(
    log_level: str = typer.Option(
        settings.log_level, "--log-level", help="Logging level."
    ),
) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# Register subcommands
app.command(name="compile", help="Generate embedded release constants.")(compile_cmd)
app.command(name="fetch-list", help="Download an upstream release list.")(fetch_list_cmd)


@app.command(name="platform", help="Show the detected host platform.")
def platform_cmd() -> None:
    """Print the canonical name of the host platform."""
    try:
        console.print(str(Platform.current()))
    except UnsupportedHostError as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        raise typer.Exit(code=1)


@app.command(name="url", help="Show the download URL of a ylem artifact.")
def url_cmd(
    platform: str = typer.Argument(..., help="Canonical platform name."),
    version: str = typer.Argument(..., help="Semantic version, e.g. 0.8.7."),
    artifact: str = typer.Argument(..., help="Artifact file name."),
) -> None:
    """Print the URL for ARTIFACT of VERSION on PLATFORM."""
    try:
        url = artifact_url(Platform.parse(platform), parse_version(version), artifact)
    except (YlemVmError, ValueError) as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        raise typer.Exit(code=1)
    console.print(str(url), soft_wrap=True, highlight=False)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
