"""``ylemvm compile``: run the Catalog Compiler.

Reads the YVM_* overrides once, acquires the catalog, and writes the
generated declarations. Any failure aborts with exit code 1.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ylemvm.compiler.emitters import EMITTERS
from ylemvm.compiler.pipeline import DEFAULT_OUTPUT, run_build
from ylemvm.config import YvmSettings
from ylemvm.errors import CompilerError

console = Console()


def compile_cmd(
    output: Path = typer.Option(
        DEFAULT_OUTPUT,
        "--output",
        "-o",
        help="File to write the generated declarations to.",
    ),
    lang: str = typer.Option(
        "python",
        "--lang",
        help="Target language of the declarations (python or rust).",
    ),
) -> None:
    """Compile the ylem release catalog into embedded constants."""
    emitter = EMITTERS.get(lang)
    if emitter is None:
        console.print(f"[bold red]Unknown language:[/bold red] {lang}")
        raise typer.Exit(code=1)

    try:
        result = run_build(YvmSettings(), output, emitter_factory=emitter)
    except CompilerError as exc:
        console.print(f"[bold red]Build failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    console.print(
        Panel(
            "\n".join([
                f"[bold]Platform:[/bold] {result.platform}",
                f"[bold]Source:[/bold]   {result.mode.value}",
                f"[bold]Builds:[/bold]   {result.build_count}",
                f"[bold]Releases:[/bold] {result.release_count}",
                f"[bold]Output:[/bold]   {result.output}",
            ]),
            title="[bold]ylem build constants[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
