from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from schemabuilder.cli.renderers import (
    JsonRenderer,
    StagePlainRenderer,
    StageRichRenderer,
    run_events,
)
from schemabuilder.core.inspect import inspect_events

console = Console(stderr=True)
out = Console()


def inspect(
    source: str = typer.Argument(
        ...,
        help="JSON Schema file path or http(s) URL.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to schemabuilder.yaml.",
    ),
    project: Path = typer.Option(
        Path("."),
        "--project",
        "-p",
        help="Base directory for relative paths.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable JSON report.",
    ),
) -> None:
    """Show the property tree a JSON Schema parses into."""
    events = inspect_events(source=source, project_dir=project, config_path=config)
    if json_output:
        renderer = JsonRenderer(out)
    else:
        renderer = StageRichRenderer(console, out) if console.is_terminal else StagePlainRenderer(console, out)
    exit_code = run_events(events, renderer)
    raise typer.Exit(code=exit_code)
