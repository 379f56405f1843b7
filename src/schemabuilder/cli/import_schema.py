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
from schemabuilder.core.import_schema import import_events

console = Console(stderr=True)
out = Console()


def import_schema(
    source: str = typer.Argument(
        ...,
        help="JSON Schema file path or http(s) URL.",
    ),
    output: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the property tree here instead of stdout.",
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
    """Import a JSON Schema into a property tree file."""
    events = import_events(
        source=source,
        project_dir=project,
        config_path=config,
        output_path=output,
    )
    if json_output:
        renderer = JsonRenderer(out)
    else:
        renderer = StageRichRenderer(console, out) if console.is_terminal else StagePlainRenderer(console, out)
    exit_code = run_events(events, renderer)
    raise typer.Exit(code=exit_code)
