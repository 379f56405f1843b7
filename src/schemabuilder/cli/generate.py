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
from schemabuilder.core.generate import generate_events

console = Console(stderr=True)
out = Console()


def generate(
    tree: Path = typer.Argument(
        ...,
        help="Property tree file (YAML or JSON).",
    ),
    output: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        help="Write the JSON Schema here instead of stdout.",
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
    metadata: bool | None = typer.Option(
        None,
        "--metadata/--no-metadata",
        help="Include title, description and version in the output.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable JSON report.",
    ),
) -> None:
    """Generate a JSON Schema from a property tree file."""
    events = generate_events(
        tree_path=tree,
        project_dir=project,
        config_path=config,
        output_path=output,
        include_metadata=metadata,
    )
    if json_output:
        renderer = JsonRenderer(out)
    else:
        renderer = StageRichRenderer(console, out) if console.is_terminal else StagePlainRenderer(console, out)
    exit_code = run_events(events, renderer)
    raise typer.Exit(code=exit_code)
