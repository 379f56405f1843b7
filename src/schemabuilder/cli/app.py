import typer
import rich_click  # noqa: F401
from .generate import generate
from .import_schema import import_schema
from .inspect import inspect
from schemabuilder import __version__

app = typer.Typer(
    name="schemabuilder",
    help="Build JSON Schema documents from property trees, and back",
    no_args_is_help=True,
)

@app.command("version")
def version() -> None:
    """Show the schemabuilder version."""
    typer.echo(f"schemabuilder v{__version__}")

app.command()(generate)
app.command("import")(import_schema)
app.command("inspect")(inspect)
