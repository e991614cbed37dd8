"""Command-Line Interface for lean-doc-export.

Exports the declarations of a host environment dump as the JSON document read
by the documentation site.
"""

from pathlib import Path

import typer
from rich.console import Console

from lean_doc_export.config import Config
from lean_doc_export.extract import (
    EnvironmentLoadError,
    ExportError,
    JsonEnvironment,
    export_json,
)
from lean_doc_export.util import setup_logging

app = typer.Typer(
    name="lean-doc-export",
    help="Export Lean library declarations as JSON for the documentation site.",
    add_completion=False,
    rich_markup_mode="markdown",
)

error_console = Console(stderr=True)


@app.command("export")
def export_command(
    environment: Path | None = typer.Option(
        None,
        "--environment",
        "-e",
        help="Environment dump to export. Defaults to LEAN_DOC_EXPORT_ENVIRONMENT.",
    ),
    to_file: bool = typer.Option(
        False,
        "--to-file",
        help="Write to the configured output file instead of standard output.",
    ),
    plain_text: bool = typer.Option(
        False,
        "--plain-text",
        help="Flatten expressions to plain strings (legacy encoding).",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
):
    """Print the documentation export for an environment dump."""
    setup_logging(verbose)

    try:
        env = JsonEnvironment.load(environment or Config.ENVIRONMENT_PATH)
        export_json(
            env,
            output_file=Config.OUTPUT_FILE if to_file else None,
            plain_text=plain_text,
        )
    except (EnvironmentLoadError, ExportError) as e:
        error_console.print(f"[bold red]error[/bold red]: {e}")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
