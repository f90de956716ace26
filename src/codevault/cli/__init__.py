"""
Codevault CLI - Main application entry point.

This module sets up the Typer CLI application with all subcommands.
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from codevault import __version__
from codevault.cli import capture, copy, delete, edit, export, languages, view
from codevault.cli.errors import ExitCode
from codevault.core.config import load_layered_env

app = typer.Typer(
    name="codevault",
    help="Capture, search and export code snippets from your terminal",
    no_args_is_help=True,
    add_completion=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for all commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"codevault {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    data_file: Path | None = typer.Option(
        None,
        "--data-file",
        help="Snippet collection file (default: ~/.local/share/codevault/codevault.json)",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """
    Codevault - personal code snippet archive.

    Capture code from your terminal, tag it, and find it again later.

    Quick Start:
        cat snippet.py | codevault capture -d "Retry helper" -l Python -t http,retry
        codevault view -s                      # summary of everything
        codevault view -t http -l python       # filter
        codevault copy -i 1 --raw              # just the code
        codevault export -l python -p ./out    # one file per snippet
    """
    # Precedence: OS env > project .env > user .env
    load_layered_env()
    setup_logging(debug)

    ctx.obj = {"debug": debug, "data_file": data_file}


app.command(name="capture")(capture.capture)
app.command(name="view")(view.view)
app.command(name="copy")(copy.copy)
app.command(name="edit")(edit.edit)
app.command(name="delete")(delete.delete)
app.command(name="export")(export.export)
app.command(name="languages")(languages.languages)


def cli_main() -> None:
    """Console-script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(ExitCode.SIGINT)


__all__ = ["app", "cli_main"]
