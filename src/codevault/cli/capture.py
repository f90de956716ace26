"""
Codevault CLI - Capture command.

Reads a code snippet from stdin and stores it with a description,
language and tags.
"""

import sys

import typer
from rich.console import Console

from codevault.cli.common import get_service, parse_csv
from codevault.cli.errors import ExitCode, exit_with_error, print_error
from codevault.core.snippets.errors import SnippetError

console = Console()


def read_code_from_stdin() -> str:
    """Read everything up to EOF, showing instructions on a terminal."""
    if sys.stdin.isatty():
        console.print("\n[bold magenta]Capture snippet:[/bold magenta]\n")
        console.print(
            "[cyan]Enter your code snippet "
            "(press [yellow]Return[/yellow], then [yellow]Ctrl+D[/yellow] to finish):[/cyan]"
        )
    return sys.stdin.read()


def capture(
    ctx: typer.Context,
    description: str = typer.Option(
        ...,
        "--description",
        "-d",
        help="Add a description to the provided code snippet",
    ),
    language: str = typer.Option(
        ...,
        "--language",
        "-l",
        help="Select a programming language for syntax highlighting",
    ),
    tag: str = typer.Option(
        "",
        "--tag",
        "-t",
        help="Apply relevant tags to categorize the snippet (comma-separated)",
    ),
) -> None:
    """
    Add a new code snippet to your collection.

    The code is read from stdin until EOF and stored exactly as entered.

    Examples:
        codevault capture -d "Reverse a list" -l Python -t lists,idioms
        cat script.sh | codevault capture -d "Deploy" -l "Shell-Unix-Generic" -t ops
    """
    debug = (ctx.obj or {}).get("debug", False)

    code = read_code_from_stdin()
    if not code.strip():
        print_error("Snippet code cannot be empty", solution="pipe code into codevault capture")
        raise typer.Exit(ExitCode.USER_ERROR)

    tags = parse_csv(tag)
    service = get_service(ctx)
    try:
        snippet = service.capture(description, language, tags, code)
    except SnippetError as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Snippet captured as ID [bold]{snippet.id}[/bold]")

    if debug:
        console.print("\n[dim]Debug info:[/dim]")
        console.print(f"  Data file: {service.store.path}")
        console.print(f"  Tags: {snippet.tags}")
        console.print(f"  Lines: {len(code.splitlines())}")
