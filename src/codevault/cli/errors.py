"""
Standardized error handling and exit codes for the codevault CLI.

Maps the core error taxonomy onto exit codes and prints consistent,
actionable messages.
"""

from enum import IntEnum
from typing import NoReturn

import typer
from rich.console import Console

from codevault.core.snippets.errors import (
    SnippetError,
    SnippetNotFoundError,
    SnippetPersistenceError,
    SnippetStoreCorruptedError,
    SnippetValidationError,
)

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for codevault operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Storage failure or partially failed export."""

    USER_ERROR = 2
    """Unknown snippet or invalid input (actionable by user)."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Snippet ID '7' does not exist in the collection",
        ...     solution="codevault view --summary",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def exit_with_error(error: SnippetError) -> NoReturn:
    """Report a core error and exit with the matching code."""
    if isinstance(error, SnippetNotFoundError):
        print_error(str(error), solution="codevault view --summary  # list stored snippets")
        raise typer.Exit(ExitCode.USER_ERROR)

    if isinstance(error, SnippetValidationError):
        print_error(str(error), solution="codevault <command> --help")
        raise typer.Exit(ExitCode.USER_ERROR)

    if isinstance(error, SnippetStoreCorruptedError):
        print_error(
            "Snippet collection is corrupted",
            reason=str(error),
            solution="restore the data file from a backup or point CODEVAULT_DATA_FILE elsewhere",
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if isinstance(error, SnippetPersistenceError):
        print_error("Snippet collection could not be accessed", reason=str(error))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    print_error(str(error))
    raise typer.Exit(ExitCode.GENERAL_ERROR)


def print_missing_id_error(command: str) -> NoReturn:
    """Print usage help when a command needs --id and got none."""
    print_error(
        "Missing snippet ID",
        reason="Provide a snippet ID using the -i or --id flag",
        solution=f"codevault {command} -i <ID>",
    )
    raise typer.Exit(ExitCode.USER_ERROR)
