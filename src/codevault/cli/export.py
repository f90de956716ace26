"""
Codevault CLI - Export command.

Write snippets to per-language files, selected by id, tags or languages.
"""

from pathlib import Path

import typer
from rich.console import Console

from codevault.cli.common import get_config, get_service, parse_csv
from codevault.cli.errors import ExitCode, exit_with_error
from codevault.cli.render import render_export_report
from codevault.core.snippets.errors import SnippetError, SnippetNotFoundError
from codevault.core.snippets.query import FilterSpec

console = Console()


def export(
    ctx: typer.Context,
    snippet_id: int | None = typer.Option(
        None,
        "--id",
        "-i",
        help="Export a code snippet by its unique ID",
        min=1,
    ),
    tag: str | None = typer.Option(
        None,
        "--tag",
        "-t",
        help="Export snippets by tag (comma-separated)",
    ),
    language: str | None = typer.Option(
        None,
        "--language",
        "-l",
        help="Export snippets by programming language (comma-separated)",
    ),
    path: Path | None = typer.Option(
        None,
        "--path",
        "-p",
        help="Directory where the snippets should be exported",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the confirmation prompt for batch exports",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Replace files that were already exported",
    ),
) -> None:
    """
    Export a code snippet, or a batch selected by tags or languages.

    Each snippet is written to <path>/<id>.<extension>, with the extension
    chosen from its language (".txt" for unsupported languages).

    Examples:
        codevault export -i 3
        codevault export -l python,rust -p ~/snippets
        codevault export -t docker --yes
    """
    config = get_config(ctx)
    service = get_service(ctx)

    try:
        spec = FilterSpec(
            id=snippet_id,
            tags=frozenset(parse_csv(tag)),
            languages=frozenset(parse_csv(language)),
        )
        selection = service.view(spec)
        if snippet_id is not None and not selection.snippets:
            raise SnippetNotFoundError(snippet_id)
    except SnippetError as e:
        exit_with_error(e)

    if not selection.snippets:
        console.print("[yellow]No snippets match the export criteria.[/yellow]")
        return

    if len(selection) > 1 and config.confirm_batch and not yes:
        if not typer.confirm(
            f"Exporting {len(selection)} snippets in language-specific formats. Continue?",
            default=False,
        ):
            console.print("[yellow]Snippet export cancelled[/yellow]")
            return

    if path is None:
        console.print(f"[cyan]No export path specified, using '{config.export_dir}'[/cyan]")

    report = service.export(selection, path, overwrite=overwrite)
    render_export_report(console, report)

    if not report.all_ok:
        console.print(
            f"[red]{len(report.failed)} of {len(report.outcomes)} snippets could not be exported[/red]"
        )
        raise typer.Exit(ExitCode.GENERAL_ERROR)
