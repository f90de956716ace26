"""
Codevault CLI - View command.

Display stored snippets, filtered by id, tags, languages or keyword.
"""

import json

import typer
from rich.console import Console

from codevault.cli.common import get_config, get_service, parse_csv
from codevault.cli.errors import exit_with_error
from codevault.cli.render import render_snippet, render_summary
from codevault.core.snippets.errors import SnippetError, SnippetNotFoundError
from codevault.core.snippets.query import FilterSpec

console = Console()


def view(
    ctx: typer.Context,
    snippet_id: int | None = typer.Option(
        None,
        "--id",
        "-i",
        help="Show only the snippet with this ID (other filters are ignored)",
        min=1,
    ),
    tag: str | None = typer.Option(
        None,
        "--tag",
        "-t",
        help="Search for snippets by tag (comma-separated, any may match)",
    ),
    language: str | None = typer.Option(
        None,
        "--language",
        "-l",
        help="Search for snippets by programming language (comma-separated)",
    ),
    keyword: str | None = typer.Option(
        None,
        "--keyword",
        "-k",
        help="Search descriptions, code and tags for a keyword",
    ),
    summary: bool = typer.Option(
        False,
        "--summary",
        "-s",
        help="Display a summary of snippets instead of full content",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """
    Display a specified snippet, or every snippet matching the filters.

    Filters combine with AND; comma-separated values within --tag or
    --language combine with OR.

    Examples:
        codevault view                       # everything
        codevault view -i 7                  # one snippet
        codevault view -t git,shell -s       # summary of git OR shell snippets
        codevault view -l rust -k loop       # Rust snippets mentioning "loop"
    """
    config = get_config(ctx)
    service = get_service(ctx)

    try:
        spec = FilterSpec(
            id=snippet_id,
            tags=frozenset(parse_csv(tag)),
            languages=frozenset(parse_csv(language)),
            keyword=keyword,
            summary=summary,
        )
        result = service.view(spec)
        if snippet_id is not None and not result.snippets:
            raise SnippetNotFoundError(snippet_id)
    except SnippetError as e:
        exit_with_error(e)

    if json_output:
        typer.echo(json.dumps(result.projection(), indent=2))
        return

    if not result.snippets:
        console.print("[yellow]No snippets found matching criteria.[/yellow]")
        if spec.is_empty():
            console.print(
                '\nCapture your first snippet with: [bold]codevault capture -d "..." -l Python[/bold]'
            )
        return

    if result.summary:
        render_summary(console, result.snippets)
        return

    for snippet in result.snippets:
        render_snippet(console, snippet, theme=config.theme, line_numbers=config.line_numbers)
