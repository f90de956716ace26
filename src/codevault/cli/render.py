"""
Rich rendering for snippets, query results and export reports.
"""

from rich.console import Console, Group
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from codevault.core.snippets.export import ExportReport, ExportStatus
from codevault.core.snippets.languages import Language, lexer_for
from codevault.core.snippets.models import Snippet


def format_timestamp(snippet: Snippet) -> str:
    return snippet.created_at.strftime("%Y-%m-%d %H:%M:%S %z").strip()


def highlighted(code: str, language: str, theme: str = "monokai", line_numbers: bool = False) -> Syntax:
    """Syntax-highlighted code; unknown languages render as plain text."""
    return Syntax(
        code.rstrip("\n"),
        lexer_for(language),
        theme=theme,
        line_numbers=line_numbers,
        word_wrap=True,
    )


def _metadata(snippet: Snippet) -> Table:
    grid = Table.grid(padding=(0, 1))
    grid.add_column(style="bold yellow")
    grid.add_column(style="magenta")
    grid.add_row("ID:", str(snippet.id))
    grid.add_row("Tags:", ", ".join(snippet.tags) or "-")
    grid.add_row("Created:", format_timestamp(snippet))
    if snippet.language:
        grid.add_row("Language:", snippet.language)
    if snippet.description:
        grid.add_row("Description:", snippet.description)
    return grid


def render_snippet(
    console: Console, snippet: Snippet, theme: str = "monokai", line_numbers: bool = False
) -> None:
    """Full view: metadata and highlighted code in one panel."""
    body = Group(
        _metadata(snippet),
        Text("Code:", style="bold yellow"),
        highlighted(snippet.code, snippet.language, theme, line_numbers),
    )
    console.print(Panel(body, border_style="blue", expand=False))


def render_summary(console: Console, snippets: list[Snippet]) -> None:
    """Summary view: one table row per snippet, no code."""
    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="magenta", justify="right")
    table.add_column("Tags", style="cyan")
    table.add_column("Created", style="dim")
    table.add_column("Description")

    for snippet in snippets:
        table.add_row(
            str(snippet.id),
            ", ".join(snippet.tags),
            format_timestamp(snippet),
            snippet.description,
        )

    console.print(table)


_STATUS_STYLE = {
    ExportStatus.WRITTEN: "[green]written[/green]",
    ExportStatus.SKIPPED: "[yellow]skipped[/yellow]",
    ExportStatus.FAILED: "[red]failed[/red]",
}


def render_export_report(console: Console, report: ExportReport) -> None:
    """Per-snippet export outcomes."""
    table = Table(show_header=True, header_style="bold", title=f"Export to {report.destination}")
    table.add_column("ID", style="magenta", justify="right")
    table.add_column("Status")
    table.add_column("File")
    table.add_column("Detail", style="dim")

    for outcome in report.outcomes:
        detail = outcome.error or ""
        if outcome.status == ExportStatus.SKIPPED:
            detail = "already exported"
        table.add_row(
            str(outcome.snippet_id),
            _STATUS_STYLE[outcome.status],
            str(outcome.path),
            detail,
        )

    console.print(table)


def render_languages(console: Console, languages: list[Language]) -> None:
    table = Table(show_header=True, header_style="bold", title="Supported Languages")
    table.add_column("Language", style="bold yellow")
    table.add_column("Extension", style="cyan")
    for lang in languages:
        table.add_row(lang.name, f".{lang.extension}")
    console.print(table)
