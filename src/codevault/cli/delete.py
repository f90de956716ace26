"""
Codevault CLI - Delete command.

Remove one or more snippets by id. Surviving snippets keep their ids.
"""

import typer
from rich.console import Console

from codevault.cli.common import get_config, get_service, parse_ids
from codevault.cli.errors import exit_with_error, print_missing_id_error
from codevault.core.snippets.errors import SnippetError, SnippetNotFoundError

console = Console()


def delete(
    ctx: typer.Context,
    ids: str | None = typer.Option(
        None,
        "--id",
        "-i",
        help="ID(s) of the snippets to delete, separated by commas",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip the confirmation prompt",
    ),
) -> None:
    """
    Remove one or more code snippets by their IDs.

    Examples:
        codevault delete -i 7
        codevault delete -i 3,4,9 --yes
    """
    if ids is None:
        print_missing_id_error("delete")

    snippet_ids = parse_ids(ids)
    config = get_config(ctx)
    service = get_service(ctx)

    try:
        # Check every id up front so nothing is asked about unknown snippets
        existing = {s.id for s in service.store.all()}
        missing = [i for i in snippet_ids if i not in existing]
        if missing:
            raise SnippetNotFoundError(missing)

        if config.confirm_batch and not yes:
            noun = "snippet" if len(snippet_ids) == 1 else "snippets"
            joined = ", ".join(str(i) for i in snippet_ids)
            if not typer.confirm(f"Permanently delete {noun} {joined}?", default=False):
                console.print("[yellow]Snippet deletion cancelled[/yellow]")
                return

        deleted = service.delete(snippet_ids)
    except SnippetError as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Deleted {', '.join(str(i) for i in deleted)}")
