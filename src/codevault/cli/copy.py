"""
Codevault CLI - Copy command.

Print only the code of one snippet, ready to paste or pipe.
"""

import sys

import typer
from rich.console import Console

from codevault.cli.common import get_config, get_service
from codevault.cli.errors import exit_with_error, print_missing_id_error
from codevault.cli.render import highlighted
from codevault.core.snippets.errors import SnippetError

console = Console()


def copy(
    ctx: typer.Context,
    snippet_id: int | None = typer.Option(
        None,
        "--id",
        "-i",
        help="Unique ID of the snippet to show",
        min=1,
    ),
    raw: bool = typer.Option(
        False,
        "--raw",
        "-r",
        help="Print the code verbatim, without highlighting",
    ),
) -> None:
    """
    Show the code of a specified snippet.

    Examples:
        codevault copy -i 22
        codevault copy -i 22 --raw | pbcopy
    """
    if snippet_id is None:
        print_missing_id_error("copy")

    config = get_config(ctx)
    service = get_service(ctx)
    try:
        if raw:
            sys.stdout.write(service.copy(snippet_id))
            return
        snippet = service.get(snippet_id)
    except SnippetError as e:
        exit_with_error(e)

    console.print(highlighted(snippet.code, snippet.language, theme=config.theme))
