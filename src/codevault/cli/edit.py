"""
Codevault CLI - Edit command.

Select a snippet by id or tag and change its description, language,
tags and/or code. Id and creation time never change.
"""

import sys

import typer
from rich.console import Console

from codevault.cli.common import get_service, parse_csv
from codevault.cli.errors import ExitCode, exit_with_error, print_error
from codevault.core.snippets.errors import SnippetError
from codevault.core.snippets.models import Snippet, SnippetChanges

console = Console()


def choose_snippet(candidates: list[Snippet]) -> Snippet:
    """Ask the user to pick one snippet when a tag matched several."""
    if len(candidates) == 1:
        return candidates[0]

    console.print("\n[bold magenta]Edit snippet:[/bold magenta]\n")
    console.print("[cyan]Multiple snippets match that tag, choose an [yellow]ID[/yellow] to edit:[/cyan]\n")
    by_id = {s.id: s for s in candidates}
    for snippet in candidates:
        console.print(f"  [cyan]»[/cyan] [yellow]ID {snippet.id}[/yellow]  {snippet.description}")

    while True:
        chosen = typer.prompt("\nType the ID of the snippet you want to modify", type=int)
        if chosen in by_id:
            return by_id[chosen]
        console.print(f"[red]ID '{chosen}' is not in the list. Please choose a valid ID.[/red]")


def prompt_for_changes(snippet: Snippet) -> SnippetChanges:
    """Interactive edit: blank answers keep the current value."""
    console.print(f"\n[bold magenta]Editing snippet {snippet.id}[/bold magenta] [dim](press Return to keep the current value)[/dim]\n")

    description = typer.prompt("Description", default=snippet.description, show_default=True)
    language = typer.prompt("Language", default=snippet.language, show_default=True)
    tags_text = typer.prompt("Tags (comma-separated)", default=", ".join(snippet.tags), show_default=True)

    code: str | None = None
    if typer.confirm("Replace the code?", default=False):
        console.print("[cyan]Enter the new code (press [yellow]Ctrl+D[/yellow] to finish):[/cyan]")
        code = sys.stdin.read()

    tags = parse_csv(tags_text)
    return SnippetChanges(
        description=description if description != snippet.description else None,
        language=language if language != snippet.language else None,
        tags=tags if tags != snippet.tags else None,
        code=code if code is not None and code != snippet.code else None,
    )


def edit(
    ctx: typer.Context,
    snippet_id: int | None = typer.Option(
        None,
        "--id",
        "-i",
        help="The unique ID of the snippet to edit",
        min=1,
    ),
    tag: str | None = typer.Option(
        None,
        "--tag",
        "-t",
        help="Select the snippet to edit by one of its tags",
    ),
    description: str | None = typer.Option(
        None,
        "--description",
        "-d",
        help="New description",
    ),
    language: str | None = typer.Option(
        None,
        "--language",
        "-l",
        help="New programming language",
    ),
    new_tags: str | None = typer.Option(
        None,
        "--tags",
        "-T",
        help="Replace the tags (comma-separated)",
    ),
    replace_code: bool = typer.Option(
        False,
        "--code",
        "-c",
        help="Replace the code with text read from stdin",
    ),
) -> None:
    """
    Modify an existing snippet in your collection.

    Without any change option, prompts for each field.

    Examples:
        codevault edit -i 4                          # interactive
        codevault edit -t docker                     # pick among docker snippets
        codevault edit -i 4 -d "Faster version" -T perf,sql
        cat fixed.py | codevault edit -i 4 --code
    """
    if snippet_id is None and tag is None:
        print_error(
            "Enter a snippet ID or tag to proceed",
            solution="codevault edit -i <ID>  # or -t <TAG>",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    service = get_service(ctx)
    try:
        target = choose_snippet(service.select_for_edit(snippet_id=snippet_id, tag=tag))

        if description is None and language is None and new_tags is None and not replace_code:
            changes = prompt_for_changes(target)
            if changes.is_empty():
                console.print("[yellow]No changes made.[/yellow]")
                return
        else:
            changes = SnippetChanges(
                description=description,
                language=language,
                tags=parse_csv(new_tags) if new_tags is not None else None,
                code=sys.stdin.read() if replace_code else None,
            )

        service.edit(target.id, changes)
    except SnippetError as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Changes have been applied to snippet [bold]{target.id}[/bold]")
