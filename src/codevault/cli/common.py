"""
Helpers shared by the codevault commands.

Comma-separated multi-value options are split here, at the command-layer
boundary; the core only ever sees lists and sets of trimmed strings.
"""

from pathlib import Path

import typer

from codevault.core.config import VaultConfig, load_config
from codevault.core.services.snippets import SnippetService


def parse_csv(value: str | None) -> list[str]:
    """
    Split a comma-separated option into trimmed, non-empty items.

    Example:
        >>> parse_csv(" rust, go ,,python")
        ['rust', 'go', 'python']
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_ids(value: str) -> list[int]:
    """
    Parse "3, 5,8" into [3, 5, 8].

    Raises:
        typer.BadParameter: If any item is not a positive integer
    """
    ids: list[int] = []
    for item in parse_csv(value):
        try:
            snippet_id = int(item)
        except ValueError:
            raise typer.BadParameter(f"Invalid ID format: '{item}'")
        if snippet_id < 1:
            raise typer.BadParameter(f"Snippet IDs must be positive, got {snippet_id}")
        ids.append(snippet_id)
    if not ids:
        raise typer.BadParameter("At least one snippet ID is required")
    return ids


def get_config(ctx: typer.Context) -> VaultConfig:
    """Loaded configuration, honouring the global --data-file option."""
    config = load_config()
    obj = ctx.obj or {}
    data_file: Path | None = obj.get("data_file")
    if data_file is not None:
        config = config.model_copy(update={"data_file": data_file})
    return config


def get_service(ctx: typer.Context) -> SnippetService:
    """Service bound to the configured data file."""
    return SnippetService.from_config(get_config(ctx))
