"""
Codevault CLI - Languages command.
"""

from rich.console import Console

from codevault.cli.render import render_languages
from codevault.core.snippets.languages import supported_languages

console = Console()


def languages() -> None:
    """
    List the programming languages supported for highlighting and export.

    Any other language name is accepted and stored as typed; it is shown
    as plain text and exported with a .txt extension.
    """
    render_languages(console, supported_languages())
