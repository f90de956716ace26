"""Service layer: command-level operations over the core modules."""

from codevault.core.services.snippets import SnippetService

__all__ = ["SnippetService"]
