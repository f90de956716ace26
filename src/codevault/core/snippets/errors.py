"""
Typed errors raised by the snippet store, query engine and service.

NotFound and validation errors are expected outcomes that the command layer
reports to the user. Persistence errors are fatal for the current command.
Export item failures are never raised: they are aggregated into an
ExportReport (see codevault.core.snippets.export).
"""

from collections.abc import Iterable


class SnippetError(Exception):
    """Base exception for snippet operations."""


class SnippetNotFoundError(SnippetError):
    """One or more snippet ids do not exist in the collection."""

    def __init__(self, snippet_ids: int | Iterable[int], message: str | None = None) -> None:
        if isinstance(snippet_ids, int):
            snippet_ids = [snippet_ids]
        self.snippet_ids = list(snippet_ids)
        if message is None:
            joined = ", ".join(str(i) for i in self.snippet_ids)
            noun = "ID" if len(self.snippet_ids) == 1 else "IDs"
            message = f"Snippet {noun} '{joined}' does not exist in the collection"
        super().__init__(message)


class SnippetValidationError(SnippetError):
    """Malformed input rejected before any store mutation."""


class SnippetPersistenceError(SnippetError):
    """The backing store could not be read or written."""


class SnippetStoreCorruptedError(SnippetPersistenceError):
    """The backing store exists but its contents cannot be decoded."""
