"""
Codevault snippets module.

Provides the snippet data model, the JSON-backed store, the multi-criteria
query engine, per-language export and the language registry.
"""

from codevault.core.snippets.errors import (
    SnippetError,
    SnippetNotFoundError,
    SnippetPersistenceError,
    SnippetStoreCorruptedError,
    SnippetValidationError,
)
from codevault.core.snippets.export import (
    ExportOutcome,
    ExportReport,
    ExportStatus,
    SnippetExporter,
)
from codevault.core.snippets.languages import extension_for, lexer_for, supported_languages
from codevault.core.snippets.models import Snippet, SnippetChanges
from codevault.core.snippets.query import FilterSpec, QueryResult, SnippetQuery
from codevault.core.snippets.store import SnippetStore

__all__ = [
    "ExportOutcome",
    "ExportReport",
    "ExportStatus",
    "FilterSpec",
    "QueryResult",
    "Snippet",
    "SnippetChanges",
    "SnippetError",
    "SnippetExporter",
    "SnippetNotFoundError",
    "SnippetPersistenceError",
    "SnippetQuery",
    "SnippetStore",
    "SnippetStoreCorruptedError",
    "SnippetValidationError",
    "extension_for",
    "lexer_for",
    "supported_languages",
]
