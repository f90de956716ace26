"""
Snippet service: one method per user command.

Wraps the store, query engine and exporter so any interface (CLI, tests,
scripts) can drive codevault without knowing how the pieces fit together.
The service holds no state beyond its collaborators; every call reloads
the collection from disk.

Usage:
    >>> from codevault.core.services.snippets import SnippetService
    >>> service = SnippetService.from_config()
    >>> snippet = service.capture("Reverse a list", "Python", ["lists"], "xs[::-1]\\n")
    >>> result = service.view(FilterSpec(tags={"lists"}))
    >>> report = service.export(FilterSpec(languages={"python"}), Path("out"))
"""

from __future__ import annotations

from pathlib import Path

from codevault.core.config import VaultConfig, load_config
from codevault.core.snippets.errors import SnippetNotFoundError, SnippetValidationError
from codevault.core.snippets.export import ExportReport, SnippetExporter
from codevault.core.snippets.models import Snippet, SnippetChanges
from codevault.core.snippets.query import FilterSpec, QueryResult, SnippetQuery
from codevault.core.snippets.store import SnippetStore


class SnippetService:
    """
    Command-level operations over the snippet collection.

    Example:
        >>> service = SnippetService(SnippetStore(tmp / "vault.json"))
        >>> service.capture("", "Rust", [], "fn main() {}\\n").id
        1
    """

    def __init__(self, store: SnippetStore, exporter: SnippetExporter | None = None) -> None:
        self.store = store
        self.query = SnippetQuery(store)
        self.exporter = exporter or SnippetExporter()

    @classmethod
    def from_config(
        cls, config: VaultConfig | None = None, data_file: Path | None = None
    ) -> SnippetService:
        """
        Build a service from configuration.

        Args:
            config: Loaded configuration (load_config() when None)
            data_file: Overrides config.data_file for this service

        Returns:
            Configured SnippetService
        """
        if config is None:
            config = load_config()
        store = SnippetStore(data_file or config.data_file)
        return cls(store, SnippetExporter(config.export_dir))

    # ============================================================================
    # Write paths
    # ============================================================================

    def capture(self, description: str, language: str, tags: list[str], code: str) -> Snippet:
        """Store a new snippet (capture -> Store.create)."""
        return self.store.create(description, language, tags, code)

    def edit(self, snippet_id: int, changes: SnippetChanges) -> Snippet:
        """Apply changes to one snippet (edit -> Store.update)."""
        return self.store.update(snippet_id, changes)

    def delete(self, snippet_ids: list[int]) -> list[int]:
        """Delete snippets by id (delete -> Store.delete)."""
        return self.store.delete_many(snippet_ids)

    # ============================================================================
    # Read paths
    # ============================================================================

    def view(self, spec: FilterSpec | None = None) -> QueryResult:
        """Snippets matching spec, carrying its summary flag (view -> Query.find)."""
        return self.query.find(spec)

    def get(self, snippet_id: int) -> Snippet:
        """
        One snippet by id.

        Raises:
            SnippetNotFoundError: If the id does not exist
        """
        return self.store.get(snippet_id)

    def copy(self, snippet_id: int) -> str:
        """
        Code of a single snippet (copy -> Query.find by id, code only).

        Raises:
            SnippetNotFoundError: If the id does not exist
        """
        result = self.query.find(FilterSpec(id=snippet_id))
        if not result.snippets:
            raise SnippetNotFoundError(snippet_id)
        return result.snippets[0].code

    def select_for_edit(self, snippet_id: int | None = None, tag: str | None = None) -> list[Snippet]:
        """
        Candidate snippets for an edit, chosen by id or by tag.

        Returns:
            One snippet for an id; every snippet carrying the tag otherwise.
            The caller picks among several candidates.

        Raises:
            SnippetValidationError: If neither id nor tag is given
            SnippetNotFoundError: If nothing matches
        """
        if snippet_id is not None:
            result = self.query.find(FilterSpec(id=snippet_id))
            if not result.snippets:
                raise SnippetNotFoundError(snippet_id)
            return result.snippets

        if tag is None or not tag.strip():
            raise SnippetValidationError("Enter a snippet ID or tag to select a snippet")

        result = self.query.find(FilterSpec(tags=frozenset({tag})))
        if not result.snippets:
            raise SnippetNotFoundError(
                [], message=f"Tag '{tag.strip()}' doesn't match any snippets"
            )
        return result.snippets

    # ============================================================================
    # Export
    # ============================================================================

    def export(
        self,
        selection: FilterSpec | QueryResult | list[Snippet],
        destination: Path | None = None,
        overwrite: bool = False,
    ) -> ExportReport:
        """
        Export a selection (export -> Query.find, then Export.export).

        Args:
            selection: A filter to resolve, or already-resolved snippets
            destination: Target directory (configured export_dir when None)
            overwrite: Replace files that already exist

        Returns:
            Per-snippet ExportReport
        """
        if isinstance(selection, FilterSpec):
            selection = self.query.find(selection)
        snippets = selection.snippets if isinstance(selection, QueryResult) else selection
        return self.exporter.export(snippets, destination, overwrite=overwrite)
