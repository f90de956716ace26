"""
Multi-criteria snippet lookup.

Matching rules:
- An id, when given, wins: every other criterion is ignored and the result
  is that single snippet (or nothing).
- Otherwise criteria categories are ANDed; within the tag set and the
  language set any member may match (OR).
- Keyword is a case-insensitive substring search over description, code
  and tags.
- Empty tag/language sets mean "no filter on that dimension".
- Results keep persisted (insertion) order.

The summary flag never filters. It travels with the result so the caller
can choose between the summary and full projections.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from codevault.core.snippets.errors import SnippetValidationError
from codevault.core.snippets.models import Snippet
from codevault.core.snippets.store import SnippetStore


def _normalize(values: Iterable[str] | None) -> frozenset[str]:
    if not values:
        return frozenset()
    return frozenset(v.strip().lower() for v in values if v and v.strip())


@dataclass(frozen=True)
class FilterSpec:
    """Filter parameters for snippet queries.

    Attributes:
        id: Exact snippet id; overrides every other criterion
        tags: Match snippets carrying any of these tags
        languages: Match snippets written in any of these languages
        keyword: Substring searched in description, code and tags
        summary: Projection flag passed through to the caller
    """

    id: int | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    languages: frozenset[str] = field(default_factory=frozenset)
    keyword: str | None = None
    summary: bool = False

    def __post_init__(self) -> None:
        if self.id is not None and (isinstance(self.id, bool) or self.id < 1):
            raise SnippetValidationError(f"Snippet ID must be a positive integer, got {self.id!r}")
        object.__setattr__(self, "tags", _normalize(self.tags))
        object.__setattr__(self, "languages", _normalize(self.languages))

    def is_empty(self) -> bool:
        """True when no criterion would restrict the result."""
        return self.id is None and not self.tags and not self.languages and self.keyword is None

    def matches(self, snippet: Snippet) -> bool:
        """Whether a snippet satisfies the non-id criteria."""
        if self.tags and not any(snippet.has_tag(t) for t in self.tags):
            return False

        if self.languages and snippet.language.strip().lower() not in self.languages:
            return False

        if self.keyword is not None:
            needle = self.keyword.lower()
            haystacks = [snippet.description, snippet.code, *snippet.tags]
            if not any(needle in h.lower() for h in haystacks):
                return False

        return True


@dataclass(frozen=True)
class QueryResult:
    """Matched snippets plus the projection flag they were requested with."""

    snippets: list[Snippet]
    summary: bool = False

    def __len__(self) -> int:
        return len(self.snippets)

    def __iter__(self) -> Iterator[Snippet]:
        return iter(self.snippets)

    def projection(self) -> list[dict[str, object]]:
        """Plain dicts for display/JSON: summary fields only when summary is set."""
        if self.summary:
            return [s.summary_dict() for s in self.snippets]
        return [s.to_record() for s in self.snippets]


def filter_snippets(snippets: Sequence[Snippet], spec: FilterSpec) -> list[Snippet]:
    """Apply a FilterSpec to an already-loaded sequence of snippets."""
    if spec.id is not None:
        return [s for s in snippets if s.id == spec.id][:1]
    return [s for s in snippets if spec.matches(s)]


class SnippetQuery:
    """
    Query engine over a SnippetStore.

    Example:
        >>> query = SnippetQuery(store)
        >>> result = query.find(FilterSpec(tags=frozenset({"git"}), summary=True))
        >>> [s.id for s in result]
        [2, 5]
    """

    def __init__(self, store: SnippetStore):
        self.store = store

    def find(self, spec: FilterSpec | None = None) -> QueryResult:
        """Return the snippets matching spec, in persisted order."""
        spec = spec or FilterSpec()
        return QueryResult(snippets=filter_snippets(self.store.all(), spec), summary=spec.summary)
