"""
Snippet data models for codevault.

Defines the Snippet model (one stored code fragment with metadata),
SnippetChanges (the partial set of fields an edit may replace) and
SnippetCollectionFile, the root of the JSON data file.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator


def clean_tags(tags: list[str]) -> list[str]:
    """Trim each tag and drop empty ones, keeping insertion order."""
    return [t.strip() for t in tags if t.strip()]


class Snippet(BaseModel):
    """
    A single captured code snippet.

    The id and created_at fields are assigned by the store and never change
    afterwards. Code is kept verbatim, including leading/trailing whitespace
    and embedded newlines.

    Example:
        >>> snippet = Snippet(
        ...     id=1,
        ...     description="Reverse a list",
        ...     language="Python",
        ...     tags=["lists", "idioms"],
        ...     code="items[::-1]\\n",
        ...     created_at=datetime(2026, 1, 16, 14, 32, 0),
        ... )
        >>> snippet.id
        1
    """

    id: int = Field(..., ge=1, description="Unique snippet identifier")
    description: str = Field(default="", description="Free-form description")
    language: str = Field(default="", description="Language name used for highlighting/export")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    code: str = Field(..., description="Captured code, stored verbatim")
    created_at: datetime = Field(..., description="Capture timestamp")

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: object) -> list[str]:
        """Accept a list of tags; trim them and drop blanks."""
        if v is None:
            return []
        if isinstance(v, str):
            raise ValueError("tags must be a list of strings")
        if not isinstance(v, (list, tuple)):
            raise ValueError("tags must be a list of strings")
        return clean_tags([str(t) for t in v])

    def has_tag(self, tag: str) -> bool:
        """Case-insensitive exact tag membership."""
        wanted = tag.strip().lower()
        return any(t.lower() == wanted for t in self.tags)

    def summary_dict(self) -> dict[str, object]:
        """Summary projection: everything but the code."""
        return {
            "id": self.id,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat(),
            "description": self.description,
        }

    def to_record(self) -> dict[str, object]:
        """Serialize to a JSON-safe record for the backing store."""
        return self.model_dump(mode="json")


class SnippetChanges(BaseModel):
    """
    Fields an edit may replace. None means "leave unchanged".

    An empty description is a valid change (it clears the description),
    so emptiness is decided by None-ness, not truthiness.
    """

    description: str | None = None
    language: str | None = None
    tags: list[str] | None = None
    code: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: object) -> list[str] | None:
        if v is None:
            return None
        if isinstance(v, str) or not isinstance(v, (list, tuple)):
            raise ValueError("tags must be a list of strings")
        return clean_tags([str(t) for t in v])

    def is_empty(self) -> bool:
        """True when no field was supplied."""
        return not self.model_dump(exclude_none=True)

    def apply_to(self, snippet: Snippet) -> Snippet:
        """Return a copy of snippet with the supplied fields replaced."""
        return snippet.model_copy(update=self.model_dump(exclude_none=True))


class SnippetCollectionFile(BaseModel):
    """
    Root model for the snippet data file.

    last_id is the id high-water mark: the largest id ever allocated,
    kept even after that snippet is deleted.
    """

    version: Literal[1] = Field(default=1, description="Data file format version")
    last_id: int = Field(default=0, ge=0, description="Largest id ever allocated")
    snippets: list[Snippet] = Field(default_factory=list)

    def index_of(self, snippet_id: int) -> int | None:
        for i, snippet in enumerate(self.snippets):
            if snippet.id == snippet_id:
                return i
        return None

    def next_id(self) -> int:
        highest = max((s.id for s in self.snippets), default=0)
        return max(self.last_id, highest) + 1
