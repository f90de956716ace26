"""
Snippet storage layer backed by a single JSON file.

Every operation reloads the file, so separate process invocations always
observe each other's results. Every mutation rewrites the whole collection
atomically (temp file + os.replace); a failed write leaves the previous
file untouched.

File format:
    {
        "version": 1,
        "last_id": 7,
        "snippets": [
            {
                "id": 1,
                "description": "Reverse a list",
                "language": "Python",
                "tags": ["lists"],
                "code": "items[::-1]\\n",
                "created_at": "2026-01-16T14:32:00+00:00"
            }
        ]
    }

The bare-array layout written by earlier codevault releases (one
comma-separated "tag" string, a "timestamp" string, nullable description
and language) is read transparently and upgraded on the next write.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from codevault.core.snippets.errors import (
    SnippetNotFoundError,
    SnippetPersistenceError,
    SnippetStoreCorruptedError,
    SnippetValidationError,
)
from codevault.core.snippets.models import (
    Snippet,
    SnippetChanges,
    SnippetCollectionFile,
    clean_tags,
)

logger = logging.getLogger(__name__)

# e.g. "2024-05-01 12:34:56.123456789 +02:00"
_LEGACY_TIMESTAMP = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[ T](?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?\s*(?P<offset>[+-]\d{2}:?\d{2}|Z)?$"
)


def _validate_id(snippet_id: int) -> None:
    if isinstance(snippet_id, bool) or not isinstance(snippet_id, int) or snippet_id < 1:
        raise SnippetValidationError(f"Snippet ID must be a positive integer, got {snippet_id!r}")


def parse_legacy_timestamp(value: str) -> datetime:
    """
    Parse a timestamp written by earlier releases.

    Accepts ISO 8601 and the "YYYY-MM-DD HH:MM:SS[.fraction] [+HH:MM]" form,
    truncating fractions to microseconds. Naive values are treated as UTC.

    Raises:
        ValueError: If the value matches neither form
    """
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        match = _LEGACY_TIMESTAMP.match(value.strip())
        if not match:
            raise ValueError(f"Invalid timestamp: {value!r}") from None
        frac = (match.group("frac") or "0")[:6].ljust(6, "0")
        offset = match.group("offset") or ""
        if offset == "Z":
            offset = "+00:00"
        elif offset and ":" not in offset:
            offset = f"{offset[:3]}:{offset[3:]}"
        parsed = datetime.fromisoformat(
            f"{match.group('date')}T{match.group('time')}.{frac}{offset}"
        )

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _from_legacy_record(raw: object) -> Snippet:
    if not isinstance(raw, dict):
        raise ValueError(f"Snippet record must be an object, got {type(raw).__name__}")
    tag_field = raw.get("tag") or ""
    return Snippet(
        id=raw["id"],
        description=raw.get("description") or "",
        language=raw.get("language") or "",
        tags=clean_tags(str(tag_field).split(",")),
        code=raw["code"],
        created_at=parse_legacy_timestamp(str(raw["timestamp"])),
    )


class SnippetStore:
    """
    Storage layer for snippets.

    Owns the data file exclusively. Ids are allocated from a persisted
    high-water mark, so an id is never handed out twice, even after the
    snippet holding it (or every snippet) has been deleted.

    Example:
        store = SnippetStore(Path("~/.local/share/codevault/codevault.json"))
        snippet = store.create("Reverse a list", "Python", ["lists"], "xs[::-1]\\n")
        store.update(snippet.id, SnippetChanges(description="Reverse"))
        store.delete(snippet.id)
    """

    def __init__(self, data_file: Path):
        """
        Initialize store with a backing file.

        Args:
            data_file: JSON file holding the collection (created on first write)
        """
        self._data_file = Path(data_file)

    @property
    def path(self) -> Path:
        """Path to the backing JSON file."""
        return self._data_file

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def all(self) -> list[Snippet]:
        """All snippets in persisted (insertion) order."""
        return self._load().snippets

    def get(self, snippet_id: int) -> Snippet:
        """
        Get a single snippet by id.

        Raises:
            SnippetValidationError: If snippet_id is not a positive integer
            SnippetNotFoundError: If no snippet has that id
        """
        _validate_id(snippet_id)
        for snippet in self._load().snippets:
            if snippet.id == snippet_id:
                return snippet
        raise SnippetNotFoundError(snippet_id)

    def next_id(self) -> int:
        """The id the next create() would allocate."""
        return self._load().next_id()

    def create(
        self,
        description: str,
        language: str,
        tags: list[str],
        code: str,
        created_at: datetime | None = None,
    ) -> Snippet:
        """
        Capture a new snippet and persist the collection.

        Args:
            description: Free-form description (may be empty)
            language: Language name, kept verbatim
            tags: Tags (trimmed, blanks dropped)
            code: Code, stored byte-for-byte
            created_at: Capture time (defaults to now, UTC)

        Returns:
            The stored Snippet with its allocated id

        Raises:
            SnippetValidationError: If code is empty or whitespace-only
            SnippetPersistenceError: If the collection cannot be read or written
        """
        if not code.strip():
            raise SnippetValidationError("Snippet code cannot be empty")

        collection = self._load()
        try:
            snippet = Snippet(
                id=collection.next_id(),
                description=description,
                language=language,
                tags=tags,
                code=code,
                created_at=created_at or datetime.now(timezone.utc),
            )
        except ValidationError as e:
            raise SnippetValidationError(str(e)) from e

        collection.snippets.append(snippet)
        collection.last_id = snippet.id
        self._save(collection)
        logger.debug("Created snippet %d in %s", snippet.id, self._data_file)
        return snippet

    def update(self, snippet_id: int, changes: SnippetChanges) -> Snippet:
        """
        Apply the supplied fields to a snippet; id and created_at never change.

        Raises:
            SnippetValidationError: If no field was supplied, the id is invalid,
                or the new code is empty
            SnippetNotFoundError: If no snippet has that id
        """
        _validate_id(snippet_id)
        if changes.is_empty():
            raise SnippetValidationError("No changes supplied for snippet update")
        if changes.code is not None and not changes.code.strip():
            raise SnippetValidationError("Snippet code cannot be empty")

        collection = self._load()
        index = collection.index_of(snippet_id)
        if index is None:
            raise SnippetNotFoundError(snippet_id)

        updated = changes.apply_to(collection.snippets[index])
        collection.snippets[index] = updated
        self._save(collection)
        logger.debug("Updated snippet %d", snippet_id)
        return updated

    def delete(self, snippet_id: int) -> None:
        """
        Remove a snippet. Surviving ids are not renumbered.

        Raises:
            SnippetNotFoundError: If no snippet has that id
        """
        self.delete_many([snippet_id])

    def delete_many(self, snippet_ids: list[int]) -> list[int]:
        """
        Remove several snippets in one write.

        All ids are checked first; if any is missing nothing is deleted.

        Returns:
            The ids removed, in the order given (duplicates collapsed)

        Raises:
            SnippetValidationError: If the list is empty or holds an invalid id
            SnippetNotFoundError: Listing every id that does not exist
        """
        if not snippet_ids:
            raise SnippetValidationError("No snippet IDs supplied")
        for snippet_id in snippet_ids:
            _validate_id(snippet_id)
        unique_ids = list(dict.fromkeys(snippet_ids))

        collection = self._load()
        existing = {s.id for s in collection.snippets}
        missing = [i for i in unique_ids if i not in existing]
        if missing:
            raise SnippetNotFoundError(missing)

        doomed = set(unique_ids)
        collection.last_id = collection.next_id() - 1
        collection.snippets = [s for s in collection.snippets if s.id not in doomed]
        self._save(collection)
        logger.debug("Deleted snippets %s", unique_ids)
        return unique_ids

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    def _load(self) -> SnippetCollectionFile:
        """
        Read and decode the data file.

        Returns:
            The collection (empty if the file does not exist yet)

        Raises:
            SnippetPersistenceError: If the file cannot be read
            SnippetStoreCorruptedError: If the contents cannot be decoded
        """
        if not self._data_file.exists():
            return SnippetCollectionFile()

        try:
            text = self._data_file.read_text(encoding="utf-8")
        except OSError as e:
            raise SnippetPersistenceError(f"Failed to read {self._data_file}: {e}") from e

        if not text.strip():
            return SnippetCollectionFile()

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SnippetStoreCorruptedError(f"Failed to parse {self._data_file}: {e}") from e

        try:
            if isinstance(data, list):
                logger.debug("Reading legacy snippet layout from %s", self._data_file)
                snippets = [_from_legacy_record(raw) for raw in data]
                collection = SnippetCollectionFile(snippets=snippets)
            elif isinstance(data, dict):
                collection = SnippetCollectionFile.model_validate(data)
            else:
                raise ValueError("top-level value must be an object")
        except (KeyError, TypeError, ValueError) as e:
            # pydantic.ValidationError is a ValueError
            raise SnippetStoreCorruptedError(f"Invalid snippet data in {self._data_file}: {e}") from e

        ids = [s.id for s in collection.snippets]
        if len(ids) != len(set(ids)):
            raise SnippetStoreCorruptedError(f"Duplicate snippet IDs in {self._data_file}")

        logger.debug("Loaded %d snippets from %s", len(collection.snippets), self._data_file)
        return collection

    def _save(self, collection: SnippetCollectionFile) -> None:
        """
        Write the whole collection atomically.

        Raises:
            SnippetPersistenceError: If the file cannot be written
        """
        data = collection.model_copy(update={"last_id": collection.next_id() - 1}).model_dump(
            mode="json"
        )

        try:
            self._data_file.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(
                dir=self._data_file.parent, prefix=".codevault_", suffix=".json.tmp"
            )
        except OSError as e:
            raise SnippetPersistenceError(f"Failed to write {self._data_file}: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")

            # Atomic rename (replaces existing file)
            os.replace(temp_path, self._data_file)

        except OSError as e:
            # Clean up temp file on error
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise SnippetPersistenceError(f"Failed to write {self._data_file}: {e}") from e
