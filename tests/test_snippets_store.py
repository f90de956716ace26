"""
Unit tests for the snippet storage layer.

Tests SnippetStore CRUD, id allocation, persistence round-trips,
legacy-format reading and failure handling.
"""

import json
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from codevault.core.snippets import (
    SnippetChanges,
    SnippetNotFoundError,
    SnippetPersistenceError,
    SnippetStore,
    SnippetStoreCorruptedError,
    SnippetValidationError,
)
from codevault.core.snippets.store import parse_legacy_timestamp


class TestSnippetStoreBasics:
    """Test an empty store and the file it creates."""

    def test_missing_file_is_empty_store(self, store: SnippetStore) -> None:
        assert store.all() == []
        assert not store.path.exists()

    def test_create_writes_file_and_parent_dir(self, store: SnippetStore) -> None:
        store.create("desc", "Python", ["a"], "print(1)\n")

        assert store.path.exists()
        data = json.loads(store.path.read_text())
        assert data["version"] == 1
        assert data["last_id"] == 1
        assert [s["id"] for s in data["snippets"]] == [1]

    def test_empty_file_is_empty_store(self, store: SnippetStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text("")

        assert store.all() == []

    def test_create_stamps_created_at(self, store: SnippetStore) -> None:
        before = datetime.now(timezone.utc)
        snippet = store.create("", "Go", [], "package main\n")
        after = datetime.now(timezone.utc)

        assert before <= snippet.created_at <= after

    def test_create_rejects_empty_code(self, store: SnippetStore) -> None:
        with pytest.raises(SnippetValidationError):
            store.create("desc", "Python", [], "  \n\t")
        assert not store.path.exists()

    def test_all_preserves_insertion_order(self, populated_store: SnippetStore) -> None:
        assert [s.id for s in populated_store.all()] == [1, 2, 3, 4]


class TestIdAllocation:
    """Test id uniqueness, monotonicity and the high-water mark."""

    def test_sequential_ids_from_one(self, store: SnippetStore) -> None:
        ids = [store.create(f"s{i}", "Python", [], f"x = {i}\n").id for i in range(5)]

        assert ids == [1, 2, 3, 4, 5]

    def test_deleted_middle_id_not_reused(self, populated_store: SnippetStore) -> None:
        populated_store.delete(2)

        new = populated_store.create("new", "C", [], "int main;\n")

        assert new.id == 5
        assert new.id > max(s.id for s in populated_store.all() if s.id != new.id)

    def test_deleted_highest_id_not_reused(self, populated_store: SnippetStore) -> None:
        """Deleting the current maximum must not let it come back."""
        populated_store.delete(4)

        new = populated_store.create("new", "C", [], "int main;\n")

        assert new.id == 5

    def test_emptied_store_keeps_numbering(self, populated_store: SnippetStore) -> None:
        """An emptied store does not restart at 1."""
        populated_store.delete_many([1, 2, 3, 4])
        assert populated_store.all() == []

        new = populated_store.create("again", "Python", [], "pass\n")

        assert new.id == 5

    def test_next_id_peeks_without_writing(self, populated_store: SnippetStore) -> None:
        before = populated_store.path.read_text()

        assert populated_store.next_id() == 5
        assert populated_store.path.read_text() == before

    def test_ids_survive_separate_store_instances(self, data_file: Path) -> None:
        """Each invocation reloads from disk; there is no shared in-memory state."""
        SnippetStore(data_file).create("one", "Python", [], "1\n")
        SnippetStore(data_file).create("two", "Python", [], "2\n")

        assert [s.id for s in SnippetStore(data_file).all()] == [1, 2]


class TestRoundTrip:
    """Test that persisted snippets come back exactly."""

    def test_multiline_code_and_comma_tag_round_trip(self, data_file: Path) -> None:
        code = "def f(a,\n      b):\n\treturn a  \n\n\n   # trailing spaces   \n"
        created = SnippetStore(data_file).create(
            "Tricky", "Python", ["csv, parsing", "  spaced  "], code
        )

        fresh = SnippetStore(data_file).get(created.id)

        assert fresh.code == code
        assert fresh.tags == ["csv, parsing", "spaced"]
        assert fresh.created_at == created.created_at

    def test_unicode_round_trip(self, store: SnippetStore) -> None:
        code = 'print("héllo wörld 🚀")\r\n'
        created = store.create("ünïcode", "Python", ["日本"], code)

        fresh = SnippetStore(store.path).get(created.id)

        assert fresh.code == code
        assert fresh.description == "ünïcode"


class TestGet:
    def test_get_existing(self, populated_store: SnippetStore) -> None:
        assert populated_store.get(3).description == "HTTP server"

    def test_get_missing(self, populated_store: SnippetStore) -> None:
        with pytest.raises(SnippetNotFoundError) as exc_info:
            populated_store.get(99)
        assert exc_info.value.snippet_ids == [99]
        assert "99" in str(exc_info.value)

    @pytest.mark.parametrize("bad_id", [0, -3])
    def test_get_invalid_id(self, populated_store: SnippetStore, bad_id: int) -> None:
        with pytest.raises(SnippetValidationError):
            populated_store.get(bad_id)


class TestUpdate:
    """Test partial updates."""

    def test_update_preserves_identity(self, populated_store: SnippetStore) -> None:
        original = populated_store.get(1)

        updated = populated_store.update(1, SnippetChanges(description="x"))

        assert updated.description == "x"
        assert updated.id == original.id
        assert updated.code == original.code
        assert updated.language == original.language
        assert updated.tags == original.tags
        assert updated.created_at == original.created_at

    def test_update_is_persisted(self, populated_store: SnippetStore) -> None:
        populated_store.update(2, SnippetChanges(tags=["new"], language="Go", code="go\n"))

        fresh = SnippetStore(populated_store.path).get(2)
        assert fresh.tags == ["new"]
        assert fresh.language == "Go"
        assert fresh.code == "go\n"

    def test_update_keeps_position(self, populated_store: SnippetStore) -> None:
        populated_store.update(2, SnippetChanges(description="moved?"))

        assert [s.id for s in populated_store.all()] == [1, 2, 3, 4]

    def test_update_without_changes_rejected(self, populated_store: SnippetStore) -> None:
        before = populated_store.path.read_text()

        with pytest.raises(SnippetValidationError):
            populated_store.update(1, SnippetChanges())

        assert populated_store.path.read_text() == before

    def test_update_empty_code_rejected(self, populated_store: SnippetStore) -> None:
        with pytest.raises(SnippetValidationError):
            populated_store.update(1, SnippetChanges(code="\n"))

    def test_update_missing(self, populated_store: SnippetStore) -> None:
        with pytest.raises(SnippetNotFoundError):
            populated_store.update(42, SnippetChanges(description="x"))

    def test_update_negative_id(self, populated_store: SnippetStore) -> None:
        with pytest.raises(SnippetValidationError):
            populated_store.update(-1, SnippetChanges(description="x"))


class TestDelete:
    """Test delete and delete_many."""

    def test_delete_does_not_renumber(self, populated_store: SnippetStore) -> None:
        populated_store.delete(2)

        assert [s.id for s in populated_store.all()] == [1, 3, 4]

    def test_delete_missing(self, populated_store: SnippetStore) -> None:
        with pytest.raises(SnippetNotFoundError):
            populated_store.delete(7)

    def test_delete_many_is_all_or_nothing(self, populated_store: SnippetStore) -> None:
        with pytest.raises(SnippetNotFoundError) as exc_info:
            populated_store.delete_many([1, 8, 9])

        assert exc_info.value.snippet_ids == [8, 9]
        assert [s.id for s in populated_store.all()] == [1, 2, 3, 4]

    def test_delete_many_collapses_duplicates(self, populated_store: SnippetStore) -> None:
        assert populated_store.delete_many([3, 1, 3]) == [3, 1]
        assert [s.id for s in populated_store.all()] == [2, 4]

    def test_delete_many_empty_rejected(self, populated_store: SnippetStore) -> None:
        with pytest.raises(SnippetValidationError):
            populated_store.delete_many([])


class TestPersistenceFailures:
    """Corrupted or unreadable backing state is fatal."""

    def test_invalid_json(self, store: SnippetStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")

        with pytest.raises(SnippetStoreCorruptedError):
            store.all()

    def test_corruption_blocks_mutation(self, store: SnippetStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json")

        with pytest.raises(SnippetPersistenceError):
            store.create("d", "Python", [], "x\n")
        assert store.path.read_text() == "{not json"

    def test_wrong_top_level_type(self, store: SnippetStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text('"hello"')

        with pytest.raises(SnippetStoreCorruptedError):
            store.all()

    def test_invalid_record(self, store: SnippetStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"version": 1, "snippets": [{"id": "x"}]}))

        with pytest.raises(SnippetStoreCorruptedError):
            store.all()

    @pytest.mark.parametrize("records", [[1, 2], [None], ["x"], [[]]])
    def test_legacy_array_of_non_objects(self, store: SnippetStore, records: list) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps(records))

        with pytest.raises(SnippetStoreCorruptedError):
            store.all()

    @pytest.mark.parametrize(
        "payload",
        [
            {"version": 2, "snippets": []},
            {"version": 1, "last_id": -1, "snippets": []},
            {"version": 1, "last_id": "many", "snippets": []},
            {"version": 1, "snippets": {"id": 1}},
            {"version": 1, "snippets": [1]},
        ],
    )
    def test_invalid_file_root(self, store: SnippetStore, payload: dict) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps(payload))

        with pytest.raises(SnippetStoreCorruptedError):
            store.all()

    def test_missing_version_reads_as_current(self, store: SnippetStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"last_id": 3, "snippets": []}))

        assert store.all() == []
        assert store.next_id() == 4

    def test_duplicate_ids(self, store: SnippetStore) -> None:
        record = {
            "id": 1,
            "code": "x",
            "created_at": "2026-01-01T00:00:00+00:00",
        }
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"snippets": [record, record]}))

        with pytest.raises(SnippetStoreCorruptedError):
            store.all()

    def test_unreadable_path(self, tmp_path: Path) -> None:
        """A directory where the file should be cannot be read."""
        data_dir = tmp_path / "is-a-dir.json"
        data_dir.mkdir()

        with pytest.raises(SnippetPersistenceError):
            SnippetStore(data_dir).all()

    def test_unwritable_parent(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        with pytest.raises(SnippetPersistenceError):
            SnippetStore(blocker / "vault.json").create("d", "Python", [], "x\n")

    def test_failed_write_leaves_file_untouched(
        self, populated_store: SnippetStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        before = populated_store.path.read_text()

        def failing_replace(src: str, dst: object) -> None:
            raise OSError(28, "No space left on device")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(SnippetPersistenceError):
            populated_store.create("d", "Python", [], "x\n")

        monkeypatch.undo()
        assert populated_store.path.read_text() == before
        leftovers = [p.name for p in populated_store.path.parent.iterdir()]
        assert leftovers == [populated_store.path.name]


class TestLegacyFormat:
    """Files written by earlier releases: a bare JSON array."""

    LEGACY = [
        {
            "tag": "git, shell",
            "description": "Undo last commit",
            "code": "git reset --soft HEAD~1\n",
            "timestamp": "2024-05-01 12:34:56.123456789 +02:00",
            "language": "Bourne Again Shell (bash)",
            "id": 3,
        },
        {
            "tag": "",
            "description": None,
            "code": "SELECT 1;",
            "timestamp": "2024-05-02 08:00:00.5 +00:00",
            "language": None,
            "id": 7,
        },
    ]

    def _write_legacy(self, store: SnippetStore) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps(self.LEGACY, indent=2))

    def test_reads_legacy_records(self, store: SnippetStore) -> None:
        self._write_legacy(store)

        first, second = store.all()

        assert first.id == 3
        assert first.tags == ["git", "shell"]
        assert first.created_at == datetime(
            2024, 5, 1, 12, 34, 56, 123456, tzinfo=timezone(timedelta(hours=2))
        )
        assert second.description == ""
        assert second.language == ""
        assert second.tags == []

    def test_next_id_derived_from_max(self, store: SnippetStore) -> None:
        self._write_legacy(store)

        assert store.create("new", "SQL", [], "SELECT 2;").id == 8

    def test_mutation_upgrades_layout(self, store: SnippetStore) -> None:
        self._write_legacy(store)

        store.update(3, SnippetChanges(description="Soft reset"))

        data = json.loads(store.path.read_text())
        assert isinstance(data, dict)
        assert data["last_id"] == 7
        assert data["snippets"][0]["tags"] == ["git", "shell"]


class TestParseLegacyTimestamp:
    def test_iso(self) -> None:
        assert parse_legacy_timestamp("2026-01-16T14:32:00+00:00") == datetime(
            2026, 1, 16, 14, 32, tzinfo=timezone.utc
        )

    def test_naive_treated_as_utc(self) -> None:
        assert parse_legacy_timestamp("2026-01-16 14:32:00").tzinfo is not None

    def test_compact_offset(self) -> None:
        parsed = parse_legacy_timestamp("2026-01-16 14:32:00.1 -0500")
        assert parsed.utcoffset() == timedelta(hours=-5)
        assert parsed.microsecond == 100000

    def test_garbage(self) -> None:
        with pytest.raises(ValueError):
            parse_legacy_timestamp("yesterday")
