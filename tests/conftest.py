"""
Pytest configuration and shared fixtures.

Provides temp-directory stores, sample snippets, and an isolated
XDG/environment setup for CLI tests.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from codevault.cli import app
from codevault.core.config import clear_cache
from codevault.core.snippets.models import Snippet
from codevault.core.snippets.store import SnippetStore

# ==============================================================================
# Environment isolation
# ==============================================================================

CODEVAULT_ENV_VARS = (
    "CODEVAULT_DATA_FILE",
    "CODEVAULT_EXPORT_DIR",
    "CODEVAULT_THEME",
    "CODEVAULT_CONFIRM_BATCH",
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """
    Keep every test away from the real home directory and config.

    Points XDG_DATA_HOME / XDG_CONFIG_HOME into tmp_path, drops any
    CODEVAULT_* variables and clears the config cache before and after.
    """
    for var in CODEVAULT_ENV_VARS:
        # setenv first so teardown also removes values a .env file loaded
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide and chdir into an empty working directory."""
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work


# ==============================================================================
# Store fixtures
# ==============================================================================


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Path of a (not yet existing) snippet collection file."""
    return tmp_path / "data" / "codevault.json"


@pytest.fixture
def store(data_file: Path) -> SnippetStore:
    """Provide an empty SnippetStore backed by a temp file."""
    return SnippetStore(data_file)


@pytest.fixture
def populated_store(store: SnippetStore) -> SnippetStore:
    """
    Store with four snippets:

    1. Python, tags [a], "loop" in code
    2. Rust, tags [b], "loop" in code
    3. Go, tags [a, b]
    4. Klingon, tags [c]
    """
    store.create("List comprehension", "Python", ["a"], "for x in xs:\n    loop(x)\n")
    store.create("Iterator loop", "Rust", ["b"], "loop {\n    break;\n}\n")
    store.create("HTTP server", "Go", ["a", "b"], "http.ListenAndServe(\":8080\", nil)\n")
    store.create("Battle cry", "Klingon", ["c"], "Qapla'\n")
    return store


@pytest.fixture
def sample_snippet() -> Snippet:
    """Provide a standalone Snippet object."""
    return Snippet(
        id=1,
        description="Reverse a list",
        language="Python",
        tags=["lists", "idioms"],
        code="items[::-1]\n",
        created_at=datetime(2026, 1, 16, 14, 32, 0, tzinfo=timezone.utc),
    )


# ==============================================================================
# CLI fixtures
# ==============================================================================


@pytest.fixture
def run_cli(work_dir: Path, data_file: Path) -> Callable[..., Any]:
    """
    Invoke the codevault app against the temp data file.

    Runs from the empty work_dir so no stray .env or .codevault.json
    is picked up.

    Example:
        result = run_cli("view", "-s")
        result = run_cli("capture", "-d", "x", "-l", "Go", input="package main\\n")
    """
    runner = CliRunner()

    def _run(*args: str, input: str | None = None) -> Any:
        return runner.invoke(app, ["--data-file", str(data_file), *args], input=input)

    return _run
