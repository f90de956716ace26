"""
Export selected snippets to one file per snippet.

Each snippet is written to ``<destination>/<id>.<extension>`` with the
extension taken from the language registry. Export is best-effort per
item: a failed write is recorded in the report and the remaining snippets
are still exported. Outcomes are reported in selection order.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from codevault.core.snippets.languages import extension_for
from codevault.core.snippets.models import Snippet

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_DIR = "snippet_exports"


class ExportStatus(str, Enum):
    """Outcome of exporting one snippet."""

    WRITTEN = "written"
    SKIPPED = "skipped"  # target file already existed
    FAILED = "failed"


@dataclass(frozen=True)
class ExportOutcome:
    """Result for a single snippet in an export batch."""

    snippet_id: int
    status: ExportStatus
    path: Path
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != ExportStatus.FAILED


@dataclass
class ExportReport:
    """Per-snippet outcomes of one export batch, in selection order."""

    destination: Path
    outcomes: list[ExportOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> list[ExportOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[ExportOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def all_ok(self) -> bool:
        return not self.failed

    def as_pairs(self) -> list[tuple[int, str]]:
        """(id, "ok" or failure reason) pairs for callers that only need a summary."""
        return [(o.snippet_id, "ok" if o.ok else (o.error or "failed")) for o in self.outcomes]


def export_filename(snippet: Snippet) -> str:
    """File name for a snippet: its id plus the language extension."""
    return f"{snippet.id}.{extension_for(snippet.language)}"


class SnippetExporter:
    """
    Writes snippets to per-language files on disk.

    Example:
        >>> exporter = SnippetExporter()
        >>> report = exporter.export(result.snippets, Path("out"))
        >>> report.as_pairs()
        [(1, 'ok'), (4, 'ok')]
    """

    def __init__(self, default_dir: Path | str = DEFAULT_EXPORT_DIR):
        """
        Args:
            default_dir: Destination used when export() is called without one
        """
        self.default_dir = Path(default_dir)

    def export(
        self,
        selection: Iterable[Snippet],
        destination: Path | str | None = None,
        overwrite: bool = False,
    ) -> ExportReport:
        """
        Write each snippet's code verbatim to its own file.

        Args:
            selection: Snippets to export, usually a query result
            destination: Target directory (created with parents if missing)
            overwrite: Replace files that already exist instead of skipping them

        Returns:
            ExportReport with one outcome per snippet, in selection order
        """
        snippets = list(selection)
        dest = Path(destination) if destination is not None else self.default_dir
        report = ExportReport(destination=dest)
        if not snippets:
            return report

        try:
            dest.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            reason = f"Cannot create directory {dest}: {e}"
            logger.warning(reason)
            for snippet in snippets:
                report.outcomes.append(
                    ExportOutcome(
                        snippet_id=snippet.id,
                        status=ExportStatus.FAILED,
                        path=dest / export_filename(snippet),
                        error=reason,
                    )
                )
            return report

        for snippet in snippets:
            report.outcomes.append(self._export_one(snippet, dest, overwrite))
        return report

    def _export_one(self, snippet: Snippet, dest: Path, overwrite: bool) -> ExportOutcome:
        target = dest / export_filename(snippet)

        if target.is_file() and not overwrite:
            logger.debug("Skipping snippet %d, %s already exists", snippet.id, target)
            return ExportOutcome(snippet_id=snippet.id, status=ExportStatus.SKIPPED, path=target)

        try:
            # newline="" keeps line endings exactly as captured
            with open(target, "w", encoding="utf-8", newline="") as f:
                f.write(snippet.code)
        except OSError as e:
            logger.warning("Failed to export snippet %d to %s: %s", snippet.id, target, e)
            return ExportOutcome(
                snippet_id=snippet.id,
                status=ExportStatus.FAILED,
                path=target,
                error=e.strerror or str(e),
            )

        logger.debug("Exported snippet %d to %s", snippet.id, target)
        return ExportOutcome(snippet_id=snippet.id, status=ExportStatus.WRITTEN, path=target)
