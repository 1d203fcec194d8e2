"""Search run: walk the tree, open each workbook, scan every sheet."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from grepxlsx.config import SearchRequest
from grepxlsx.engine.base import SpreadsheetEngine, Worksheet
from grepxlsx.models import Document, MatchRecord
from grepxlsx.report import Reporter
from grepxlsx.search.cursor import MatchCursor
from grepxlsx.utils.files import iter_workbook_paths

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class SearchStats:
    documents: int = 0
    sheets: int = 0
    sheets_hit: int = 0
    matches: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def add_sheet(self, matches: int) -> None:
        self.sheets += 1
        if matches:
            self.sheets_hit += 1
        self.matches += matches


class Searcher:
    """Runs one :class:`SearchRequest` against an active engine session."""

    def __init__(
        self,
        engine: SpreadsheetEngine,
        request: SearchRequest,
        reporter: Reporter,
        *,
        base_dir: Path | None = None,
    ) -> None:
        self.engine = engine
        self.request = request
        self.reporter = reporter
        self.root = request.resolve_root(base_dir)

    def run(self) -> SearchStats:
        """Scan every workbook under the root; the first error aborts the run."""
        stats = SearchStats()
        for document in iter_workbook_paths(self.root):
            self._scan_document(document, stats)
        LOGGER.debug(
            "Scanned %d document(s), %d sheet(s): %d sheet(s) hit, %d match(es)",
            stats.documents,
            stats.sheets,
            stats.sheets_hit,
            stats.matches,
        )
        return stats

    def _scan_document(self, document: Document, stats: SearchStats) -> None:
        with self.engine.open_workbook(document.path) as workbook:
            for sheet in workbook.sheets():
                stats.add_sheet(self._scan_sheet(document, sheet))
        stats.documents += 1
        stats.processed_files.append(document.path)

    def _scan_sheet(self, document: Document, sheet: Worksheet) -> int:
        """Report the results for one sheet and return how many matches it had."""
        cursor = MatchCursor(sheet.used_range(), self.request.text)

        if not self.request.detailed:
            hit = cursor.first() is not None
            if hit or not self.request.only_hit:
                self.reporter.report_summary(document, sheet.name, hit)
            return int(hit)

        count = 0
        for cell in cursor:
            self.reporter.report_match(
                MatchRecord(
                    document_path=document.relative_path,
                    sheet_name=sheet.name,
                    position=cell.position,
                    matched_text=cell.value.text,
                )
            )
            count += 1

        LOGGER.debug(
            "%s %r: %d match(es), cursor stopped: %s",
            document.relative_path,
            sheet.name,
            count,
            cursor.termination.value if cursor.termination else "n/a",
        )
        if not count and not self.request.only_hit:
            self.reporter.report_summary(document, sheet.name, False)
        return count
