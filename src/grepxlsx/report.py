"""Formatting and printing of search results."""

from __future__ import annotations

import json
from typing import Any, Dict

from rich.console import Console

from grepxlsx.config import OutputFormat
from grepxlsx.models import Document, MatchRecord

HIT = "HIT"
NO_HIT = "NO HIT"


def quote(value: str) -> str:
    """Double-quote ``value`` with backslash escapes, keeping non-ASCII text."""
    return json.dumps(value, ensure_ascii=False)


def to_json(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))


def summary_payload(document: Document, sheet_name: str, hit: bool) -> Dict[str, Any]:
    return {
        "path": str(document.relative_path),
        "sheet": sheet_name,
        "text": HIT if hit else NO_HIT,
    }


def detail_payload(record: MatchRecord) -> Dict[str, Any]:
    return {
        "path": str(record.document_path),
        "sheet": record.sheet_name,
        "row": record.position.row,
        "col": record.position.column,
        "text": record.matched_text,
    }


def format_summary(document: Document, sheet_name: str, hit: bool, output_format: OutputFormat) -> str:
    payload = summary_payload(document, sheet_name, hit)
    if output_format is OutputFormat.JSON:
        return to_json(payload)
    return f"{payload['path']} {quote(sheet_name)}: {payload['text']}"


def format_match(record: MatchRecord, output_format: OutputFormat) -> str:
    payload = detail_payload(record)
    if output_format is OutputFormat.JSON:
        return to_json(payload)
    return (
        f"{payload['path']} {quote(record.sheet_name)} "
        f"({payload['row']},{payload['col']}): {quote(record.matched_text)}"
    )


class Reporter:
    """Writes one line per result to stdout as soon as it is found."""

    def __init__(self, output_format: OutputFormat = OutputFormat.TEXT, console: Console | None = None) -> None:
        self.output_format = output_format
        self.console = console or Console(markup=False, highlight=False, emoji=False, soft_wrap=True)

    def report_summary(self, document: Document, sheet_name: str, hit: bool) -> None:
        self._write(format_summary(document, sheet_name, hit, self.output_format))

    def report_match(self, record: MatchRecord) -> None:
        self._write(format_match(record, self.output_format))

    def _write(self, line: str) -> None:
        self.console.print(line, markup=False, highlight=False, emoji=False, soft_wrap=True)
