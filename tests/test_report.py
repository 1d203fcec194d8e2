"""Tests for result formatting and printing."""

from __future__ import annotations

import io
import json
from pathlib import Path

from rich.console import Console

from grepxlsx.config import OutputFormat
from grepxlsx.models import CellPosition, Document, MatchRecord
from grepxlsx.report import Reporter, format_match, format_summary, quote


def _document(name: str = "a.xlsx") -> Document:
    return Document(path=Path("/root/dir") / name, relative_path=Path(name))


def _record(text: str = "foo") -> MatchRecord:
    return MatchRecord(
        document_path=Path("a.xlsx"),
        sheet_name="Sheet1",
        position=CellPosition(3, 2),
        matched_text=text,
    )


class TestFormatting:
    """Test text and JSON line formats."""

    def test_summary_text(self) -> None:
        assert format_summary(_document(), "Sheet1", True, OutputFormat.TEXT) == 'a.xlsx "Sheet1": HIT'
        assert (
            format_summary(_document(), "Sheet1", False, OutputFormat.TEXT)
            == 'a.xlsx "Sheet1": NO HIT'
        )

    def test_summary_json(self) -> None:
        line = format_summary(_document(), "Sheet1", True, OutputFormat.JSON)
        assert line == '{"path":"a.xlsx","sheet":"Sheet1","text":"HIT"}'

    def test_match_text(self) -> None:
        assert format_match(_record(), OutputFormat.TEXT) == 'a.xlsx "Sheet1" (3,2): "foo"'

    def test_match_json(self) -> None:
        line = format_match(_record(), OutputFormat.JSON)
        assert line == '{"path":"a.xlsx","sheet":"Sheet1","row":3,"col":2,"text":"foo"}'

    def test_quote_escapes(self) -> None:
        assert quote('say "hi"\n') == '"say \\"hi\\"\\n"'

    def test_non_ascii_is_kept(self) -> None:
        line = format_match(_record("café"), OutputFormat.JSON)
        assert "café" in line
        assert json.loads(line)["text"] == "café"


class TestReporter:
    """Test Reporter output."""

    def _reporter(self, output_format: OutputFormat) -> tuple[Reporter, io.StringIO]:
        buffer = io.StringIO()
        console = Console(file=buffer, width=20)
        return Reporter(output_format, console=console), buffer

    def test_writes_one_line_per_call(self) -> None:
        reporter, buffer = self._reporter(OutputFormat.TEXT)

        reporter.report_summary(_document(), "Sheet1", True)
        reporter.report_match(_record())

        assert buffer.getvalue() == 'a.xlsx "Sheet1": HIT\na.xlsx "Sheet1" (3,2): "foo"\n'

    def test_long_lines_are_not_wrapped(self) -> None:
        reporter, buffer = self._reporter(OutputFormat.JSON)

        reporter.report_match(_record("x" * 100))

        assert buffer.getvalue().count("\n") == 1
        assert json.loads(buffer.getvalue())["text"] == "x" * 100

    def test_markup_is_printed_verbatim(self) -> None:
        reporter, buffer = self._reporter(OutputFormat.TEXT)

        reporter.report_match(_record("[bold]x[/bold] :smile:"))

        assert '"[bold]x[/bold] :smile:"' in buffer.getvalue()
