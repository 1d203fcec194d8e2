"""Tests for core data models."""

from __future__ import annotations

from pathlib import Path

import pytest

from grepxlsx.errors import EngineError
from grepxlsx.models import CellPosition, CellValue, Document, MatchRecord, ValueKind


class TestCellPosition:
    """Test CellPosition dataclass."""

    def test_equality_and_hash(self) -> None:
        assert CellPosition(2, 3) == CellPosition(2, 3)
        assert len({CellPosition(2, 3), CellPosition(2, 3), CellPosition(3, 2)}) == 2

    def test_str(self) -> None:
        assert str(CellPosition(4, 1)) == "(4,1)"

    @pytest.mark.parametrize("row, column", [(0, 1), (1, 0), (-1, 5)])
    def test_rejects_non_positive(self, row: int, column: int) -> None:
        with pytest.raises(ValueError):
            CellPosition(row, column)


class TestCellValue:
    """Test CellValue dataclass."""

    def test_empty(self) -> None:
        value = CellValue.empty()
        assert value.kind is ValueKind.EMPTY
        assert value.text == ""
        assert value.is_empty

    def test_text_is_not_empty(self) -> None:
        assert not CellValue(ValueKind.TEXT, "foo", "foo").is_empty


class TestMatchRecord:
    """Test MatchRecord dataclass."""

    def test_create_record(self) -> None:
        record = MatchRecord(
            document_path=Path("a.xlsx"),
            sheet_name="Sheet1",
            position=CellPosition(1, 2),
            matched_text="foo",
        )

        assert record.document_path == Path("a.xlsx")
        assert record.sheet_name == "Sheet1"
        assert record.position.column == 2
        assert record.matched_text == "foo"

    def test_document(self) -> None:
        document = Document(path=Path("/root/a.xlsx"), relative_path=Path("a.xlsx"))
        assert document.relative_path == Path("a.xlsx")


class TestEngineError:
    def test_message_names_operation(self) -> None:
        error = EngineError("open workbook", "File is not a zip file")

        assert str(error) == "open workbook failed: File is not a zip file"
        assert error.operation == "open workbook"
