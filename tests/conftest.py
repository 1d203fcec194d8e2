"""Shared fixtures for grep-xlsx tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

import pytest
from openpyxl import Workbook

SheetSpec = Dict[str, Dict[str, object]]


def write_workbook(path: Path, sheets: SheetSpec) -> Path:
    """Create an .xlsx at ``path`` with ``{sheet: {"A1": value}}`` contents."""
    workbook = Workbook()
    workbook.remove(workbook.active)
    for name, cells in sheets.items():
        sheet = workbook.create_sheet(title=name)
        for coordinate, value in cells.items():
            sheet[coordinate] = value
    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    return path


@pytest.fixture
def make_workbook() -> Callable[[Path, SheetSpec], Path]:
    return write_workbook
