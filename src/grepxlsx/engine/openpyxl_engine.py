"""Spreadsheet engine backed by openpyxl.

openpyxl only reads cells, so the find / find-next behaviour of a desktop
spreadsheet application is reproduced here: cells are visited row by row,
left to right, starting right after the anchor cell and wrapping from the
bottom-right corner back to the top-left. A cell matches when its text
contains the query, ignoring case.
"""

from __future__ import annotations

import logging
import warnings
from bisect import bisect_right
from contextlib import ExitStack, contextmanager
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, Sequence, Tuple

from openpyxl import load_workbook
from openpyxl.worksheet.worksheet import Worksheet as _OpenpyxlSheet

from grepxlsx.engine.base import Cell, CellRange, SpreadsheetEngine, Workbook, Worksheet
from grepxlsx.errors import EngineError
from grepxlsx.models import CellPosition, CellValue, ValueKind

LOGGER = logging.getLogger(__name__)

# openpyxl's data_type code for error cells such as "#N/A"
_ERROR_TYPE = "e"


def _format_number(raw: int | float | Decimal) -> str:
    if isinstance(raw, float) and raw.is_integer():
        return str(int(raw))
    return str(raw)


def to_cell_value(raw: Any, data_type: str | None = None) -> CellValue:
    """Convert a raw openpyxl value into a :class:`CellValue`."""
    if raw is None or raw == "":
        return CellValue.empty()
    if isinstance(raw, bool):
        return CellValue(ValueKind.BOOLEAN, "TRUE" if raw else "FALSE", raw)
    if isinstance(raw, (int, float, Decimal)):
        return CellValue(ValueKind.NUMBER, _format_number(raw), raw)
    if isinstance(raw, (datetime, date, time)):
        return CellValue(ValueKind.DATE, raw.isoformat(), raw)
    if isinstance(raw, timedelta):
        return CellValue(ValueKind.DATE, str(raw), raw)
    if isinstance(raw, str):
        kind = ValueKind.ERROR if data_type == _ERROR_TYPE else ValueKind.TEXT
        return CellValue(kind, raw, raw)
    raise EngineError("read cell value", f"unsupported value type {type(raw).__name__}")


def _stored_cells(sheet: _OpenpyxlSheet) -> Iterable[Any]:
    """Cells openpyxl actually holds for ``sheet``, in no particular order.

    ``iter_rows`` creates a cell for every coordinate it passes, so a sheet
    with two cells far apart would cost rows x columns.
    """
    return list(sheet._cells.values())


class OpenpyxlRange(CellRange):
    """Sparse snapshot of a worksheet's used range.

    Only non-empty cells are kept, keyed by ``(row, column)``; the bounds are
    the smallest rectangle around them.
    """

    def __init__(self, cells: Iterable[Cell]) -> None:
        self._cells: Dict[Tuple[int, int], Cell] = {
            (cell.row, cell.column): cell for cell in cells if not cell.value.is_empty
        }
        self._keys = sorted(self._cells)
        self._folded = [self._cells[key].value.text.casefold() for key in self._keys]
        if self._keys:
            columns = [column for _, column in self._keys]
            self._origin = CellPosition(self._keys[0][0], min(columns))
            self._shape = (
                self._keys[-1][0] - self._origin.row + 1,
                max(columns) - self._origin.column + 1,
            )
        else:
            self._origin = CellPosition(1, 1)
            self._shape = (1, 1)
        self._query: str | None = None

    @classmethod
    def from_worksheet(cls, sheet: _OpenpyxlSheet) -> "OpenpyxlRange":
        return cls(
            Cell(CellPosition(cell.row, cell.column), to_cell_value(cell.value, cell.data_type))
            for cell in _stored_cells(sheet)
        )

    @property
    def is_empty(self) -> bool:
        return not self._keys

    @property
    def origin(self) -> CellPosition:
        return self._origin

    @property
    def shape(self) -> tuple[int, int]:
        return self._shape

    def cell_at(self, row: int, column: int) -> Cell:
        height, width = self.shape
        if not (1 <= row <= height and 1 <= column <= width):
            raise EngineError("cell_at", f"({row},{column}) is outside a {height}x{width} range")
        position = CellPosition(self._origin.row + row - 1, self._origin.column + column - 1)
        found = self._cells.get((position.row, position.column))
        return found if found is not None else Cell(position, CellValue.empty())

    def find(self, text: str, after: Cell) -> Cell | None:
        if not text:
            raise EngineError("find", "search text is empty")
        self._query = text.casefold()
        return self._search("find", after)

    def find_next(self, after: Cell) -> Cell | None:
        if self._query is None:
            raise EngineError("find_next", "find was never called on this range")
        return self._search("find_next", after)

    def _check_inside(self, operation: str, position: CellPosition) -> None:
        height, width = self.shape
        row = position.row - self._origin.row
        column = position.column - self._origin.column
        if not (0 <= row < height and 0 <= column < width):
            raise EngineError(operation, f"cell {position} is outside the searched range")

    def _search(self, operation: str, after: Cell) -> Cell | None:
        self._check_inside(operation, after.position)
        total = len(self._keys)
        # Row-major order is tuple order, so the first key past ``after`` starts the scan.
        start = bisect_right(self._keys, (after.row, after.column))
        for step in range(total):
            index = (start + step) % total
            if self._query in self._folded[index]:
                return self._cells[self._keys[index]]
        return None


class OpenpyxlWorksheet(Worksheet):
    def __init__(self, sheet: _OpenpyxlSheet, index: int) -> None:
        self._sheet = sheet
        self._index = index

    @property
    def name(self) -> str:
        return self._sheet.title

    @property
    def index(self) -> int:
        return self._index

    def used_range(self) -> CellRange:
        try:
            return OpenpyxlRange.from_worksheet(self._sheet)
        except EngineError:
            raise
        except Exception as exc:
            raise EngineError("used_range", exc) from exc


class OpenpyxlWorkbook(Workbook):
    def __init__(self, workbook: Any, path: Path) -> None:
        self._workbook = workbook
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def sheets(self) -> Sequence[Worksheet]:
        try:
            return [
                OpenpyxlWorksheet(sheet, index)
                for index, sheet in enumerate(self._workbook.worksheets)
            ]
        except Exception as exc:
            raise EngineError("list worksheets", exc) from exc

    def close(self) -> None:
        self._workbook.close()


class OpenpyxlEngine(SpreadsheetEngine):
    """Engine session; use as a context manager around the whole run.

    While the session is active openpyxl's warnings about workbook features
    it cannot read are silenced, and at most one workbook is open.
    """

    def __init__(self, *, data_only: bool = True, silent: bool = True) -> None:
        self.data_only = data_only
        self.silent = silent
        self._stack: ExitStack | None = None
        self._current: OpenpyxlWorkbook | None = None

    @property
    def active(self) -> bool:
        return self._stack is not None

    def __enter__(self) -> "OpenpyxlEngine":
        if self.active:
            raise EngineError("start engine", "session is already active")
        stack = ExitStack()
        if self.silent:
            stack.enter_context(warnings.catch_warnings())
            warnings.filterwarnings("ignore", category=UserWarning, module="openpyxl")
        stack.callback(self._release_current)
        self._stack = stack
        LOGGER.debug("Engine session started (silent=%s)", self.silent)
        return self

    def __exit__(self, *exc_info: object) -> None:
        stack, self._stack = self._stack, None
        if stack is not None:
            stack.close()
        LOGGER.debug("Engine session stopped")

    @contextmanager
    def open_workbook(self, path: Path) -> Iterator[Workbook]:
        if not self.active:
            raise EngineError("open workbook", "engine session is not active")
        if self._current is not None:
            raise EngineError("open workbook", f"{self._current.path} is still open")

        try:
            raw = load_workbook(path, data_only=self.data_only, keep_links=False)
        except Exception as exc:
            raise EngineError("open workbook", exc) from exc

        self._current = OpenpyxlWorkbook(raw, Path(path))
        LOGGER.debug("Document Open: %s", path)
        try:
            yield self._current
        finally:
            self._release_current()

    def _release_current(self) -> None:
        current, self._current = self._current, None
        if current is not None:
            current.close()
            LOGGER.debug("Document Close: %s", current.path)
