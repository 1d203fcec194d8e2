"""Contract between the search loop and a spreadsheet engine.

The search loop only ever talks to these interfaces. An engine opens
workbooks, lists their worksheets and answers ``find`` / ``find_next``
queries over a worksheet's used range the way a desktop spreadsheet
application does: ``find_next`` never reports exhaustion on its own, it
wraps around to the top of the range and hands back the first match again.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from grepxlsx.models import CellPosition, CellValue


@dataclass(frozen=True, slots=True)
class Cell:
    position: CellPosition
    value: CellValue

    @property
    def row(self) -> int:
        return self.position.row

    @property
    def column(self) -> int:
        return self.position.column


class CellRange(ABC):
    """Rectangular block of cells, usually a worksheet's used range."""

    @property
    @abstractmethod
    def is_empty(self) -> bool:
        """True when the range holds no data at all."""

    @abstractmethod
    def cell_at(self, row: int, column: int) -> Cell:
        """Return the cell at 1-based ``(row, column)`` relative to the range origin."""

    @abstractmethod
    def find(self, text: str, after: Cell) -> Cell | None:
        """Return the first cell after ``after`` whose text contains ``text``.

        The search wraps around; ``after`` itself is examined last.
        """

    @abstractmethod
    def find_next(self, after: Cell) -> Cell | None:
        """Repeat the previous :meth:`find` starting after ``after``."""


class Worksheet(ABC):
    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def index(self) -> int: ...

    @abstractmethod
    def used_range(self) -> CellRange: ...


class Workbook(ABC):
    @property
    @abstractmethod
    def path(self) -> Path: ...

    @abstractmethod
    def sheets(self) -> Sequence[Worksheet]: ...


class SpreadsheetEngine(ABC):
    """A single engine session; only one workbook may be open at a time."""

    @abstractmethod
    def open_workbook(self, path: Path) -> AbstractContextManager[Workbook]:
        """Open ``path`` for the duration of a ``with`` block."""
