"""Core grep-xlsx data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class Document:
    """A workbook discovered under the search root."""

    path: Path
    relative_path: Path


@dataclass(frozen=True, slots=True)
class CellPosition:
    """1-based sheet grid coordinates."""

    row: int
    column: int

    def __post_init__(self) -> None:
        if self.row < 1 or self.column < 1:
            raise ValueError(f"Cell coordinates must be positive: ({self.row}, {self.column})")

    def __str__(self) -> str:
        return f"({self.row},{self.column})"


class ValueKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    ERROR = "error"
    EMPTY = "empty"


@dataclass(frozen=True, slots=True)
class CellValue:
    """Typed view of a cell's content, as seen by the search."""

    kind: ValueKind
    text: str
    raw: Any = None

    @property
    def is_empty(self) -> bool:
        return self.kind is ValueKind.EMPTY

    @classmethod
    def empty(cls) -> "CellValue":
        return cls(ValueKind.EMPTY, "")


@dataclass(slots=True)
class MatchRecord:
    """One matching cell found in a worksheet."""

    document_path: Path
    sheet_name: str
    position: CellPosition
    matched_text: str
