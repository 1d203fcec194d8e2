"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

WORKBOOK_EXTENSION = ".xlsx"
# Excel drops "~$<name>.xlsx" next to a workbook while it is open.
LOCK_FILE_MARKER = "~$"


class SearchMode(str, Enum):
    SUMMARY = "summary"
    DETAILED = "detailed"


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


@dataclass(frozen=True, slots=True)
class SearchRequest:
    """Everything a single run needs to know; never mutated once built."""

    text: str
    root_dir: Path = field(default_factory=lambda: Path("."))
    mode: SearchMode = SearchMode.SUMMARY
    only_hit: bool = True
    output_format: OutputFormat = OutputFormat.TEXT

    @property
    def detailed(self) -> bool:
        return self.mode is SearchMode.DETAILED

    def resolve_root(self, base_dir: Path | None = None) -> Path:
        root = Path(self.root_dir)
        if not root.is_absolute() and base_dir is not None:
            root = base_dir / root
        return root.absolute()
