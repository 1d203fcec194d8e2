"""Match cursor over a single worksheet's used range.

The engine's ``find_next`` never says "done": once the last match is passed
it wraps around and returns the first match again. The cursor remembers
where the first match was and treats re-arriving there as the normal end of
the scan.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator, Set

from grepxlsx.engine.base import Cell, CellRange
from grepxlsx.models import CellPosition

LOGGER = logging.getLogger(__name__)


class CursorState(str, Enum):
    SEARCHING = "searching"
    FOUND_FIRST = "found_first"
    ENUMERATING = "enumerating"
    EXHAUSTED = "exhausted"


class TerminationReason(str, Enum):
    EMPTY_RANGE = "empty_range"
    NOT_FOUND = "not_found"
    NO_MORE_MATCHES = "no_more_matches"
    WRAPPED = "wrapped"
    REVISITED = "revisited"


class MatchCursor:
    """Yield every distinct cell matching ``text`` exactly once."""

    def __init__(self, cell_range: CellRange, text: str) -> None:
        self.cell_range = cell_range
        self.text = text
        self.state = CursorState.SEARCHING
        self.termination: TerminationReason | None = None
        self.find_next_calls = 0
        self._first: Cell | None = None

    @property
    def first_position(self) -> CellPosition | None:
        return self._first.position if self._first is not None else None

    def first(self) -> Cell | None:
        """Locate the first match without enumerating the rest."""
        if self.state is not CursorState.SEARCHING:
            return self._first

        if self.cell_range.is_empty:
            self._finish(TerminationReason.EMPTY_RANGE)
            return None

        anchor = self.cell_range.cell_at(1, 1)
        found = self.cell_range.find(self.text, anchor)
        if found is None:
            self._finish(TerminationReason.NOT_FOUND)
            return None

        self._first = found
        self.state = CursorState.FOUND_FIRST
        return found

    def __iter__(self) -> Iterator[Cell]:
        if self.state is not CursorState.SEARCHING:
            raise RuntimeError("MatchCursor can only be iterated once")

        first = self.first()
        if first is None:
            return
        yield first

        seen: Set[CellPosition] = {first.position}
        current = first
        while True:
            found = self.cell_range.find_next(current)
            self.find_next_calls += 1
            if found is None:
                self._finish(TerminationReason.NO_MORE_MATCHES)
                return

            LOGGER.debug("FindNext: start=%s after=%s", first.position, current.position)

            if found.position == first.position:
                self._finish(TerminationReason.WRAPPED)
                return
            if found.position in seen:
                LOGGER.warning(
                    "find_next returned %s twice before wrapping to %s; stopping",
                    found.position,
                    first.position,
                )
                self._finish(TerminationReason.REVISITED)
                return

            seen.add(found.position)
            self.state = CursorState.ENUMERATING
            current = found
            yield found

    def _finish(self, reason: TerminationReason) -> None:
        self.state = CursorState.EXHAUSTED
        self.termination = reason
        LOGGER.debug(
            "Cursor exhausted (%s) after %d find_next call(s)", reason.value, self.find_next_calls
        )
