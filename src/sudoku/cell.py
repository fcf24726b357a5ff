"""A single grid position: its value or its remaining candidates, plus its observers."""

import weakref
from typing import TYPE_CHECKING, Optional, Set, Tuple

from .errors import InvalidValueError
from .observer import CellNotifier, CellObserver
from src.utils.trace import Tracer, get_tracer

if TYPE_CHECKING:
    from .grid import Grid

DIGITS: Tuple[int, ...] = tuple(range(1, 10))


class Cell:
    """
    A cell is either unsolved (value 0, non-empty candidate set) or solved
    (value 1..9, no candidates). Every state change is pushed synchronously to
    the observers registered on the cell, in registration order.
    """

    def __init__(self, row: int, col: int, grid: Optional["Grid"] = None) -> None:
        self.row = row
        self.col = col
        self.index = row * 9 + col
        self.value = 0
        self._candidates: Set[int] = set(DIGITS)
        self.notifier = CellNotifier()
        self._grid_ref = weakref.ref(grid) if grid is not None else None

    def __repr__(self) -> str:
        if self.value:
            return f"Cell(R{self.row + 1}C{self.col + 1}={self.value})"
        return f"Cell(R{self.row + 1}C{self.col + 1} {''.join(map(str, self.candidates))})"

    @property
    def grid(self) -> Optional["Grid"]:
        return self._grid_ref() if self._grid_ref is not None else None

    @property
    def candidates(self) -> Tuple[int, ...]:
        """Remaining candidates in ascending order; empty once solved."""
        if self.value:
            return ()
        return tuple(sorted(self._candidates))

    def _tracer(self) -> Tracer:
        grid = self.grid
        return grid.tracer if grid is not None else get_tracer()

    def set_value(self, value: int) -> None:
        """
        Place `value` (1..9) and notify observers, or reset the cell with 0.
        Placing does not check the value against the candidates: the grid can
        be driven into an invalid state, which `is_valid` then reports.
        """
        if not isinstance(value, int) or value < 0 or value > 9:
            raise InvalidValueError(f"value must be between 0 and 9, got {value!r}")

        if value == 0:
            self.clear()
            return

        self.value = value
        self._candidates = set()
        self._tracer().log_cell_solved(self.row, self.col, value)
        self.notifier.notify_cell_solved(self.row, self.col, value)

    def clear(self) -> None:
        """Reset to unsolved with every digit as a candidate. Observers are not notified."""
        self.value = 0
        self._candidates = set(DIGITS)

    def remove_candidate(self, candidate: int) -> bool:
        """Remove a candidate; returns True when something was actually removed."""
        if self.value or candidate not in self._candidates:
            return False

        self._candidates.discard(candidate)
        remaining = len(self._candidates)
        tracer = self._tracer()
        tracer.log_candidate_eliminated(self.row, self.col, candidate, remaining)
        if remaining == 0:
            tracer.log_contradiction(self.row, self.col, candidate)

        self.notifier.notify_candidate_eliminated(self.row, self.col, candidate, remaining)
        if remaining == 1:
            last = next(iter(self._candidates))
            tracer.log_single_candidate(self.row, self.col, last)
            self.notifier.notify_single_candidate(self.row, self.col, last)
        return True

    def add_candidate(self, candidate: int) -> None:
        if self.value or candidate not in DIGITS:
            return
        self._candidates.add(candidate)

    def has_candidate(self, candidate: int) -> bool:
        return not self.value and candidate in self._candidates

    def candidate_count(self) -> int:
        return 0 if self.value else len(self._candidates)

    def is_solved(self) -> bool:
        return self.value != 0

    def is_contradiction(self) -> bool:
        """True when the cell is unsolved but no digit is left for it."""
        return not self.value and not self._candidates

    def add_observer(self, observer: CellObserver) -> None:
        self.notifier.add_observer(observer)

    def remove_observer(self, observer: CellObserver) -> None:
        self.notifier.remove_observer(observer)
