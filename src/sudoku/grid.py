"""The 9x9 grid: owns the cells, the registered constraints and board-level observers."""

from typing import List, Optional

from .cell import Cell
from .constraint import Constraint
from .errors import InvalidPositionError
from .observer import CellObserver
from .techniques import apply_swordfish, apply_x_wings, apply_xy_wings
from src.utils.trace import Tracer, get_tracer


def _check_position(row: int, col: int) -> None:
    if not (isinstance(row, int) and isinstance(col, int)) or not (0 <= row <= 8 and 0 <= col <= 8):
        raise InvalidPositionError(f"invalid position: row={row!r}, col={col!r}")


class Grid:
    """
    Setting a value goes through the target cell, whose observers (the
    constraints covering it, plus any board-level observers) prune candidates
    elsewhere. Deductions beyond that are explicit calls: the pencil-mark pass
    and the advanced techniques.

    Without an explicit `tracer` every step goes to the global tracer, which
    keeps growing across grids. Long-running callers should pass their own
    Tracer (or Tracer(enabled=False)) or call reset_tracer() between puzzles.
    """

    def __init__(self, tracer: Optional[Tracer] = None) -> None:
        self._tracer = tracer
        self.cells: List[Cell] = [Cell(row, col, self) for row in range(9) for col in range(9)]
        self.constraints: List[Constraint] = []
        self.observers: List[CellObserver] = []

    @property
    def tracer(self) -> Tracer:
        return self._tracer if self._tracer is not None else get_tracer()

    def cell(self, row: int, col: int) -> Cell:
        _check_position(row, col)
        return self.cells[row * 9 + col]

    def cell_at(self, index: int) -> Cell:
        if not isinstance(index, int) or index < 0 or index > 80:
            raise InvalidPositionError(f"invalid cell index: {index!r} (must be 0-80)")
        return self.cells[index]

    def set(self, row: int, col: int, value: int) -> None:
        self.cell(row, col).set_value(value)

    def get(self, row: int, col: int) -> int:
        return self.cell(row, col).value

    def row_values(self, row: int) -> List[int]:
        _check_position(row, 0)
        return [cell.value for cell in self.cells[row * 9:(row + 1) * 9]]

    def column_values(self, col: int) -> List[int]:
        _check_position(0, col)
        return [self.cells[row * 9 + col].value for row in range(9)]

    def box_values(self, box: int) -> List[int]:
        if not isinstance(box, int) or box < 0 or box > 8:
            raise InvalidPositionError(f"invalid box: {box!r}")
        start_row, start_col = (box // 3) * 3, (box % 3) * 3
        return [
            self.cells[(start_row + r) * 9 + start_col + c].value
            for r in range(3)
            for c in range(3)
        ]

    def add_constraint(self, constraint: Constraint) -> None:
        """Register the constraint and subscribe it to every cell in its scope."""
        constraint.attach(self)
        self.constraints.append(constraint)
        for idx in constraint.scope:
            self.cells[idx].add_observer(constraint)
        self.tracer.log_message("DEBUG", f"Constraint '{constraint.name}' observing {len(constraint.scope)} cells")

    def add_observer(self, observer: CellObserver) -> None:
        if observer is None:
            return
        self.observers.append(observer)
        for cell in self.cells:
            cell.add_observer(observer)

    def remove_observer(self, observer: CellObserver) -> None:
        for i, obs in enumerate(self.observers):
            if obs is observer:
                del self.observers[i]
                break
        for cell in self.cells:
            cell.remove_observer(observer)

    def validate_all(self) -> bool:
        """Check constraints in registration order, stopping at the first failure."""
        tracer = self.tracer
        for constraint in self.constraints:
            valid = constraint.is_valid(self)
            tracer.log_constraint_check(constraint.name, valid)
            if not valid:
                return False
        return True

    def contradictions(self) -> List[Cell]:
        """Unsolved cells left without any candidate."""
        return [cell for cell in self.cells if cell.is_contradiction()]

    def is_complete(self) -> bool:
        return all(cell.is_solved() for cell in self.cells)

    def apply_pencil_mark_pass(self) -> bool:
        """One subset pass over every uniqueness constraint; True if anything was eliminated."""
        changed = False
        for constraint in self.constraints:
            if constraint.requires_uniqueness() and constraint.apply_pencil_mark_pass(self):
                changed = True
        return changed

    def apply_pencil_mark_until_stable(self) -> int:
        """Repeat the pencil-mark pass until it stops eliminating; returns the number of passes."""
        iterations = 0
        while True:
            iterations += 1
            if not self.apply_pencil_mark_pass():
                break
        self.tracer.log_message("INFO", f"Pencil marks stabilized after {iterations} iteration(s)")
        return iterations

    def apply_advanced_techniques(self) -> bool:
        """X-Wing, then Swordfish, then XY-Wing, each run once."""
        changed = apply_x_wings(self)
        changed = apply_swordfish(self) or changed
        changed = apply_xy_wings(self) or changed
        return changed

    def to_string(self) -> str:
        """81 characters in row-major order, '0' for empty cells."""
        return "".join(str(cell.value) for cell in self.cells)

    def __str__(self) -> str:
        values = self.to_string()
        return "\n".join(values[r * 9:(r + 1) * 9] for r in range(9))
