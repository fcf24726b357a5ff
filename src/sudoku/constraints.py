"""Concrete constraints: houses (row, column, box), killer cages, Renban and German Whispers lines."""

from typing import TYPE_CHECKING, Iterable, List

from .cell import DIGITS
from .constraint import Constraint, validate_cell_indices
from .errors import ConstraintConstructionError
from .subsets import has_unique_non_zeros

if TYPE_CHECKING:
    from .grid import Grid

WHISPER_MIN_DIFFERENCE = 5


def _check_house_number(kind: str, number: int) -> None:
    if not isinstance(number, int) or number < 0 or number > 8:
        raise ConstraintConstructionError(f"{kind} must be between 0 and 8, got {number!r}")


class _HouseConstraint(Constraint):
    """Nine cells that must hold distinct digits."""

    def is_valid(self, grid: "Grid") -> bool:
        grid = self._require_grid(grid)
        return has_unique_non_zeros(self.values(grid))

    def propagate_value_change(self, row: int, col: int, value: int) -> None:
        if value == 0:
            return
        self._remove_from_siblings(row, col, value)

    def requires_uniqueness(self) -> bool:
        return True


class RowConstraint(_HouseConstraint):
    def __init__(self, row: int) -> None:
        _check_house_number("row", row)
        super().__init__([row * 9 + col for col in range(9)], f"Row {row + 1}")
        self.row = row

    @property
    def description(self) -> str:
        return f"All values in row {self.row + 1} must be unique (1-9)"

    def is_valid(self, grid: "Grid") -> bool:
        grid = self._require_grid(grid)
        return has_unique_non_zeros(grid.row_values(self.row))


class ColumnConstraint(_HouseConstraint):
    def __init__(self, col: int) -> None:
        _check_house_number("column", col)
        super().__init__([row * 9 + col for row in range(9)], f"Column {col + 1}")
        self.col = col

    @property
    def description(self) -> str:
        return f"All values in column {self.col + 1} must be unique (1-9)"

    def is_valid(self, grid: "Grid") -> bool:
        grid = self._require_grid(grid)
        return has_unique_non_zeros(grid.column_values(self.col))


class BoxConstraint(_HouseConstraint):
    def __init__(self, box: int) -> None:
        _check_house_number("box", box)
        start_row, start_col = (box // 3) * 3, (box % 3) * 3
        cells = [
            (start_row + r) * 9 + (start_col + c)
            for r in range(3)
            for c in range(3)
        ]
        super().__init__(cells, f"Box {box + 1}")
        self.box = box

    @property
    def description(self) -> str:
        return f"All values in 3x3 box {self.box + 1} must be unique (1-9)"

    def is_valid(self, grid: "Grid") -> bool:
        grid = self._require_grid(grid)
        return has_unique_non_zeros(grid.box_values(self.box))


class KillerCageConstraint(Constraint):
    """Distinct digits that add up to `target_sum`."""

    def __init__(self, cells: Iterable[int], target_sum: int) -> None:
        scope = validate_cell_indices(cells, "killer cage")
        if not scope:
            raise ConstraintConstructionError("killer cage must have at least one cell")
        if not isinstance(target_sum, int) or target_sum < 1 or target_sum > 45:
            raise ConstraintConstructionError(f"target sum must be between 1 and 45, got {target_sum!r}")
        super().__init__(scope, f"Killer Cage ({target_sum})")
        self.target_sum = target_sum

    @property
    def description(self) -> str:
        return f"Killer cage with {len(self.cells)} cells - values must sum to {self.target_sum} and be unique"

    def is_valid(self, grid: "Grid") -> bool:
        grid = self._require_grid(grid)
        values = self.values(grid)
        if not has_unique_non_zeros(values):
            return False
        total = sum(values)
        if 0 in values:
            return total <= self.target_sum
        return total == self.target_sum

    def propagate_value_change(self, row: int, col: int, value: int) -> None:
        if value == 0 or self.grid is None:
            return
        self._remove_from_siblings(row, col, value)

        grid = self.grid
        placed = [v for v in self.values(grid) if v]
        remaining_cells = len(self.cells) - len(placed)
        remaining_sum = self.target_sum - sum(placed)

        for idx in self.cells:
            cell = grid.cell_at(idx)
            if cell.is_solved():
                continue
            for candidate in DIGITS:
                if remaining_cells == 1:
                    # The last open cell has to close the cage exactly.
                    if candidate != remaining_sum:
                        cell.remove_candidate(candidate)
                    continue
                rest = remaining_sum - candidate
                if rest < remaining_cells - 1 or rest > (remaining_cells - 1) * 9:
                    cell.remove_candidate(candidate)

    def requires_uniqueness(self) -> bool:
        return True


class RenbanConstraint(Constraint):
    """Distinct digits forming a run of consecutive values (in any order)."""

    def __init__(self, cells: Iterable[int]) -> None:
        scope = validate_cell_indices(cells, "renban")
        if not scope:
            raise ConstraintConstructionError("renban constraint must have at least one cell")
        super().__init__(scope, "Renban Line")

    @property
    def description(self) -> str:
        return (
            f"Renban line with {len(self.cells)} cells - values must form a consecutive set "
            "with no gaps or repeats"
        )

    def is_valid(self, grid: "Grid") -> bool:
        grid = self._require_grid(grid)
        values = self.values(grid)
        if not has_unique_non_zeros(values):
            return False
        if 0 in values:
            # Partial lines are only judged on repeats.
            return True
        ordered = sorted(values)
        return all(b == a + 1 for a, b in zip(ordered, ordered[1:]))

    def propagate_value_change(self, row: int, col: int, value: int) -> None:
        if value == 0 or self.grid is None:
            return
        self._remove_from_siblings(row, col, value)

        grid = self.grid
        placed = [v for v in self.values(grid) if v]
        low, high = min(placed + [value]), max(placed + [value])
        length = len(self.cells)

        for idx in self.cells:
            cell = grid.cell_at(idx)
            if cell.is_solved():
                continue
            for candidate in DIGITS:
                if max(high, candidate) - min(low, candidate) + 1 > length:
                    cell.remove_candidate(candidate)

    def requires_uniqueness(self) -> bool:
        return True


class GermanWhispersConstraint(Constraint):
    """Neighbouring cells along the line differ by at least 5. Digits may repeat."""

    def __init__(self, cells: Iterable[int]) -> None:
        scope = validate_cell_indices(cells, "german whispers")
        if len(scope) < 2:
            raise ConstraintConstructionError("german whispers constraint must have at least two cells")
        super().__init__(scope, "German Whispers")

    @property
    def description(self) -> str:
        return (
            f"German whispers line with {len(self.cells)} cells - adjacent values must differ "
            f"by at least {WHISPER_MIN_DIFFERENCE}"
        )

    def is_valid(self, grid: "Grid") -> bool:
        grid = self._require_grid(grid)
        values = self.values(grid)
        for a, b in zip(values, values[1:]):
            if a == 0 or b == 0:
                continue
            if abs(a - b) < WHISPER_MIN_DIFFERENCE:
                return False
        return True

    def propagate_value_change(self, row: int, col: int, value: int) -> None:
        if value == 0 or self.grid is None:
            return
        grid = self.grid
        index = row * 9 + col
        last = len(self.cells) - 1
        for pos, idx in enumerate(self.cells):
            if idx != index:
                continue
            neighbours = [p for p in (pos - 1, pos + 1) if 0 <= p <= last]
            for p in neighbours:
                cell = grid.cell_at(self.cells[p])
                if cell.is_solved():
                    continue
                for candidate in DIGITS:
                    if abs(candidate - value) < WHISPER_MIN_DIFFERENCE:
                        cell.remove_candidate(candidate)


def build_row_constraints() -> List[RowConstraint]:
    return [RowConstraint(r) for r in range(9)]


def build_col_constraints() -> List[ColumnConstraint]:
    return [ColumnConstraint(c) for c in range(9)]


def build_box_constraints() -> List[BoxConstraint]:
    return [BoxConstraint(b) for b in range(9)]


def build_standard_constraints() -> List[Constraint]:
    """Row, column and box constraints interleaved by house number."""
    constraints: List[Constraint] = []
    for i in range(9):
        constraints.extend([RowConstraint(i), ColumnConstraint(i), BoxConstraint(i)])
    return constraints
