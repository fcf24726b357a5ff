"""Base constraint: a named rule over a fixed scope of cell indices that observes those cells."""

import weakref
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple

from .errors import ConstraintConstructionError, NilGridError, SudokuError
from .observer import CellObserver
from .subsets import apply_hidden_subsets, apply_naked_subsets

if TYPE_CHECKING:
    from .cell import Cell
    from .grid import Grid

MAX_SUBSET_SIZE = 4


def validate_cell_indices(cells: Iterable[int], kind: str) -> Tuple[int, ...]:
    scope = tuple(cells)
    for idx in scope:
        if not isinstance(idx, int) or idx < 0 or idx > 80:
            raise ConstraintConstructionError(f"{kind}: invalid cell index {idx!r} (must be 0-80)")
    return scope


class Constraint(CellObserver):
    """
    Constraints are cell observers: once registered on a grid they receive
    `on_cell_solved` for every cell in their scope and prune the candidates of
    the sibling cells. Variants override `is_valid`, `propagate_value_change`
    and `requires_uniqueness`; the subset pass is shared.
    """

    def __init__(self, cells: Iterable[int], name: str) -> None:
        self.cells: Tuple[int, ...] = tuple(cells)
        self.name = name
        self._grid_ref: Optional["weakref.ReferenceType[Grid]"] = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, cells={list(self.cells)})"

    @property
    def scope(self) -> Tuple[int, ...]:
        return self.cells

    @property
    def description(self) -> str:
        return self.name

    @property
    def grid(self) -> Optional["Grid"]:
        return self._grid_ref() if self._grid_ref is not None else None

    def attach(self, grid: "Grid") -> None:
        """Record the owning grid. A constraint belongs to at most one grid."""
        current = self.grid
        if current is not None and current is not grid:
            raise SudokuError(f"{self.name} is already registered on another grid")
        self._grid_ref = weakref.ref(grid)

    def values(self, grid: "Grid") -> List[int]:
        return [grid.cell_at(idx).value for idx in self.cells]

    def _require_grid(self, grid: Optional["Grid"]) -> "Grid":
        if grid is None:
            raise NilGridError(f"{self.name}: grid cannot be None")
        return grid

    def is_valid(self, grid: "Grid") -> bool:
        raise NotImplementedError

    def on_cell_solved(self, row: int, col: int, value: int) -> None:
        self.propagate_value_change(row, col, value)

    def propagate_value_change(self, row: int, col: int, value: int) -> None:
        """Prune sibling candidates after (row, col) was set to value."""

    def requires_uniqueness(self) -> bool:
        return False

    def apply_pencil_mark_pass(self, grid: "Grid") -> bool:
        """
        One naked + hidden subset pass over the scope. Hidden subsets need every
        digit to appear in the scope, so they only run on nine-cell scopes.
        """
        if grid is None or not self.requires_uniqueness():
            return False
        max_size = min(MAX_SUBSET_SIZE, len(self.cells))
        changed = apply_naked_subsets(grid, self.cells, max_size)
        if len(self.cells) == 9:
            changed = apply_hidden_subsets(grid, self.cells, max_size) or changed
        return changed

    def _unsolved_siblings(self, row: int, col: int) -> List["Cell"]:
        grid = self.grid
        if grid is None:
            return []
        index = row * 9 + col
        siblings = []
        for idx in self.cells:
            if idx == index:
                continue
            cell = grid.cell_at(idx)
            if not cell.is_solved():
                siblings.append(cell)
        return siblings

    def _remove_from_siblings(self, row: int, col: int, value: int) -> None:
        for cell in self._unsolved_siblings(row, col):
            cell.remove_candidate(value)
