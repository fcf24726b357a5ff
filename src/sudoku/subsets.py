"""Naked and hidden subset elimination over a single constraint scope."""

from itertools import combinations
from typing import TYPE_CHECKING, Dict, Iterable, List, Sequence

from .cell import DIGITS, Cell

if TYPE_CHECKING:
    from .grid import Grid


def has_unique_non_zeros(values: Iterable[int]) -> bool:
    """True when no digit 1..9 repeats; zeros (empty cells) are ignored, anything else fails."""
    seen = set()
    for v in values:
        if v == 0:
            continue
        if v < 1 or v > 9 or v in seen:
            return False
        seen.add(v)
    return True


def _unsolved_cells(grid: "Grid", cell_indices: Sequence[int]) -> List[Cell]:
    return [grid.cell_at(idx) for idx in cell_indices if not grid.cell_at(idx).is_solved()]


def apply_naked_subsets(grid: "Grid", cell_indices: Sequence[int], max_subset_size: int) -> bool:
    """
    When k unsolved cells of the scope hold exactly k candidates between them,
    those candidates are removed from every other unsolved cell of the scope.
    Subset sizes run from 2 to `max_subset_size` (bounded by the number of unsolved cells).
    """
    if grid is None or not cell_indices:
        return False

    unsolved = _unsolved_cells(grid, cell_indices)
    if len(unsolved) < 2:
        return False

    tracer = grid.tracer
    changed = False
    max_size = min(max_subset_size, len(unsolved))
    for size in range(2, max_size + 1):
        for subset in combinations(unsolved, size):
            union = set()
            for cell in subset:
                union.update(cell.candidates)
            if len(union) != size:
                continue

            eliminated = 0
            for cell in unsolved:
                if cell in subset:
                    continue
                for candidate in sorted(union):
                    if cell.remove_candidate(candidate):
                        eliminated += 1
            if eliminated:
                changed = True
                tracer.log_technique(
                    "naked_subset",
                    eliminated,
                    reason=f"Cells {[c.index for c in subset]} hold {sorted(union)}",
                )
    return changed


def apply_hidden_subsets(grid: "Grid", cell_indices: Sequence[int], max_subset_size: int) -> bool:
    """
    When k digits can only go in the same k unsolved cells of the scope,
    every other candidate is removed from those cells. Digits confined to a
    single cell (hidden singles) are not considered here.
    """
    if grid is None or not cell_indices:
        return False

    unsolved = _unsolved_cells(grid, cell_indices)
    if len(unsolved) < 2:
        return False

    locations: Dict[int, List[Cell]] = {digit: [] for digit in DIGITS}
    for cell in unsolved:
        for candidate in cell.candidates:
            locations[candidate].append(cell)

    active = [digit for digit in DIGITS if len(locations[digit]) >= 2]
    if len(active) < 2:
        return False

    tracer = grid.tracer
    changed = False
    max_size = min(max_subset_size, len(active))
    for size in range(2, max_size + 1):
        for digits in combinations(active, size):
            holders: List[Cell] = []
            for digit in digits:
                for cell in locations[digit]:
                    if cell not in holders:
                        holders.append(cell)
            if len(holders) != size:
                continue

            eliminated = 0
            for cell in holders:
                for candidate in DIGITS:
                    if candidate not in digits and cell.remove_candidate(candidate):
                        eliminated += 1
            if eliminated:
                changed = True
                tracer.log_technique(
                    "hidden_subset",
                    eliminated,
                    reason=f"Digits {list(digits)} confined to cells {[c.index for c in holders]}",
                )
    return changed
