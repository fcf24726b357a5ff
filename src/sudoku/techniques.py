"""Grid-wide pattern eliminations: X-Wing, Swordfish and XY-Wing."""

from itertools import combinations
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .cell import DIGITS, Cell

if TYPE_CHECKING:
    from .grid import Grid


def _line_cell(grid: "Grid", line: int, pos: int, row_based: bool) -> Cell:
    return grid.cell(line, pos) if row_based else grid.cell(pos, line)


def _candidate_positions(grid: "Grid", digit: int, row_based: bool) -> Dict[int, List[int]]:
    """Map each line to the positions along it where `digit` is still a candidate."""
    positions: Dict[int, List[int]] = {}
    for line in range(9):
        positions[line] = [
            pos for pos in range(9)
            if _line_cell(grid, line, pos, row_based).has_candidate(digit)
        ]
    return positions


def _eliminate_outside(
    grid: "Grid", digit: int, lines: Tuple[int, ...], positions: List[int], row_based: bool
) -> int:
    eliminated = 0
    for other in range(9):
        if other in lines:
            continue
        for pos in positions:
            if _line_cell(grid, other, pos, row_based).remove_candidate(digit):
                eliminated += 1
    return eliminated


def _direction_name(row_based: bool) -> str:
    return "rows" if row_based else "columns"


def _fish_in_direction(grid: "Grid", size: int, technique: str, row_based: bool) -> bool:
    """
    Shared X-Wing (size 2) / Swordfish (size 3) search along one direction.
    X-Wing lines must hold the digit in exactly two identical positions;
    Swordfish lines hold it in two or three positions covering three in total.
    """
    tracer = grid.tracer
    changed = False
    for digit in DIGITS:
        line_positions = _candidate_positions(grid, digit, row_based)
        if size == 2:
            lines = [line for line, pos in line_positions.items() if len(pos) == 2]
        else:
            lines = [line for line, pos in line_positions.items() if 2 <= len(pos) <= size]

        for group in combinations(lines, size):
            covered = sorted({pos for line in group for pos in line_positions[line]})
            if len(covered) != size:
                continue
            eliminated = _eliminate_outside(grid, digit, group, covered, row_based)
            if eliminated:
                changed = True
                tracer.log_technique(
                    technique,
                    eliminated,
                    reason=(
                        f"Digit {digit} in {_direction_name(row_based)} "
                        f"{[line + 1 for line in group]} at positions {[p + 1 for p in covered]}"
                    ),
                )
    return changed


def apply_x_wings(grid: "Grid") -> bool:
    changed = _fish_in_direction(grid, 2, "x_wing", row_based=True)
    changed = _fish_in_direction(grid, 2, "x_wing", row_based=False) or changed
    return changed


def apply_swordfish(grid: "Grid") -> bool:
    changed = _fish_in_direction(grid, 3, "swordfish", row_based=True)
    changed = _fish_in_direction(grid, 3, "swordfish", row_based=False) or changed
    return changed


def visible_cells(grid: "Grid", cell: Cell) -> List[Cell]:
    """
    Cells that share a uniqueness constraint with `cell`, in index order.
    Constraints that allow repeats (whisper lines) do not make cells see each other.
    """
    seen = set()
    for constraint in grid.constraints:
        if not constraint.requires_uniqueness() or cell.index not in constraint.scope:
            continue
        seen.update(idx for idx in constraint.scope if idx != cell.index)
    return [grid.cell_at(idx) for idx in sorted(seen)]


def _wing_digits(pivot: Tuple[int, ...], wing: Cell) -> Optional[Tuple[int, int]]:
    """Return (shared, other) when the bi-value wing shares exactly one digit with the pivot."""
    candidates = wing.candidates
    if len(candidates) != 2:
        return None
    shared = [d for d in candidates if d in pivot]
    if len(shared) != 1:
        return None
    other = candidates[1] if candidates[0] == shared[0] else candidates[0]
    return shared[0], other


def apply_xy_wings(grid: "Grid") -> bool:
    """
    Pivot {X,Y} sees wings {X,Z} and {Y,Z}: whichever digit the pivot takes,
    one wing is Z, so Z goes from every cell that sees both wings.
    """
    tracer = grid.tracer
    changed = False
    bivalue = [cell for cell in grid.cells if cell.candidate_count() == 2]

    for pivot in bivalue:
        pivot_digits = pivot.candidates
        if len(pivot_digits) != 2:
            continue
        visible = visible_cells(grid, pivot)

        for wing1, wing2 in combinations(visible, 2):
            first = _wing_digits(pivot_digits, wing1)
            second = _wing_digits(pivot_digits, wing2)
            if first is None or second is None:
                continue
            (shared1, z1), (shared2, z2) = first, second
            if shared1 == shared2 or z1 != z2:
                continue
            z = z1

            wing2_visible = {c.index for c in visible_cells(grid, wing2)}
            eliminated = 0
            for cell in visible_cells(grid, wing1):
                if cell is pivot or cell is wing1 or cell is wing2:
                    continue
                if cell.index in wing2_visible and cell.remove_candidate(z):
                    eliminated += 1
            if eliminated:
                changed = True
                tracer.log_technique(
                    "xy_wing",
                    eliminated,
                    reason=(
                        f"Pivot R{pivot.row + 1}C{pivot.col + 1} {list(pivot_digits)}, "
                        f"wings R{wing1.row + 1}C{wing1.col + 1} and R{wing2.row + 1}C{wing2.col + 1}, "
                        f"eliminating {z}"
                    ),
                )
    return changed
