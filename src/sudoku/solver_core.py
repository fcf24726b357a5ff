"""Logical solve loop: place forced digits, then fall back to subset and pattern eliminations."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .grid import Grid
from .observer import AutoSolveObserver
from src.utils.trace import Tracer

Placement = Tuple[int, int, int]

DEFAULT_MAX_ROUNDS = 200


@dataclass
class SolveReport:
    status: str  # 'solved', 'invalid', 'stuck', 'contradiction'
    rounds: int
    values: str
    placements: List[Placement] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.status == "solved"


def solve(
    grid: Grid,
    use_advanced: bool = True,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
    tracer: Optional[Tracer] = None,
) -> SolveReport:
    """
    Drive the grid towards a solution without guessing. Each round takes the
    first strategy that makes progress: queued single candidates, hidden
    singles, one pencil-mark pass, then the advanced techniques.
    """
    tracer = tracer or grid.tracer
    observer = AutoSolveObserver()
    grid.add_observer(observer)
    placements: List[Placement] = []
    rounds = 0
    status = "stuck"

    try:
        observer.seed(grid)
        while rounds < max_rounds:
            rounds += 1
            if grid.contradictions():
                status = "contradiction"
                break
            if grid.is_complete():
                break

            placed = _place_pending(grid, observer, placements)
            if not placed:
                placed = _place_hidden_singles(grid, placements)
            if placed:
                continue
            if grid.apply_pencil_mark_pass():
                continue
            if use_advanced and grid.apply_advanced_techniques():
                continue
            break
    finally:
        grid.remove_observer(observer)

    if status != "contradiction":
        if grid.contradictions():
            status = "contradiction"
        elif grid.is_complete():
            status = "solved" if grid.validate_all() else "invalid"

    tracer.log_message(
        "INFO",
        f"Solve finished: {status} after {rounds} round(s), {len(placements)} placement(s)",
    )
    return SolveReport(status=status, rounds=rounds, values=grid.to_string(), placements=placements)


def _place_pending(grid: Grid, observer: AutoSolveObserver, placements: List[Placement]) -> int:
    placed = 0
    for (row, col), value in observer.pop_pending():
        cell = grid.cell(row, col)
        # Later eliminations may have invalidated a queued single.
        if cell.is_solved() or not cell.has_candidate(value):
            continue
        grid.set(row, col, value)
        placements.append((row, col, value))
        placed += 1
    return placed


def _place_hidden_singles(grid: Grid, placements: List[Placement]) -> int:
    """Place digits that fit in only one cell of a nine-cell uniqueness constraint."""
    placed = 0
    for constraint in grid.constraints:
        if not constraint.requires_uniqueness() or len(constraint.scope) != 9:
            continue
        present = set(constraint.values(grid))
        for digit in range(1, 10):
            if digit in present:
                continue
            holders = [
                grid.cell_at(idx) for idx in constraint.scope
                if grid.cell_at(idx).has_candidate(digit)
            ]
            if len(holders) != 1:
                continue
            cell = holders[0]
            grid.set(cell.row, cell.col, digit)
            placements.append((cell.row, cell.col, digit))
            present.add(digit)
            placed += 1
    return placed
