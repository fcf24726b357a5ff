"""Top-level Sudoku solve interface.

Expose `solve_puzzle(puzzle)` that accepts either a pre-built Grid or a raw
puzzle dictionary compatible with `src.sudoku.parser.parse_puzzle`.
"""

from typing import Any

from src.sudoku import solver_core
from src.sudoku.grid import Grid
from src.sudoku.parser import parse_puzzle
from src.sudoku.solver_core import DEFAULT_MAX_ROUNDS, SolveReport


def solve_puzzle(
    puzzle: Any,
    use_advanced: bool = True,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> SolveReport:
    """
    Solve a puzzle by deduction and return the solve report.
    Accepts:
      - Grid instances (used directly, constraints already registered)
      - Raw puzzle dictionaries (parsed via `parse_puzzle`)
    """
    if isinstance(puzzle, Grid):
        grid = puzzle
    elif isinstance(puzzle, dict):
        grid = parse_puzzle(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Grid instance or puzzle dictionary")

    return solver_core.solve(grid, use_advanced=use_advanced, max_rounds=max_rounds)


__all__ = ["solve_puzzle"]
