"""Example: How to use the Tracer with the Sudoku solver.

Builds a standard board and a variant board (killer cage, German whispers,
Renban), shows candidate propagation and validation, then solves a full
puzzle and writes its trace. Set SUDOKU_TRACE_LEVEL=DEBUG to record every
candidate elimination.
"""

import os
from pathlib import Path

from run import format_solution
from solver import solve_puzzle
from src.sudoku import (
    AutoSolveObserver,
    GermanWhispersConstraint,
    Grid,
    KillerCageConstraint,
    RenbanConstraint,
    build_standard_constraints,
)
from src.utils.trace import get_tracer, reset_tracer, set_trace_level

EXAMPLE_PUZZLE = {
    "id": "example",
    "givens": (
        "530070000600195000098000060800060003400803001"
        "700020006060000280000419005000080079"
    ),
}


def build_standard_grid() -> Grid:
    grid = Grid()
    for constraint in build_standard_constraints():
        grid.add_constraint(constraint)
    return grid


def print_validation(grid: Grid, label: str) -> None:
    if grid.validate_all():
        print(f"✓ {label}: all constraints are satisfied")
    else:
        print(f"✗ {label}: some constraints are violated")


def demo_standard(observer: AutoSolveObserver) -> Grid:
    grid = build_standard_grid()
    grid.add_observer(observer)

    # Leave R1C9 with a single candidate (2).
    for col, value in enumerate([5, 3, 4, 6, 7, 8, 9, 1]):
        grid.set(0, col, value)

    print("\nCurrent board state:")
    print(grid)
    print(f"R1C9 candidates: {list(grid.cell(0, 8).candidates)}")
    print_validation(grid, "Standard board")

    print("\n=== Active Constraints ===")
    for i, constraint in enumerate(grid.constraints, start=1):
        print(f"{i}. {constraint.name}")
    return grid


def demo_variant() -> Grid:
    grid = build_standard_grid()
    grid.add_observer(AutoSolveObserver())

    cage = KillerCageConstraint([0, 1, 9], 15)
    whispers = GermanWhispersConstraint([4, 13, 22])
    renban = RenbanConstraint([36, 37, 38])
    for constraint in (cage, whispers, renban):
        grid.add_constraint(constraint)
        print(f"✓ Added {constraint.name}: {constraint.description}")

    grid.set(0, 0, 5)
    grid.set(0, 1, 6)
    grid.set(1, 0, 4)

    print("\nVariant board state:")
    print(grid)
    print_validation(grid, "Variant board")
    return grid


def solve_and_trace(puzzle_json: dict, output_trace_csv: Path = None):
    """
    Solve a puzzle and log all steps to a trace file.

    Args:
        puzzle_json: Raw puzzle dictionary
        output_trace_csv: Path to write trace CSV (optional)

    Returns:
        The SolveReport
    """
    reset_tracer()
    set_trace_level(os.environ.get("SUDOKU_TRACE_LEVEL", "INFO"))
    tracer = get_tracer()

    report = solve_puzzle(puzzle_json)

    summary = tracer.summary()
    print(f"\n{'='*50}")
    print("Solver Summary:")
    print(f"  Status: {report.status} after {report.rounds} round(s)")
    print(f"  Total steps: {summary['total_steps']}")
    print(f"  Placements: {summary['num_placements']}")
    print(f"  Eliminations: {summary['num_eliminations']}")
    print(f"  Techniques: {summary['technique_counts']}")
    print(f"  Time: {summary['elapsed_time_seconds']:.3f}s")
    print(f"{'='*50}\n")

    if output_trace_csv:
        tracer.to_csv(output_trace_csv)

    return report


if __name__ == "__main__":
    reset_tracer()
    set_trace_level(os.environ.get("SUDOKU_TRACE_LEVEL", "INFO"))

    print("=== Example 1: Standard Sudoku ===")
    observer = AutoSolveObserver()
    standard = demo_standard(observer)

    print("\n=== Example 2: Variant Sudoku with Special Constraints ===")
    demo_variant()

    print("\n=== Pencil Marks and Advanced Techniques ===")
    iterations = standard.apply_pencil_mark_until_stable()
    print(f"Pencil mark techniques converged after {iterations} iteration(s)")
    if standard.apply_advanced_techniques():
        print("✓ Advanced techniques found eliminations")
    else:
        print("• Advanced techniques did not find additional eliminations")
    print(f"Cells queued for auto-solving: {len(observer.cells_to_solve)}")

    print("\n=== Example 3: Full Solve ===")
    report = solve_and_trace(EXAMPLE_PUZZLE, Path("traces/example_trace.csv"))
    print(format_solution(report, as_rows=True))
