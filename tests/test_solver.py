"""Integration-style tests for the logical solve loop."""

import pytest

from solver import solve_puzzle
from src.sudoku.constraints import RowConstraint, build_standard_constraints
from src.sudoku.grid import Grid
from src.sudoku.solver_core import solve

CLASSIC_GIVENS = (
    "530070000600195000098000060800060003400803001"
    "700020006060000280000419005000080079"
)
CLASSIC_SOLUTION = (
    "534678912672195348198342567859761423426853791"
    "713924856961537284287419635345286179"
)


def _standard_grid() -> Grid:
    grid = Grid()
    for constraint in build_standard_constraints():
        grid.add_constraint(constraint)
    return grid


def test_solver_solves_classic_puzzle():
    report = solve_puzzle({"id": "classic", "givens": CLASSIC_GIVENS})

    assert report.solved
    assert report.status == "solved"
    assert report.values == CLASSIC_SOLUTION
    assert len(report.placements) == CLASSIC_GIVENS.count("0")


def test_solver_accepts_prebuilt_grid():
    grid = _standard_grid()
    for index, ch in enumerate(CLASSIC_GIVENS):
        if ch != "0":
            grid.set(index // 9, index % 9, int(ch))

    report = solve_puzzle(grid)

    assert report.solved
    assert grid.to_string() == CLASSIC_SOLUTION
    assert grid.validate_all()
    assert grid.observers == []


def test_solver_rejects_other_inputs():
    with pytest.raises(TypeError):
        solve_puzzle(CLASSIC_GIVENS)


def test_empty_grid_is_stuck():
    report = solve(_standard_grid())
    assert report.status == "stuck"
    assert report.rounds == 1
    assert report.placements == []


def test_round_limit_stops_early():
    report = solve_puzzle({"givens": CLASSIC_GIVENS}, max_rounds=1)
    assert report.status == "stuck"
    assert report.rounds == 1
    assert report.placements


def test_empty_candidate_set_reports_contradiction():
    grid = _standard_grid()
    for col, value in enumerate([1, 2, 3, 4, 5, 6, 7, 8]):
        grid.set(0, col, value)
    grid.set(5, 8, 9)

    assert grid.cell(0, 8).is_contradiction()
    report = solve(grid)
    assert report.status == "contradiction"
    assert not report.solved


def test_complete_grid_breaking_a_rule_is_invalid():
    grid = Grid()
    grid.add_constraint(RowConstraint(0))
    for index in range(81):
        grid.set(index // 9, index % 9, 1)

    report = solve(grid)
    assert report.status == "invalid"
    assert report.placements == []


def test_hidden_single_is_placed():
    grid = _standard_grid()
    # 1 is blocked from every cell of row 0 except R1C9.
    grid.set(1, 0, 1)
    grid.set(2, 4, 1)
    grid.set(3, 6, 1)
    grid.set(6, 7, 1)

    report = solve(grid, use_advanced=False, max_rounds=2)

    assert grid.get(0, 8) == 1
    assert (0, 8, 1) in report.placements


def test_killer_cage_puzzle_fills_cage():
    puzzle_givens = list(CLASSIC_SOLUTION)
    puzzle_givens[0] = "0"
    puzzle_givens[1] = "0"
    report = solve_puzzle({
        "givens": "".join(puzzle_givens),
        "cages": [{"cells": ["r1c1", "r1c2"], "sum": 8}],
    })
    assert report.solved
    assert report.values[:2] == "53"
