"""Tests for turning puzzle records into grids."""

import pytest

from src.sudoku.constraints import GermanWhispersConstraint, KillerCageConstraint, RenbanConstraint
from src.sudoku.errors import PuzzleFormatError
from src.sudoku.parser import parse_cage_sum, parse_cell_ref, parse_givens, parse_puzzle

GIVENS = (
    "53..7....6..195....98....6.8...6...34..8.3..1"
    "7...2...6.6....28....419..5....8..79"
)


def test_parse_givens_accepts_dots_and_zeros():
    values = parse_givens(GIVENS)
    assert len(values) == 81
    assert values[:5] == [5, 3, 0, 0, 7]
    assert parse_givens("0" * 81) == [0] * 81


@pytest.mark.parametrize("text", ["1" * 80, "1" * 82, "x" + "0" * 80])
def test_parse_givens_rejects_bad_text(text):
    with pytest.raises(PuzzleFormatError):
        parse_givens(text)


@pytest.mark.parametrize(
    "ref, expected",
    [(0, 0), (80, 80), ("40", 40), ("r1c1", 0), ("R9C9", 80), ("r2c3", 11)],
)
def test_parse_cell_ref(ref, expected):
    assert parse_cell_ref(ref) == expected


@pytest.mark.parametrize("ref", ["x5", "r0c1", "r10c1", None, True])
def test_parse_cell_ref_rejects_garbage(ref):
    with pytest.raises(PuzzleFormatError):
        parse_cell_ref(ref)


def test_parse_standard_puzzle():
    grid = parse_puzzle({"id": "classic", "givens": GIVENS})
    assert len(grid.constraints) == 27
    assert grid.get(0, 0) == 5
    assert grid.get(0, 2) == 0
    # Givens are placed after registration, so they have already propagated.
    assert not grid.cell(0, 2).has_candidate(5)
    assert grid.validate_all()


def test_givens_alias_and_non_standard_board():
    grid = parse_puzzle({"quizzes": GIVENS, "standard": False})
    assert grid.constraints == []
    assert grid.get(0, 1) == 3
    assert grid.cell(0, 2).candidate_count() == 9


def test_variant_constraints_from_record():
    grid = parse_puzzle({
        "cages": [{"cells": ["r1c1", "r1c2", "r2c1"], "sum": 15}],
        "renban": [[36, 37, 38]],
        "whispers": "[[4, 13, 22]]",
    })
    variants = grid.constraints[27:]
    assert [type(c) for c in variants] == [KillerCageConstraint, RenbanConstraint, GermanWhispersConstraint]
    assert variants[0].scope == (0, 1, 9)
    assert variants[0].target_sum == 15
    assert variants[2].scope == (4, 13, 22)


def test_bad_constraint_becomes_format_error():
    with pytest.raises(PuzzleFormatError):
        parse_puzzle({"id": "bad", "cages": [{"cells": [0, 1], "sum": 0}]})
    with pytest.raises(PuzzleFormatError):
        parse_puzzle({"cages": [{"cells": [0, 1]}]})
    with pytest.raises(PuzzleFormatError):
        parse_puzzle({"whispers": "not json"})


@pytest.mark.parametrize("ch", ["²", "٣", "a"])
def test_parse_givens_rejects_non_ascii_digits(ch):
    with pytest.raises(PuzzleFormatError):
        parse_givens(ch + "0" * 80)


@pytest.mark.parametrize("ref", [7.9, "٣", "4.5"])
def test_parse_cell_ref_rejects_fractional_and_unicode(ref):
    with pytest.raises(PuzzleFormatError):
        parse_cell_ref(ref)


@pytest.mark.parametrize("value, expected", [(15, 15), ("15", 15), (15.0, 15), (" 9 ", 9)])
def test_parse_cage_sum_accepts_whole_numbers(value, expected):
    assert parse_cage_sum(value) == expected


@pytest.mark.parametrize("value", [7.9, "seven", None, True, [15]])
def test_parse_cage_sum_rejects_other_values(value):
    with pytest.raises(PuzzleFormatError):
        parse_cage_sum(value)


def test_fractional_cage_sum_is_a_format_error():
    with pytest.raises(PuzzleFormatError):
        parse_puzzle({"cages": [{"cells": [0, 1], "sum": 7.9}]})
