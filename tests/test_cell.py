"""Unit tests for Cell state changes and their notifications."""

import pytest

from src.sudoku.cell import DIGITS, Cell
from src.sudoku.errors import InvalidValueError, SudokuError
from src.sudoku.observer import CellObserver


class RecordingObserver(CellObserver):
    def __init__(self, name="obs", log=None):
        self.name = name
        self.log = log if log is not None else []

    def on_single_candidate(self, row, col, candidate):
        self.log.append((self.name, "single", row, col, candidate))

    def on_cell_solved(self, row, col, value):
        self.log.append((self.name, "solved", row, col, value))

    def on_candidate_eliminated(self, row, col, candidate, remaining_count):
        self.log.append((self.name, "eliminated", row, col, candidate, remaining_count))


def test_new_cell_is_unsolved_with_all_candidates():
    cell = Cell(2, 3)
    assert cell.value == 0
    assert cell.index == 21
    assert cell.candidates == DIGITS
    assert cell.candidate_count() == 9
    assert not cell.is_solved()
    assert not cell.is_contradiction()


def test_set_value_clears_candidates_and_notifies():
    cell = Cell(0, 0)
    obs = RecordingObserver()
    cell.add_observer(obs)

    cell.set_value(5)

    assert cell.value == 5
    assert cell.is_solved()
    assert cell.candidates == ()
    assert cell.candidate_count() == 0
    assert obs.log == [("obs", "solved", 0, 0, 5)]


@pytest.mark.parametrize("bad", [-1, 10, 3.0, "4", None])
def test_set_value_rejects_out_of_range(bad):
    cell = Cell(0, 0)
    with pytest.raises(InvalidValueError):
        cell.set_value(bad)
    assert cell.value == 0


def test_invalid_value_is_a_value_error():
    with pytest.raises(ValueError):
        Cell(0, 0).set_value(11)
    with pytest.raises(SudokuError):
        Cell(0, 0).set_value(11)


def test_set_zero_resets_without_notifying():
    cell = Cell(0, 0)
    cell.set_value(7)
    obs = RecordingObserver()
    cell.add_observer(obs)

    cell.set_value(0)

    assert cell.value == 0
    assert cell.candidates == DIGITS
    assert obs.log == []


def test_remove_candidate_reports_change():
    cell = Cell(1, 1)
    assert cell.remove_candidate(4) is True
    assert not cell.has_candidate(4)
    assert cell.remove_candidate(4) is False
    assert cell.candidate_count() == 8


def test_remove_candidate_on_solved_cell_is_noop():
    cell = Cell(1, 1)
    cell.set_value(3)
    obs = RecordingObserver()
    cell.add_observer(obs)
    assert cell.remove_candidate(3) is False
    assert obs.log == []


def test_last_candidate_fires_eliminated_then_single():
    cell = Cell(4, 5)
    obs = RecordingObserver()
    cell.add_observer(obs)
    for digit in range(1, 9):
        cell.remove_candidate(digit)

    assert cell.candidates == (9,)
    assert cell.value == 0
    assert obs.log[-2:] == [
        ("obs", "eliminated", 4, 5, 8, 1),
        ("obs", "single", 4, 5, 9),
    ]
    singles = [entry for entry in obs.log if entry[1] == "single"]
    assert len(singles) == 1


def test_removing_every_candidate_is_a_contradiction():
    cell = Cell(0, 0)
    for digit in DIGITS:
        cell.remove_candidate(digit)
    assert cell.is_contradiction()
    assert not cell.is_solved()
    assert cell.candidates == ()


def test_add_candidate_ignores_solved_and_non_digits():
    cell = Cell(0, 0)
    cell.remove_candidate(6)
    cell.add_candidate(6)
    cell.add_candidate(0)
    cell.add_candidate(10)
    assert cell.candidates == DIGITS

    cell.set_value(2)
    cell.add_candidate(5)
    assert cell.candidates == ()


def test_observers_notified_in_registration_order():
    log = []
    cell = Cell(0, 0)
    cell.add_observer(RecordingObserver("first", log))
    cell.add_observer(RecordingObserver("second", log))

    cell.set_value(1)

    assert [entry[0] for entry in log] == ["first", "second"]


def test_remove_observer_matches_identity():
    cell = Cell(0, 0)
    kept = RecordingObserver("kept")
    dropped = RecordingObserver("dropped")
    cell.add_observer(kept)
    cell.add_observer(dropped)
    cell.add_observer(None)

    cell.remove_observer(dropped)
    cell.remove_observer(RecordingObserver("never-added"))
    cell.set_value(4)

    assert kept.log == [("kept", "solved", 0, 0, 4)]
    assert dropped.log == []
    assert len(cell.notifier.observers) == 1
