"""Sudoku grid, variant constraints, candidate propagation and logical solver."""

from .cell import Cell
from .constraint import Constraint
from .constraints import (
    BoxConstraint,
    ColumnConstraint,
    GermanWhispersConstraint,
    KillerCageConstraint,
    RenbanConstraint,
    RowConstraint,
    build_box_constraints,
    build_col_constraints,
    build_row_constraints,
    build_standard_constraints,
)
from .errors import (
    ConstraintConstructionError,
    InvalidPositionError,
    InvalidValueError,
    NilGridError,
    PuzzleFormatError,
    SudokuError,
)
from .grid import Grid
from .loader import load_puzzles
from .observer import AutoSolveObserver, CellNotifier, CellObserver
from .parser import parse_puzzle
from .solver_core import SolveReport, solve

__all__ = [
    "Cell",
    "Grid",
    "Constraint",
    "RowConstraint",
    "ColumnConstraint",
    "BoxConstraint",
    "KillerCageConstraint",
    "RenbanConstraint",
    "GermanWhispersConstraint",
    "build_row_constraints",
    "build_col_constraints",
    "build_box_constraints",
    "build_standard_constraints",
    "CellObserver",
    "CellNotifier",
    "AutoSolveObserver",
    "SudokuError",
    "InvalidValueError",
    "InvalidPositionError",
    "ConstraintConstructionError",
    "NilGridError",
    "PuzzleFormatError",
    "solve",
    "SolveReport",
    "parse_puzzle",
    "load_puzzles",
]
