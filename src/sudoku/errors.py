"""Exception types raised by the grid, its constraints and the puzzle parser."""


class SudokuError(Exception):
    """Base class for every error raised by this package."""


class InvalidValueError(SudokuError, ValueError):
    """A cell value outside 0..9."""


class InvalidPositionError(SudokuError, IndexError):
    """A row/column outside 0..8 or a linear index outside 0..80."""


class ConstraintConstructionError(SudokuError, ValueError):
    """A constraint was built from a malformed scope or parameter."""


class NilGridError(SudokuError):
    """Validation was requested without a grid."""


class PuzzleFormatError(SudokuError, ValueError):
    """A puzzle record could not be turned into a grid."""
