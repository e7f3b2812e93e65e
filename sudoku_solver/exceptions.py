"""Exception hierarchy for the Sudoku solving core.

Every error raised by :mod:`sudoku_solver` inherits from :class:`SudokuError`
so callers can catch a single base class when the specific failure mode does
not matter.
"""


class SudokuError(Exception):
    """Base exception for all Sudoku operations."""


class MalformedPuzzle(SudokuError, ValueError):
    """Raised when puzzle data has the wrong shape or its clues conflict.

    ``conflicts`` lists the ``(row, col)`` positions that take part in a
    row, column or box duplicate, when that is the reason for the failure.
    """

    def __init__(self, message, conflicts=None):
        super().__init__(message)
        self.conflicts = list(conflicts or [])


class NoSolution(SudokuError):
    """Raised when a solution is demanded for a grid that has none."""


class InvalidCoordinate(SudokuError, IndexError):
    """Raised when a row or column lies outside the grid."""


class InvalidDigit(SudokuError, ValueError):
    """Raised when a cell value lies outside the grid's digit range."""


class SolveInterrupted(SudokuError):
    """Raised when a search is cancelled or exceeds its timeout."""
