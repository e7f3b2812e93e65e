from typing import List

from sudoku_solver.exceptions import MalformedPuzzle
from sudoku_solver.game.board import Grid, Position


def is_valid_placement(grid: Grid, row: int, col: int, digit: int) -> bool:
    """Return True when ``digit`` appears nowhere else in the row, column or box of (row, col).

    The cell's own content is not considered, so a filled free cell can be
    checked in place.
    """
    row, col = grid.check_pos((row, col))
    digit = grid.check_digit(digit)

    for x in range(grid.size):
        if x != col and grid.grid[row][x] == digit:
            return False

    for y in range(grid.size):
        if y != row and grid.grid[y][col] == digit:
            return False

    top, left = grid.box_origin((row, col))
    for y in range(top, top + grid.order):
        for x in range(left, left + grid.order):
            if (y, x) != (row, col) and grid.grid[y][x] == digit:
                return False

    return True


def candidates(grid: Grid, pos: Position) -> List[int]:
    row, col = pos
    return [d for d in grid.digits if is_valid_placement(grid, row, col, d)]


class DigitTracker:
    """Bitmasks of the digits present in every row, column and box.

    Bit ``d`` of ``rows[r]`` is set when digit ``d`` is in row ``r``; the same
    holds for ``cols`` and ``boxes``. ``place`` and ``retract`` must be paired
    by the caller.
    """

    def __init__(self, order: int) -> None:
        self.order = order
        self.size = order * order
        self.rows = [0] * self.size
        self.cols = [0] * self.size
        self.boxes = [0] * self.size

    @classmethod
    def from_grid(cls, grid: Grid) -> "DigitTracker":
        tracker = cls(grid.order)
        for y in range(grid.size):
            for x in range(grid.size):
                val = grid.grid[y][x]
                if val is None:
                    continue
                if not tracker.allows(y, x, val):
                    raise MalformedPuzzle(
                        f"Digit {val} at {(y, x)} repeats in its row, column or box",
                        conflicts=grid.conflicts(),
                    )
                tracker.place(y, x, val)
        return tracker

    def _box(self, row: int, col: int) -> int:
        return (row // self.order) * self.order + col // self.order

    def allows(self, row: int, col: int, digit: int) -> bool:
        bit = 1 << digit
        return not (
            self.rows[row] & bit
            or self.cols[col] & bit
            or self.boxes[self._box(row, col)] & bit
        )

    def place(self, row: int, col: int, digit: int) -> None:
        bit = 1 << digit
        self.rows[row] |= bit
        self.cols[col] |= bit
        self.boxes[self._box(row, col)] |= bit

    def retract(self, row: int, col: int, digit: int) -> None:
        mask = ~(1 << digit)
        self.rows[row] &= mask
        self.cols[col] &= mask
        self.boxes[self._box(row, col)] &= mask
