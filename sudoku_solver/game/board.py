from collections import defaultdict
from typing import Iterable, List, Optional, Tuple

import numpy as np

from sudoku_solver.exceptions import InvalidCoordinate, InvalidDigit, MalformedPuzzle

DEFAULT_ORDER = 3

Position = Tuple[int, int]
Cell = Optional[int]


class Grid:
    """A square Sudoku grid of ``order**2`` rows, columns and boxes.

    Cells hold ``None`` when empty or a digit in ``1..size``. A cell is fixed
    (a clue) when it was filled at construction unless ``fixed`` says
    otherwise; fixed cells ignore ``set_value`` unless forced.
    """

    def __init__(
        self,
        values: Iterable[Iterable[Cell]],
        order: int = DEFAULT_ORDER,
        fixed: Optional[Iterable[Iterable[bool]]] = None,
    ) -> None:
        if order < 1:
            raise MalformedPuzzle(f"Grid order must be positive, got {order}")
        self.order = order
        self.size = order * order

        rows = [list(row) for row in values]
        if len(rows) != self.size or any(len(row) != self.size for row in rows):
            raise MalformedPuzzle(
                f"Expected a {self.size}x{self.size} grid, got "
                f"{len(rows)} rows of lengths {sorted({len(row) for row in rows})}"
            )
        self.grid: List[List[Cell]] = [
            [self._check_value(val, (y, x)) for x, val in enumerate(row)]
            for y, row in enumerate(rows)
        ]

        if fixed is None:
            self.fixed = [[val is not None for val in row] for row in self.grid]
        else:
            self.fixed = [[bool(flag) for flag in row] for row in fixed]
            if len(self.fixed) != self.size or any(
                len(row) != self.size for row in self.fixed
            ):
                raise MalformedPuzzle("Fixed-cell mask does not match the grid shape")

    @classmethod
    def empty(cls, order: int = DEFAULT_ORDER) -> "Grid":
        size = order * order
        return cls([[None] * size for _ in range(size)], order=order)

    @property
    def digits(self) -> range:
        return range(1, self.size + 1)

    def _check_value(self, val, pos: Position) -> Cell:
        if val is None:
            return None
        if isinstance(val, (bool, np.bool_)) or not isinstance(val, (int, np.integer)):
            raise InvalidDigit(
                f"Cell {pos} must be an int, received {type(val).__name__}"
            )
        val = int(val)
        if val == 0:
            return None
        if not 1 <= val <= self.size:
            raise InvalidDigit(f"Cell {pos} must be between 0 and {self.size}, got {val}")
        return val

    def check_pos(self, pos: Position) -> Position:
        row, col = pos
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise InvalidCoordinate(
                f"Position {pos} is outside the {self.size}x{self.size} grid"
            )
        return row, col

    def check_digit(self, digit: int) -> int:
        if isinstance(digit, bool) or not isinstance(digit, (int, np.integer)):
            raise InvalidDigit(f"Digit must be an int, received {type(digit).__name__}")
        if not 1 <= digit <= self.size:
            raise InvalidDigit(f"Digit must be between 1 and {self.size}, got {digit}")
        return int(digit)

    def box_index(self, pos: Position) -> int:
        row, col = pos
        return (row // self.order) * self.order + col // self.order

    def box_origin(self, pos: Position) -> Position:
        row, col = pos
        return (row // self.order) * self.order, (col // self.order) * self.order

    def get(self, pos: Position) -> Cell:
        row, col = self.check_pos(pos)
        return self.grid[row][col]

    def __getitem__(self, pos: Position) -> Cell:
        return self.get(pos)

    def get_row(self, row: int) -> List[Cell]:
        return list(self.grid[row])

    def get_all_rows(self) -> List[List[Cell]]:
        return [self.get_row(y) for y in range(self.size)]

    def get_col(self, col: int) -> List[Cell]:
        return [row[col] for row in self.grid]

    def get_all_cols(self) -> List[List[Cell]]:
        return [self.get_col(x) for x in range(self.size)]

    def get_box(self, pos: Position) -> List[Cell]:
        top, left = self.box_origin(pos)
        box = []
        for row in range(top, top + self.order):
            box += self.grid[row][left : left + self.order]
        return box

    def get_all_boxes(self) -> List[List[Cell]]:
        origins = [
            (y * self.order, x * self.order)
            for y in range(self.order)
            for x in range(self.order)
        ]
        return [self.get_box(pos) for pos in origins]

    def is_editable(self, pos: Position) -> bool:
        row, col = self.check_pos(pos)
        return not self.fixed[row][col]

    def next_empty_pos(self) -> Optional[Position]:
        for y in range(self.size):
            for x in range(self.size):
                if self.grid[y][x] is None:
                    return (y, x)
        return None

    def empty_positions(self) -> List[Position]:
        return [
            (y, x)
            for y in range(self.size)
            for x in range(self.size)
            if self.grid[y][x] is None
        ]

    def set_value(self, pos: Position, val: Cell, force: bool = False) -> bool:
        """Write ``val`` (``None`` or ``0`` clears) and report whether it was written."""
        row, col = self.check_pos(pos)
        val = self._check_value(val, pos)
        if self.is_editable(pos) or force:
            self.grid[row][col] = val
            return True
        return False

    def clear(self, pos: Position) -> bool:
        return self.set_value(pos, None)

    def filled_count(self) -> int:
        return sum(val is not None for row in self.grid for val in row)

    def is_full(self) -> bool:
        return self.next_empty_pos() is None

    def conflicts(self) -> List[Position]:
        """Positions of filled cells that share a digit with another cell of a unit."""
        units = defaultdict(list)
        for y in range(self.size):
            for x in range(self.size):
                val = self.grid[y][x]
                if val is None:
                    continue
                units[("row", y, val)].append((y, x))
                units[("col", x, val)].append((y, x))
                units[("box", self.box_index((y, x)), val)].append((y, x))

        clashing = set()
        for positions in units.values():
            if len(positions) > 1:
                clashing.update(positions)
        return sorted(clashing)

    def is_consistent(self) -> bool:
        return not self.conflicts()

    def is_solved(self) -> bool:
        if not self.is_full():
            return False
        arr = self.to_array()
        expected = np.arange(1, self.size + 1)
        boxes = (
            arr.reshape(self.order, self.order, self.order, self.order)
            .swapaxes(1, 2)
            .reshape(self.size, self.size)
        )
        return all(
            np.array_equal(np.sort(units, axis=1), np.tile(expected, (self.size, 1)))
            for units in (arr, arr.T, boxes)
        )

    def copy(self) -> "Grid":
        return Grid(self.grid, order=self.order, fixed=self.fixed)

    def to_list(self) -> List[List[int]]:
        return [[0 if val is None else val for val in row] for row in self.grid]

    def to_array(self) -> np.ndarray:
        return np.array(self.to_list(), dtype=np.int8)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.order == other.order and self.grid == other.grid

    def __repr__(self) -> str:
        return f"Grid(order={self.order}, filled={self.filled_count()}/{self.size ** 2})"
