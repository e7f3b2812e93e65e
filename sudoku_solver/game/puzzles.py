from pathlib import Path
from typing import List, Sequence, Union

import numpy as np

from sudoku_solver.exceptions import MalformedPuzzle
from sudoku_solver.game.board import DEFAULT_ORDER, Grid
from sudoku_solver.logger import get_logger

logger = get_logger(__name__)

PUZZLE_DIR = Path(__file__).resolve().parent / "puzzle_data"
DEMO_PUZZLE = "demo"

EMPTY_CHARS = {"0", "."}
SEPARATOR_CHARS = {"|", "-", "+"}
DIGIT_CHARS = set("123456789")

PuzzleData = Union[str, np.ndarray, Sequence]


def _parse_text(text: str) -> List[Union[int, None]]:
    cells = []
    for line in text.splitlines():
        if line.lstrip().startswith("#"):
            continue
        for char in line:
            if char.isspace() or char in SEPARATOR_CHARS:
                continue
            if char in EMPTY_CHARS:
                cells.append(None)
            elif char in DIGIT_CHARS:
                cells.append(int(char))
            else:
                raise MalformedPuzzle(f"Unexpected character {char!r} in puzzle text")
    return cells


def _to_rows(source: PuzzleData, size: int) -> List[list]:
    if isinstance(source, str):
        cells = _parse_text(source)
    elif isinstance(source, np.ndarray):
        if source.size != size * size:
            raise MalformedPuzzle(
                f"Expected {size * size} cells, got array of shape {source.shape}"
            )
        cells = source.reshape(-1).tolist()
    else:
        items = list(source)
        if len(items) == size and all(
            isinstance(row, (list, tuple, np.ndarray)) for row in items
        ):
            return [list(row) for row in items]
        cells = items

    if len(cells) != size * size:
        raise MalformedPuzzle(f"Expected {size * size} cells, got {len(cells)}")
    return [cells[y * size : (y + 1) * size] for y in range(size)]


def load_puzzle(source: PuzzleData, order: int = DEFAULT_ORDER) -> Grid:
    """Build a grid from puzzle data, with every filled cell fixed as a clue.

    ``source`` is a string of cell characters, a flat sequence of cells, a
    sequence of rows or a numpy array. ``0``, ``None`` and ``.`` are empty.
    Raises :class:`MalformedPuzzle` if the shape is wrong or the clues repeat
    a digit in a row, column or box.
    """
    size = order * order
    grid = Grid(_to_rows(source, size), order=order)

    conflicts = grid.conflicts()
    if conflicts:
        raise MalformedPuzzle(
            f"Clues conflict at {len(conflicts)} cells: {conflicts}", conflicts=conflicts
        )
    logger.debug(f"Loaded {size}x{size} puzzle with {grid.filled_count()} clues")
    return grid


def read_puzzle_file(path: Union[str, Path], order: int = DEFAULT_ORDER) -> Grid:
    return load_puzzle(Path(path).read_text(), order=order)


def available_puzzles() -> List[str]:
    return sorted(p.stem for p in PUZZLE_DIR.glob("*.txt"))


def bundled_puzzle(name: str) -> Grid:
    path = PUZZLE_DIR / f"{name}.txt"
    if not path.is_file():
        raise FileNotFoundError(
            f"No bundled puzzle named '{name}', choose from {available_puzzles()}"
        )
    return read_puzzle_file(path)


def demo_puzzle() -> Grid:
    return bundled_puzzle(DEMO_PUZZLE)


def format_grid(grid: Grid) -> str:
    """Render the grid with dots for empty cells and lines between boxes."""
    width = len(str(grid.size))
    divider = "+".join(["-" * ((width + 1) * grid.order + 1)] * grid.order)[1:-1]
    lines = []
    for y, row in enumerate(grid.get_all_rows()):
        if y and y % grid.order == 0:
            lines.append(divider)
        groups = []
        for start in range(0, grid.size, grid.order):
            tokens = [
                "." * width if val is None else str(val).rjust(width)
                for val in row[start : start + grid.order]
            ]
            groups.append(" " + " ".join(tokens) + " ")
        lines.append("|".join(groups).strip())
    return "\n".join(lines)
