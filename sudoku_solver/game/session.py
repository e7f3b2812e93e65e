import time
from typing import Callable, Optional

from sudoku_solver.exceptions import NoSolution, SolveInterrupted
from sudoku_solver.game.board import DEFAULT_ORDER, Grid, Position
from sudoku_solver.game.oracle import is_valid_placement
from sudoku_solver.game.puzzles import demo_puzzle
from sudoku_solver.game.solver import Solver
from sudoku_solver.logger import get_logger

logger = get_logger(__name__)

CLEAR_KEYS = {None, "", "0"}
DIGIT_KEYS = set("123456789")


class GameSession:
    """State behind the Play / Reset / Solution widget.

    Holds the displayed board, the puzzle it was loaded from and the
    elapsed-time counter. Knows nothing about rendering.
    """

    def __init__(
        self,
        order: int = DEFAULT_ORDER,
        solver: Optional[Solver] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.order = order
        self.solver = solver or Solver()
        self.clock = clock
        self.board = Grid.empty(order)
        self.puzzle: Optional[Grid] = None
        self.status = ""
        self._started_at: Optional[float] = None
        self._stopped_elapsed = 0.0

    # timer

    def start_timer(self) -> None:
        self._started_at = self.clock()
        self._stopped_elapsed = 0.0

    def stop_timer(self) -> None:
        if self._started_at is not None:
            self._stopped_elapsed = self.clock() - self._started_at
            self._started_at = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return int(self._stopped_elapsed)
        return int(self.clock() - self._started_at)

    @property
    def timer_text(self) -> str:
        minutes, seconds = divmod(self.elapsed_seconds, 60)
        return f"Time: {minutes:02d}:{seconds:02d}"

    # actions

    def play(self, puzzle: Optional[Grid] = None) -> None:
        puzzle = puzzle if puzzle is not None else demo_puzzle()
        if puzzle.order != self.order:
            raise ValueError(
                f"Puzzle order {puzzle.order} does not match session order {self.order}"
            )
        self.puzzle = puzzle.copy()
        self.board = puzzle.copy()
        self.status = ""
        self.start_timer()
        logger.info(f"Play: loaded puzzle with {puzzle.filled_count()} clues")

    def reset(self) -> None:
        self.stop_timer()
        self._stopped_elapsed = 0.0
        self.board = Grid.empty(self.order)
        self.status = ""
        logger.info("Reset: board cleared")

    def solution(self, from_clues: bool = False, strict: bool = False) -> bool:
        """Fill the board with a solution.

        Solves the displayed board, user entries included, unless
        ``from_clues`` asks for the originally loaded puzzle. When no solution
        exists, or the search is interrupted, the board is left as it is and
        False is returned; with ``strict`` the :class:`NoSolution` or
        :class:`SolveInterrupted` is raised instead.
        """
        source = self.puzzle if from_clues and self.puzzle is not None else self.board
        try:
            result = self.solver.solve(source)
        except SolveInterrupted as e:
            self.status = "Timed out"
            logger.warning(f"Solution: {e}")
            if strict:
                raise
            return False
        if not result.solved:
            self.status = "No solution"
            logger.info("Solution: no solution for the current board")
            if strict:
                raise NoSolution("The current board has no solution")
            return False

        size = result.grid.size
        self.board = Grid(
            result.grid.grid,
            order=self.order,
            fixed=[[True] * size for _ in range(size)],
        )
        self.stop_timer()
        self.status = "Solved"
        logger.info(f"Solution: filled in {result.stats.assignments} assignments")
        return True

    def enter(self, pos: Position, key) -> bool:
        """Apply a keystroke to a cell and report whether the board changed.

        Single digit characters ``1..size`` are written, ``0``, empty or None
        clear the cell and anything else is ignored, as are fixed cells.
        """
        if not self.board.is_editable(pos):
            return False
        if key in CLEAR_KEYS:
            value = None
        elif key in DIGIT_KEYS:
            value = int(key)
            if value > self.board.size:
                return False
        else:
            return False
        if self.board.get(pos) == value:
            return False
        return self.board.set_value(pos, value)

    def check_entry(self, pos: Position) -> Optional[bool]:
        """Whether the value in ``pos`` fits its row, column and box; None if empty."""
        value = self.board.get(pos)
        if value is None:
            return None
        row, col = pos
        return is_valid_placement(self.board, row, col, value)

    def is_won(self) -> bool:
        return self.board.is_solved()
