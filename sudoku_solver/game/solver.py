import threading
import time
from dataclasses import dataclass, field
from typing import Optional

from sudoku_solver.exceptions import MalformedPuzzle, NoSolution, SolveInterrupted
from sudoku_solver.game.board import Grid
from sudoku_solver.game.oracle import DigitTracker
from sudoku_solver.logger import get_logger

logger = get_logger(__name__)

CHECK_INTERVAL = 1000


@dataclass
class SearchStats:
    calls: int = 0
    assignments: int = 0
    backtracks: int = 0
    elapsed: float = 0.0


@dataclass
class SolveResult:
    """Outcome of a search. ``grid`` is None when the puzzle has no solution."""

    grid: Optional[Grid]
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def solved(self) -> bool:
        return self.grid is not None

    def unwrap(self) -> Grid:
        if self.grid is None:
            raise NoSolution("The puzzle has no solution")
        return self.grid


class Solver:
    """Depth-first backtracking search over the empty cells of a grid.

    Cells are visited in row-major order and digits tried in ascending order,
    so a given grid always yields the same solution. The caller's grid is
    never modified.

    ``cancel_event`` and ``timeout`` (seconds) are polled every
    ``check_interval`` recursive calls; either one stops the search with
    :class:`SolveInterrupted`.
    """

    def __init__(
        self,
        check_interval: int = CHECK_INTERVAL,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        if check_interval < 1:
            raise ValueError("check_interval must be at least 1")
        self.check_interval = check_interval
        self.timeout = timeout
        self.cancel_event = cancel_event

    def solve(self, grid: Grid) -> SolveResult:
        start = time.monotonic()
        deadline = None if self.timeout is None else start + self.timeout
        stats = SearchStats()
        work = grid.copy()

        try:
            tracker = DigitTracker.from_grid(work)
        except MalformedPuzzle as e:
            logger.info(f"Filled cells conflict, nothing to search: {e}")
            return SolveResult(None, stats)

        solved = self._search(work, tracker, stats, deadline)
        stats.elapsed = time.monotonic() - start
        logger.debug(
            f"{stats.calls} calls, {stats.assignments} assignments, "
            f"{stats.backtracks} backtracks in {stats.elapsed:.4f}s"
        )

        if not solved:
            logger.info("Search space exhausted, no solution")
            return SolveResult(None, stats)
        logger.info(f"Solved {work.size}x{work.size} grid in {stats.elapsed:.4f}s")
        return SolveResult(work, stats)

    def _check_cancelled(self, stats: SearchStats, deadline: Optional[float]) -> None:
        if stats.calls % self.check_interval:
            return
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise SolveInterrupted(f"Search cancelled after {stats.calls} calls")
        if deadline is not None and time.monotonic() > deadline:
            raise SolveInterrupted(
                f"Search exceeded its {self.timeout}s timeout after {stats.calls} calls"
            )

    def _search(self, grid: Grid, tracker: DigitTracker, stats: SearchStats, deadline) -> bool:
        stats.calls += 1
        self._check_cancelled(stats, deadline)

        next_empty = grid.next_empty_pos()
        if not next_empty:
            return True

        row, col = next_empty
        for n in grid.digits:
            if not tracker.allows(row, col, n):
                continue
            grid.grid[row][col] = n
            tracker.place(row, col, n)
            stats.assignments += 1
            if self._search(grid, tracker, stats, deadline):
                return True
            grid.grid[row][col] = None
            tracker.retract(row, col, n)
            stats.backtracks += 1
        return False


def solve(grid: Grid, **kwargs) -> SolveResult:
    return Solver(**kwargs).solve(grid)
