import threading

import pytest

from conftest import DEAD_END_PUZZLE, SMALL_DEAD_END, SMALL_PUZZLE
from sudoku_solver.exceptions import NoSolution, SolveInterrupted
from sudoku_solver.game import solver as solver_module
from sudoku_solver.game.board import Grid
from sudoku_solver.game.puzzles import load_puzzle
from sudoku_solver.game.solver import SolveResult, Solver, solve


def test_solves_classic_puzzle(classic, classic_solution):
    result = solve(classic)
    assert result.solved
    assert result.grid == classic_solution
    assert result.grid.get_row(0) == [5, 3, 4, 6, 7, 8, 9, 1, 2]
    assert result.stats.assignments >= 51
    assert result.stats.calls > 0


def test_solution_is_sound(classic):
    grid = solve(classic).unwrap()
    digits = set(range(1, 10))
    for row in grid.get_all_rows():
        assert set(row) == digits
    for col in grid.get_all_cols():
        assert set(col) == digits
    for box in grid.get_all_boxes():
        assert set(box) == digits
    assert grid.is_solved()


def test_clues_are_kept(classic):
    grid = solve(classic).unwrap()
    for row in range(9):
        for col in range(9):
            clue = classic.get((row, col))
            if clue is not None:
                assert grid.get((row, col)) == clue
                assert not grid.is_editable((row, col))


def test_is_deterministic(classic):
    first = solve(classic).unwrap()
    second = solve(classic.copy()).unwrap()
    assert first == second


def test_does_not_mutate_input(classic):
    before = classic.to_list()
    solve(classic)
    assert classic.to_list() == before


def test_empty_grid_terminates_with_a_solution():
    grid = solve(Grid.empty()).unwrap()
    assert grid.is_solved()
    # nothing constrains the first row, so ascending digits fill it
    assert grid.get_row(0) == list(range(1, 10))


def test_full_valid_grid_is_returned_as_is(classic_solution):
    result = solve(classic_solution)
    assert result.grid == classic_solution
    assert result.stats.assignments == 0


def test_dead_end_is_an_ordinary_result():
    puzzle = load_puzzle(DEAD_END_PUZZLE)
    result = solve(puzzle)
    assert isinstance(result, SolveResult)
    assert not result.solved
    assert result.grid is None
    with pytest.raises(NoSolution):
        result.unwrap()


def test_conflicting_user_entries_have_no_solution(classic):
    board = classic.copy()
    board.set_value((0, 2), 5)
    result = solve(board)
    assert not result.solved
    assert result.stats.calls == 0


def test_small_grid():
    puzzle = load_puzzle(SMALL_PUZZLE, order=2)
    grid = solve(puzzle).unwrap()
    assert grid.to_list() == [
        [1, 2, 4, 3],
        [4, 3, 1, 2],
        [3, 1, 2, 4],
        [2, 4, 3, 1],
    ]
    assert grid.is_solved()


def test_small_dead_end():
    puzzle = load_puzzle(SMALL_DEAD_END, order=2)
    result = solve(puzzle)
    assert not result.solved
    assert result.stats.backtracks == 0


def test_backtracking_is_counted():
    puzzle = load_puzzle(SMALL_PUZZLE, order=2)
    stats = solve(puzzle).stats
    assert stats.backtracks > 0
    assert stats.assignments - stats.backtracks == len(puzzle.empty_positions())


def test_cancel_event_interrupts():
    event = threading.Event()
    event.set()
    solver = Solver(check_interval=1, cancel_event=event)
    grid = Grid.empty()
    with pytest.raises(SolveInterrupted):
        solver.solve(grid)
    assert grid.filled_count() == 0


def test_timeout_interrupts(monkeypatch):
    ticks = iter([0.0] + [100.0] * 1000)
    monkeypatch.setattr(solver_module.time, "monotonic", lambda: next(ticks))
    solver = Solver(check_interval=1, timeout=5)
    with pytest.raises(SolveInterrupted):
        solver.solve(Grid.empty())


def test_unset_event_does_not_interrupt(classic):
    solver = Solver(check_interval=1, cancel_event=threading.Event(), timeout=60)
    assert solver.solve(classic).solved


def test_rejects_bad_check_interval():
    with pytest.raises(ValueError):
        Solver(check_interval=0)


def test_concurrent_solves_are_independent(classic, classic_solution):
    results = [None] * 4

    def work(i):
        results[i] = solve(classic.copy()).unwrap()

    threads = [threading.Thread(target=work, args=(i,)) for i in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(result == classic_solution for result in results)
