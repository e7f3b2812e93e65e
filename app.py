import argparse
import sys

from sudoku_solver.exceptions import (
    InvalidDigit,
    MalformedPuzzle,
    NoSolution,
    SolveInterrupted,
)
from sudoku_solver.game.puzzles import (
    DEMO_PUZZLE,
    available_puzzles,
    bundled_puzzle,
    format_grid,
    read_puzzle_file,
)
from sudoku_solver.game.solver import CHECK_INTERVAL, Solver
from sudoku_solver.logger import get_logger, set_level

logger = get_logger(__name__)

EXIT_MALFORMED = 1
EXIT_NO_SOLUTION = 2
EXIT_INTERRUPTED = 3


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Sudoku game and solver")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("-p", "--puzzle", help="path to a text puzzle file")
    source.add_argument(
        "-n",
        "--name",
        default=DEMO_PUZZLE,
        help=f"bundled puzzle to load, one of {available_puzzles()}",
    )
    parser.add_argument(
        "-s", "--solve", action="store_true", help="print the solution instead of opening the game"
    )
    parser.add_argument("-t", "--timeout", type=float, help="give up solving after this many seconds")
    parser.add_argument(
        "--check-interval",
        type=positive_int,
        default=CHECK_INTERVAL,
        help="search calls between timeout checks",
    )
    parser.add_argument("--log-level", default="INFO", help="logging level")
    return parser


def solve_puzzle(puzzle, solver: Solver) -> int:
    print("Puzzle:")
    print(format_grid(puzzle))
    try:
        solution = solver.solve(puzzle).unwrap()
    except NoSolution as e:
        logger.error(str(e))
        return EXIT_NO_SOLUTION
    except SolveInterrupted as e:
        logger.error(str(e))
        return EXIT_INTERRUPTED
    print("Solution:")
    print(format_grid(solution))
    return 0


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        set_level(args.log_level)
    except ValueError as e:
        parser.error(str(e))

    try:
        if args.puzzle:
            puzzle = read_puzzle_file(args.puzzle)
        else:
            puzzle = bundled_puzzle(args.name)
    except (MalformedPuzzle, InvalidDigit) as e:
        logger.error(f"Rejected puzzle: {e}")
        return EXIT_MALFORMED
    except OSError as e:
        logger.error(f"Could not read puzzle: {e}")
        return EXIT_MALFORMED

    solver = Solver(check_interval=args.check_interval, timeout=args.timeout)
    if args.solve:
        return solve_puzzle(puzzle, solver)

    from game import run_game

    run_game(puzzle, solver)
    return 0


if __name__ == "__main__":
    sys.exit(main())
