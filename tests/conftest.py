import pytest

from sudoku_solver.game.puzzles import load_puzzle

CLASSIC_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

CLASSIC_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# consistent clues, but (0, 8) can only hold 9 and column 8 already has one
DEAD_END_PUZZLE = (
    "123456780"
    "000000009"
    + "0" * 63
)

SMALL_PUZZLE = (
    "1.|.."
    "..|1."
    "--+--"
    ".1|.."
    "..|3."
)

# consistent clues, but (0, 2) has no candidate left
SMALL_DEAD_END = (
    "12.."
    "...."
    "..3."
    "..4."
)


@pytest.fixture
def classic():
    return load_puzzle(CLASSIC_PUZZLE)


@pytest.fixture
def classic_solution():
    return load_puzzle(CLASSIC_SOLUTION)
