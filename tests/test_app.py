import pytest

from app import EXIT_INTERRUPTED, EXIT_MALFORMED, EXIT_NO_SOLUTION, main
from conftest import DEAD_END_PUZZLE


def test_solves_demo_headless(capsys):
    assert main(["--solve"]) == 0
    out = capsys.readouterr().out
    assert "Puzzle:" in out
    assert "Solution:" in out
    assert "5 3 4 | 6 7 8 | 9 1 2" in out


def test_solves_bundled_puzzle_by_name(capsys):
    assert main(["--solve", "--name", "easy"]) == 0
    assert "Solution:" in capsys.readouterr().out


def test_solves_puzzle_file(tmp_path, capsys):
    path = tmp_path / "puzzle.txt"
    path.write_text("." * 81)
    assert main(["--solve", "--puzzle", str(path), "--timeout", "60"]) == 0
    assert "1 2 3 | 4 5 6 | 7 8 9" in capsys.readouterr().out


def test_malformed_puzzle_file(tmp_path):
    path = tmp_path / "puzzle.txt"
    path.write_text("55" + "." * 79)
    assert main(["--solve", "--puzzle", str(path)]) == EXIT_MALFORMED


def test_missing_puzzle_file(tmp_path):
    assert main(["--solve", "--puzzle", str(tmp_path / "nope.txt")]) == EXIT_MALFORMED


def test_unsolvable_puzzle_file(tmp_path, capsys):
    path = tmp_path / "puzzle.txt"
    path.write_text(DEAD_END_PUZZLE)
    assert main(["--solve", "--puzzle", str(path)]) == EXIT_NO_SOLUTION
    assert "Solution:" not in capsys.readouterr().out


def test_bad_log_level():
    with pytest.raises(SystemExit):
        main(["--solve", "--log-level", "chatty"])


@pytest.mark.parametrize("interval", ["0", "-5", "many"])
def test_bad_check_interval(interval):
    with pytest.raises(SystemExit):
        main(["--solve", "--check-interval", interval])


def test_timeout_exit_code():
    assert main(["--solve", "--timeout", "-1", "--check-interval", "1"]) == EXIT_INTERRUPTED
