from __future__ import annotations

import sys
from pathlib import Path

import pytest

from waffle.cli import __main__ as cli_main
from waffle.cli import generate_puzzle, validate_words
from waffle.core.config import get_settings
from waffle.game.generator import FALLBACK_SOLUTION

FALLBACK_WORDS = "\n".join(["STARE", "ERROR", "TEETH", "SCENT", "AGREE", "EARTH"]) + "\n"


@pytest.fixture(autouse=True)
def _fresh_settings() -> None:
    get_settings.cache_clear()


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "words.txt"
    path.write_text(content, encoding="utf-8")
    return path


def test_generate_prints_solution_and_board(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    words_path = _write(tmp_path, FALLBACK_WORDS)

    exit_code = generate_puzzle.main(["--puzzle", "5", "--words", str(words_path)])

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Puzzle #5 (2026-01-21)" in out
    assert "S T A R E" in out or "S C E N T" in out
    assert "Starting board (+ correct, ? present, . wrong):" in out


def test_generate_by_date(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    words_path = _write(tmp_path, FALLBACK_WORDS)

    assert generate_puzzle.main(["--date", "2026-03-29", "--words", str(words_path)]) == 0
    assert "Puzzle #72 (2026-03-29)" in capsys.readouterr().out


def test_generate_falls_back_when_no_puzzle_fits(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    words_path = _write(tmp_path, "ACADB\nAEAFB\nBCZDZ\n")

    assert generate_puzzle.main(["--puzzle", "3", "--words", str(words_path)]) == 0
    out = capsys.readouterr().out
    for row in FALLBACK_SOLUTION.rows:
        assert " ".join(row) in out


def test_generate_with_missing_word_list(tmp_path: Path) -> None:
    assert generate_puzzle.main(["--puzzle", "1", "--words", str(tmp_path / "nope.txt")]) == 1


def test_generate_rejects_non_positive_puzzle() -> None:
    with pytest.raises(SystemExit):
        generate_puzzle.main(["--puzzle", "0"])


def test_render_grid_marks_statuses() -> None:
    lines = generate_puzzle.render_grid(FALLBACK_SOLUTION.to_grid())

    assert lines[0] == "S+ T+ A+ R+ E+"
    assert lines[1] == "C+    G+    A+"


def test_validate_words_passes_clean_list(tmp_path: Path) -> None:
    assert validate_words.main(["--words", str(_write(tmp_path, FALLBACK_WORDS))]) == 0


def test_validate_words_flags_bad_lines(tmp_path: Path) -> None:
    assert validate_words.main(["--words", str(_write(tmp_path, "STARE\nSTAR\nSTARE\n"))]) == 1


def test_validate_words_missing_file(tmp_path: Path) -> None:
    assert validate_words.main(["--words", str(tmp_path / "nope.txt")]) == 1


def test_validate_words_defaults_to_bundled_list() -> None:
    assert validate_words.main([]) == 0


def test_dispatcher_runs_subcommand(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    words_path = _write(tmp_path, FALLBACK_WORDS)
    monkeypatch.setattr(sys, "argv", ["waffle", "generate", "--puzzle", "2", "--words", str(words_path)])

    assert cli_main.main() == 0
    assert "Puzzle #2" in capsys.readouterr().out
