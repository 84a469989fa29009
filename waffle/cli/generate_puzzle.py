from __future__ import annotations

import argparse
from datetime import date
from pathlib import Path

import structlog

from waffle.core.config import get_settings
from waffle.core.logging import configure_logging
from waffle.core.word_list import WordListError, load_word_list
from waffle.game.clock import DailySeedClock
from waffle.game.coloring import count_correct
from waffle.game.grid import CellStatus, Grid
from waffle.services.daily_puzzle import build_daily_puzzle

logger = structlog.get_logger(__name__)

STATUS_MARKERS = {
    CellStatus.CORRECT: "+",
    CellStatus.PRESENT: "?",
    CellStatus.WRONG: ".",
    CellStatus.GAP: " ",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print the solution and starting board for a daily puzzle")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--puzzle", type=_positive_int, default=None, help="Puzzle number (defaults to today)")
    target.add_argument("--date", type=date.fromisoformat, default=None, help="Local puzzle date, YYYY-MM-DD")
    parser.add_argument("--words", default=None, help="Path to the word list (defaults to WORDS_PATH)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level",
    )
    return parser


def _positive_int(value: str) -> int:
    parsed = int(value)
    if parsed <= 0:
        raise argparse.ArgumentTypeError("puzzle must be a positive integer")
    return parsed


def render_grid(grid: Grid) -> list[str]:
    return [
        " ".join(f"{cell.char or ' '}{STATUS_MARKERS[cell.status]}" for cell in row).rstrip()
        for row in grid.rows
    ]


def run(args: argparse.Namespace) -> int:
    configure_logging(args.log_level, json_logs=False)
    settings = get_settings()
    clock = DailySeedClock(launch_date=settings.launch_date, timezone_name=settings.reference_timezone)

    if args.puzzle is not None:
        puzzle_id = args.puzzle
    elif args.date is not None:
        puzzle_id = clock.puzzle_number_for(args.date)
    else:
        puzzle_id = clock.current_puzzle_number()

    words_path = Path(args.words) if args.words else settings.words_path
    try:
        word_list = load_word_list(words_path)
    except WordListError as exc:
        logger.error("word_list_unavailable", error=str(exc))
        return 1

    puzzle = build_daily_puzzle(
        puzzle_id,
        word_list.words,
        max_attempts=settings.generator_max_attempts,
        distribution=settings.green_count_distribution,
    )

    logger.info(
        "puzzle_generated",
        puzzle_id=puzzle_id,
        puzzle_date=clock.date_for_puzzle(puzzle_id).isoformat(),
        used_fallback=puzzle.used_fallback,
        words_across=list(puzzle.solution.words_across),
        words_down=list(puzzle.solution.words_down),
        green_count=count_correct(puzzle.initial_grid, puzzle.solution),
    )

    print(f"Puzzle #{puzzle_id} ({clock.date_for_puzzle(puzzle_id).isoformat()})")
    print("Solution:")
    for line in puzzle.solution.rows:
        print(f"  {' '.join(line)}")
    print("Starting board (+ correct, ? present, . wrong):")
    for line in render_grid(puzzle.initial_grid):
        print(f"  {line}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    return run(parser.parse_args(argv))


if __name__ == "__main__":
    raise SystemExit(main())
