from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

import structlog

from waffle.core.config import get_settings
from waffle.core.word_list import load_words
from waffle.game.clock import DailySeedClock
from waffle.game.generator import DEFAULT_MAX_ATTEMPTS, generate_or_fallback
from waffle.game.grid import Grid, Solution
from waffle.game.scramble import DEFAULT_GREEN_COUNTS, GreenCountDistribution, scramble

logger = structlog.get_logger(__name__)

# Keeps the scramble stream apart from the word shuffle of the same day.
SCRAMBLE_SEED_OFFSET = 7919


@dataclass(frozen=True)
class DailyPuzzle:
    puzzle_id: int
    solution: Solution
    initial_grid: Grid
    used_fallback: bool


def build_daily_puzzle(
    puzzle_id: int,
    words: Iterable[str],
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    distribution: GreenCountDistribution = DEFAULT_GREEN_COUNTS,
) -> DailyPuzzle:
    if puzzle_id < 1:
        raise ValueError("puzzle_id must be >= 1")

    solution, used_fallback = generate_or_fallback(words, puzzle_id, max_attempts=max_attempts)
    initial_grid = scramble(solution, puzzle_id + SCRAMBLE_SEED_OFFSET, distribution)
    return DailyPuzzle(
        puzzle_id=puzzle_id,
        solution=solution,
        initial_grid=initial_grid,
        used_fallback=used_fallback,
    )


@lru_cache(maxsize=1)
def get_clock() -> DailySeedClock:
    settings = get_settings()
    return DailySeedClock(launch_date=settings.launch_date, timezone_name=settings.reference_timezone)


@lru_cache(maxsize=64)
def get_daily_puzzle(puzzle_id: int) -> DailyPuzzle:
    settings = get_settings()
    puzzle = build_daily_puzzle(
        puzzle_id,
        load_words(str(settings.words_path)),
        max_attempts=settings.generator_max_attempts,
        distribution=settings.green_count_distribution,
    )
    logger.info("daily_puzzle_built", puzzle_id=puzzle_id, used_fallback=puzzle.used_fallback)
    return puzzle


__all__ = [
    "DailyPuzzle",
    "SCRAMBLE_SEED_OFFSET",
    "build_daily_puzzle",
    "get_clock",
    "get_daily_puzzle",
]
