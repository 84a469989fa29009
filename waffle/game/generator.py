from __future__ import annotations

from collections.abc import Iterable

import structlog

from waffle.game.grid import Solution
from waffle.game.random import seeded_shuffle

logger = structlog.get_logger(__name__)

WORD_LENGTH = 5
DEFAULT_MAX_ATTEMPTS = 50_000

# Known-good board served whenever the search comes up empty.
FALLBACK_SOLUTION = Solution.from_words(
    across=("STARE", "ERROR", "TEETH"),
    down=("SCENT", "AGREE", "EARTH"),
)


class GenerationExhausted(Exception):
    def __init__(self, seed: int, attempts: int) -> None:
        self.seed = seed
        self.attempts = attempts
        super().__init__(f"no puzzle found for seed {seed} after {attempts} attempts")


def _ordered_words(words: Iterable[str]) -> list[str]:
    # Sets have no stable iteration order, so sort them before shuffling.
    ordered = sorted(words) if isinstance(words, (set, frozenset)) else list(words)
    normalized = list(dict.fromkeys(word.strip().upper() for word in ordered))
    for word in normalized:
        if len(word) != WORD_LENGTH or not word.isalpha():
            raise ValueError(f"word list entries must be {WORD_LENGTH}-letter words, got {word!r}")
    return normalized


def _index_by_first_letter(words: list[str]) -> dict[str, list[str]]:
    index: dict[str, list[str]] = {}
    for word in words:
        index.setdefault(word[0], []).append(word)
    return index


def _find_match(
    words_by_first: dict[str, list[str]],
    first: str,
    middle: str,
    last: str,
    used: set[str],
) -> str | None:
    for word in words_by_first.get(first, ()):
        if word[2] == middle and word[4] == last and word not in used:
            return word
    return None


def generate(
    words: Iterable[str],
    seed: int,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Solution:
    """Find six interlocking words for ``seed``.

    The shuffled list is searched depth-first: the first across word, then the
    three down words hanging off its letters 0/2/4, then the middle and bottom
    across words that complete them. The first combination found wins.
    ``max_attempts`` bounds the number of down-word triples tried.
    """
    shuffled = seeded_shuffle(_ordered_words(words), seed)
    words_by_first = _index_by_first_letter(shuffled)
    attempts = 0

    for h1 in shuffled:
        used = {h1}
        for v1 in words_by_first.get(h1[0], ()):
            if v1 in used:
                continue
            used.add(v1)
            for v2 in words_by_first.get(h1[2], ()):
                if v2 in used:
                    continue
                used.add(v2)
                for v3 in words_by_first.get(h1[4], ()):
                    if v3 in used:
                        continue
                    used.add(v3)

                    h2 = _find_match(words_by_first, v1[2], v2[2], v3[2], used)
                    if h2 is not None:
                        used.add(h2)
                        h3 = _find_match(words_by_first, v1[4], v2[4], v3[4], used)
                        if h3 is not None:
                            logger.debug("puzzle_generated", seed=seed, attempts=attempts)
                            return Solution.from_words(across=(h1, h2, h3), down=(v1, v2, v3))
                        used.discard(h2)

                    used.discard(v3)
                    attempts += 1
                    if attempts > max_attempts:
                        raise GenerationExhausted(seed=seed, attempts=attempts)
                used.discard(v2)
            used.discard(v1)

    raise GenerationExhausted(seed=seed, attempts=attempts)


def generate_or_fallback(
    words: Iterable[str],
    seed: int,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> tuple[Solution, bool]:
    """Return ``(solution, used_fallback)``; exhaustion never escapes."""
    try:
        return generate(words, seed, max_attempts=max_attempts), False
    except GenerationExhausted as exc:
        logger.warning("puzzle_generation_exhausted", seed=exc.seed, attempts=exc.attempts)
        return FALLBACK_SOLUTION, True


__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "FALLBACK_SOLUTION",
    "GenerationExhausted",
    "generate",
    "generate_or_fallback",
]
