from __future__ import annotations

import pytest

from waffle.core.config import DEFAULT_WORDS_PATH
from waffle.core.word_list import load_words
from waffle.game.generator import (
    FALLBACK_SOLUTION,
    GenerationExhausted,
    generate,
    generate_or_fallback,
)
from waffle.game.grid import Solution
from waffle.game.random import seeded_shuffle

FALLBACK_WORDS = ["STARE", "ERROR", "TEETH", "SCENT", "AGREE", "EARTH"]
TRANSPOSED_FALLBACK = Solution.from_words(
    across=("SCENT", "AGREE", "EARTH"),
    down=("STARE", "ERROR", "TEETH"),
)

# Five A-words and three B-words: every down triple is a dead end because no
# A-word ends in Z, which the middle across word would need.
DEAD_END_WORDS = ["ACADB", "AEAFB", "AGAHB", "AIAJB", "AKALB", "BCZDZ", "BEZFZ", "BGZHZ"]


def _assert_valid_solution(solution: Solution, words: set[str]) -> None:
    placed = [*solution.words_across, *solution.words_down]
    assert len(set(placed)) == 6
    assert set(placed) <= words
    h1, h2, h3 = solution.words_across
    v1, v2, v3 = solution.words_down
    for across_index, across in enumerate((h1, h2, h3)):
        for down_index, down in enumerate((v1, v2, v3)):
            assert across[down_index * 2] == down[across_index * 2]


@pytest.mark.parametrize("seed", range(1, 21))
def test_only_solutions_of_the_fallback_words_are_found(seed: int) -> None:
    solution = generate(FALLBACK_WORDS, seed)

    assert solution in (FALLBACK_SOLUTION, TRANSPOSED_FALLBACK)
    _assert_valid_solution(solution, set(FALLBACK_WORDS))


@pytest.mark.parametrize("seed", range(1, 21))
def test_first_usable_top_word_in_shuffled_order_wins(seed: int) -> None:
    shuffled = seeded_shuffle(FALLBACK_WORDS, seed)
    expected_top = next(word for word in shuffled if word in ("STARE", "SCENT"))

    assert generate(FALLBACK_WORDS, seed).words_across[0] == expected_top


def test_generation_is_deterministic_per_seed() -> None:
    words = load_words(str(DEFAULT_WORDS_PATH))

    first, _ = generate_or_fallback(words, 72)
    assert generate_or_fallback(words, 72)[0] == first
    _assert_valid_solution(first, set(words))


def test_sets_are_ordered_before_shuffling() -> None:
    assert generate(set(FALLBACK_WORDS), 9) == generate(sorted(FALLBACK_WORDS), 9)


def test_words_are_normalized_and_deduplicated() -> None:
    messy = [word.lower() for word in FALLBACK_WORDS] + [" stare "]
    assert generate(messy, 3) == generate(FALLBACK_WORDS, 3)


@pytest.mark.parametrize("bad_word", ["STAR", "STARES", "ST4RE"])
def test_malformed_words_are_rejected(bad_word: str) -> None:
    with pytest.raises(ValueError):
        generate([*FALLBACK_WORDS, bad_word], 1)


def test_exhausted_search_reports_attempts() -> None:
    with pytest.raises(GenerationExhausted) as exc_info:
        generate(DEAD_END_WORDS, 5)

    assert exc_info.value.seed == 5
    assert exc_info.value.attempts == 180


def test_attempt_cap_stops_the_search_early() -> None:
    with pytest.raises(GenerationExhausted) as exc_info:
        generate(DEAD_END_WORDS, 5, max_attempts=10)

    assert exc_info.value.attempts == 11


def test_empty_word_list_is_exhausted() -> None:
    with pytest.raises(GenerationExhausted):
        generate([], 1)


def test_fallback_is_served_when_search_fails() -> None:
    solution, used_fallback = generate_or_fallback(DEAD_END_WORDS, 5, max_attempts=10)

    assert used_fallback is True
    assert solution == FALLBACK_SOLUTION


def test_fallback_flag_is_false_on_success() -> None:
    solution, used_fallback = generate_or_fallback(FALLBACK_WORDS, 5)

    assert used_fallback is False
    assert solution in (FALLBACK_SOLUTION, TRANSPOSED_FALLBACK)
