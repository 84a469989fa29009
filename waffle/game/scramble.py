"""Initial board for a day's puzzle.

A weighted draw decides how many tiles start green. Those tiles are picked from
a seeded shuffle of the 21 letter cells; every other letter is moved so that it
does not land on a cell expecting that same letter. Without that derangement a
lucky shuffle could hand out extra greens.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from waffle.game.coloring import recolor
from waffle.game.grid import VALID_CELL_COUNT, VALID_COORDS, Coord, Grid, Solution
from waffle.game.random import DeterministicRandom, seeded_shuffle

MAX_DERANGEMENT_ATTEMPTS = 100
# At least two tiles must move. Which tiles stay green is also constrained, see
# _pick_greens.
MAX_GREEN_COUNT = VALID_CELL_COUNT - 2


@dataclass(frozen=True)
class GreenCountDistribution:
    """Discrete weighted distribution over the number of starting greens."""

    weights: tuple[tuple[int, float], ...]

    def __post_init__(self) -> None:
        if not self.weights:
            raise ValueError("green count distribution must not be empty")

        counts = [count for count, _ in self.weights]
        if counts != sorted(set(counts)):
            raise ValueError("green counts must be unique and ascending")
        for count, weight in self.weights:
            if not (0 <= count <= MAX_GREEN_COUNT):
                raise ValueError(f"green count must be between 0 and {MAX_GREEN_COUNT}, got {count}")
            if weight <= 0:
                raise ValueError(f"weight for green count {count} must be > 0")

    @classmethod
    def from_mapping(cls, weights: Mapping[int, float]) -> GreenCountDistribution:
        return cls(weights=tuple(sorted((int(count), float(weight)) for count, weight in weights.items())))

    @property
    def minimum(self) -> int:
        return self.weights[0][0]

    @property
    def maximum(self) -> int:
        return self.weights[-1][0]

    def draw(self, value: float) -> int:
        """Map a uniform draw in [0, 1) onto a green count."""
        threshold = value * sum(weight for _, weight in self.weights)
        cumulative = 0.0
        for count, weight in self.weights:
            cumulative += weight
            if threshold < cumulative:
                return count
        return self.maximum


GREEN_COUNT_PRESETS: dict[str, GreenCountDistribution] = {
    "standard": GreenCountDistribution.from_mapping({4: 0.2, 5: 0.35, 6: 0.3, 7: 0.15}),
    "easy": GreenCountDistribution.from_mapping({6: 0.3, 7: 0.45, 8: 0.25}),
}
DEFAULT_GREEN_COUNTS = GREEN_COUNT_PRESETS["standard"]


def _has_fixed_point(placed: Sequence[str], targets: Sequence[str]) -> bool:
    return any(letter == target for letter, target in zip(placed, targets))


def _find_swap_partner(placed: list[str], targets: Sequence[str], index: int) -> int | None:
    size = len(placed)
    order = [*range(index + 1, size), *range(index)]
    for other in order:
        if placed[other] != targets[index] and placed[index] != targets[other]:
            return other
    for other in order:
        if placed[other] != targets[index]:
            return other
    return None


def _repair_fixed_points(placed: Sequence[str], targets: Sequence[str]) -> list[str]:
    # A partner that clears both slots always exists while a derangement is
    # possible at all, so a single pass is enough.
    repaired = list(placed)
    for index, target in enumerate(targets):
        if repaired[index] != target:
            continue
        partner = _find_swap_partner(repaired, targets, index)
        if partner is not None:
            repaired[index], repaired[partner] = repaired[partner], repaired[index]
    return repaired


def derange(
    targets: Sequence[str],
    rng: DeterministicRandom,
    *,
    max_attempts: int = MAX_DERANGEMENT_ATTEMPTS,
) -> list[str]:
    """Permute ``targets`` so no slot keeps the letter it expects.

    A lone letter cannot move and is returned as is. When the letter mix makes
    a full derangement impossible, the leftover fixed points stay in place.
    """
    if len(targets) < 2:
        return list(targets)

    candidate = list(targets)
    for _ in range(max_attempts):
        candidate = seeded_shuffle(targets, rng)
        if not _has_fixed_point(candidate, targets):
            return candidate
    return _repair_fixed_points(candidate, targets)


def _can_derange(letter_counts: Counter[str], size: int) -> bool:
    # Some ``size`` of these letters can be deranged iff none fills more than half.
    return sum(min(count, size // 2) for count in letter_counts.values()) >= size


def _feasible_green_count(solution: Solution, drawn: int, distribution: GreenCountDistribution) -> int:
    """Return ``drawn`` or, failing that, the closest count the letters allow.

    Ties prefer fewer greens. Raises ``ValueError`` when no count of the
    distribution leaves a board that can be scrambled.
    """
    letter_counts = Counter(solution.letters())
    feasible = [
        count
        for count, _ in distribution.weights
        if _can_derange(letter_counts, VALID_CELL_COUNT - count)
    ]
    if not feasible:
        raise ValueError("solution letters are too uniform for this green count distribution")
    return min(feasible, key=lambda count: (abs(count - drawn), count))


def _pick_greens(solution: Solution, coords: Sequence[Coord], green_count: int) -> list[Coord]:
    """Take greens in shuffled order, skipping any that would leave a rest that cannot be deranged."""
    movable_count = VALID_CELL_COUNT - green_count
    remaining = Counter(solution.letter_at(*coord) for coord in coords)
    greens: list[Coord] = []
    for coord in coords:
        if len(greens) == green_count:
            break
        letter = solution.letter_at(*coord)
        remaining[letter] -= 1
        if _can_derange(remaining, movable_count):
            greens.append(coord)
        else:
            remaining[letter] += 1
    return greens


def scramble(
    solution: Solution,
    seed: int,
    distribution: GreenCountDistribution = DEFAULT_GREEN_COUNTS,
) -> Grid:
    """Scramble ``solution`` so exactly the drawn number of tiles start green.

    The board never starts solved: at least two tiles move and every moved
    tile leaves its own slot.
    """
    rng = DeterministicRandom(seed)
    green_count = _feasible_green_count(solution, distribution.draw(rng.next()), distribution)

    coords = seeded_shuffle(VALID_COORDS, rng)
    greens = _pick_greens(solution, coords, green_count)
    green_set = set(greens)
    movable = [coord for coord in coords if coord not in green_set]

    targets = [solution.letter_at(row, col) for row, col in movable]
    placements: dict[Coord, str] = {coord: solution.letter_at(*coord) for coord in greens}
    placements.update(zip(movable, derange(targets, rng)))

    return recolor(Grid.from_placements(placements), solution)


__all__ = [
    "DEFAULT_GREEN_COUNTS",
    "GREEN_COUNT_PRESETS",
    "GreenCountDistribution",
    "MAX_DERANGEMENT_ATTEMPTS",
    "MAX_GREEN_COUNT",
    "derange",
    "scramble",
]
