"""Seeded pseudo-random stream shared by every daily derivation.

The generator is Mulberry32. Puzzles are identical for everyone who uses the
same puzzle number, so the state update must stay bit-for-bit compatible with
the reference implementation.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = 4294967296.0
MULBERRY32_INCREMENT = 0x6D2B79F5

T = TypeVar("T")


def _imul(left: int, right: int) -> int:
    return (left * right) & UINT32_MASK


class DeterministicRandom:
    """Mulberry32 generator returning floats in [0, 1)."""

    def __init__(self, seed: int) -> None:
        # Negative and oversized seeds wrap exactly like a 32-bit integer would.
        self._state = seed & UINT32_MASK

    def next(self) -> float:
        self._state = (self._state + MULBERRY32_INCREMENT) & UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t = (t ^ (t + _imul(t ^ (t >> 7), t | 61))) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / UINT32_SCALE

    def randbelow(self, upper: int) -> int:
        if upper <= 0:
            raise ValueError("upper must be positive")
        return int(self.next() * upper)


def seeded_shuffle(items: Sequence[T], seed: int | DeterministicRandom) -> list[T]:
    """Fisher-Yates shuffle driven by a seed or an existing stream.

    Passing a ``DeterministicRandom`` continues its stream, so several shuffles
    can share one seed without repeating each other. The input is not modified.
    """
    rng = seed if isinstance(seed, DeterministicRandom) else DeterministicRandom(seed)
    shuffled = list(items)
    for index in range(len(shuffled) - 1, 0, -1):
        swap_index = rng.randbelow(index + 1)
        shuffled[index], shuffled[swap_index] = shuffled[swap_index], shuffled[index]
    return shuffled


__all__ = ["DeterministicRandom", "UINT32_MASK", "seeded_shuffle"]
