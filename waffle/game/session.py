from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from waffle.game.coloring import is_won, recolor
from waffle.game.grid import CellStatus, Coord, Grid, Solution, is_on_grid, is_valid_cell

DEFAULT_SWAP_BUDGET = 15
MAX_STARS = 5


class SessionStatus(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class InvalidSwapRequest(Exception):
    pass


class SessionFinishedError(InvalidSwapRequest):
    pass


class SameCellSwapError(InvalidSwapRequest):
    pass


class GapCellSwapError(InvalidSwapRequest):
    pass


class LockedCellSwapError(InvalidSwapRequest):
    pass


@dataclass(frozen=True)
class GameSession:
    puzzle_id: int
    grid: Grid
    swaps_remaining: int
    status: SessionStatus = SessionStatus.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.status is not SessionStatus.PLAYING


def new_session(puzzle_id: int, initial_grid: Grid, swap_budget: int = DEFAULT_SWAP_BUDGET) -> GameSession:
    if swap_budget <= 0:
        raise ValueError("swap_budget must be > 0")
    return GameSession(puzzle_id=puzzle_id, grid=initial_grid, swaps_remaining=swap_budget)


def validate_swap(session: GameSession, first: Coord, second: Coord) -> None:
    if session.is_finished or session.swaps_remaining <= 0:
        raise SessionFinishedError()
    if first == second:
        raise SameCellSwapError()
    for row, col in (first, second):
        if not is_on_grid(row, col) or not is_valid_cell(row, col):
            raise GapCellSwapError()
        if session.grid.cell(row, col).status is CellStatus.CORRECT:
            raise LockedCellSwapError()


def apply_swap(session: GameSession, solution: Solution, first: Coord, second: Coord) -> GameSession:
    """Swap two tiles, recolor, spend one swap and settle the outcome."""
    validate_swap(session, first, second)

    grid = recolor(session.grid.with_swapped(first, second), solution)
    swaps_remaining = session.swaps_remaining - 1

    if is_won(grid):
        status = SessionStatus.WON
    elif swaps_remaining <= 0:
        status = SessionStatus.LOST
    else:
        status = SessionStatus.PLAYING

    return replace(session, grid=grid, swaps_remaining=swaps_remaining, status=status)


def stars_for(session: GameSession) -> int:
    if session.status is not SessionStatus.WON:
        return 0
    return min(MAX_STARS, max(0, session.swaps_remaining))


__all__ = [
    "DEFAULT_SWAP_BUDGET",
    "GameSession",
    "GapCellSwapError",
    "InvalidSwapRequest",
    "LockedCellSwapError",
    "MAX_STARS",
    "SameCellSwapError",
    "SessionFinishedError",
    "SessionStatus",
    "apply_swap",
    "new_session",
    "stars_for",
    "validate_swap",
]
