from __future__ import annotations

from collections import Counter

from waffle.api.errors import ApiErrorCode, NotFoundError, RuleViolationError
from waffle.game.clock import DailySeedClock
from waffle.game.grid import Coord, Grid, Solution
from waffle.game.session import (
    GameSession,
    GapCellSwapError,
    InvalidSwapRequest,
    LockedCellSwapError,
    SameCellSwapError,
    SessionFinishedError,
    apply_swap,
)

_SWAP_ERROR_CODES: dict[type[InvalidSwapRequest], ApiErrorCode] = {
    SessionFinishedError: ApiErrorCode.SESSION_FINISHED,
    SameCellSwapError: ApiErrorCode.SAME_CELL_SWAP,
    GapCellSwapError: ApiErrorCode.GAP_CELL_SWAP,
    LockedCellSwapError: ApiErrorCode.LOCKED_CELL_SWAP,
}


def ensure_puzzle_available(clock: DailySeedClock, puzzle_id: int) -> None:
    current = clock.current_puzzle_number()
    if puzzle_id < 1 or puzzle_id > current:
        raise NotFoundError(
            code=ApiErrorCode.PUZZLE_NOT_FOUND,
            details={"puzzle_id": puzzle_id, "latest_puzzle_id": current},
        )


def ensure_board_matches_solution(grid: Grid, solution: Solution, puzzle_id: int) -> None:
    if Counter(grid.letters()) != Counter(solution.letters()):
        raise RuleViolationError(
            code=ApiErrorCode.STATE_CORRUPT,
            details={"puzzle_id": puzzle_id, "rule": "letters_must_match_puzzle"},
        )


def ensure_swaps_within_budget(swaps_remaining: int, swap_budget: int, puzzle_id: int) -> None:
    if swaps_remaining > swap_budget:
        raise RuleViolationError(
            code=ApiErrorCode.STATE_CORRUPT,
            details={"puzzle_id": puzzle_id, "rule": "swaps_remaining_exceeds_budget", "swap_budget": swap_budget},
        )


def apply_swap_or_409(session: GameSession, solution: Solution, first: Coord, second: Coord) -> GameSession:
    try:
        return apply_swap(session, solution, first, second)
    except InvalidSwapRequest as exc:
        raise RuleViolationError(
            code=_SWAP_ERROR_CODES.get(type(exc), ApiErrorCode.HTTP_ERROR),
            details={"from": list(first), "to": list(second)},
        ) from exc


__all__ = [
    "apply_swap_or_409",
    "ensure_board_matches_solution",
    "ensure_puzzle_available",
    "ensure_swaps_within_budget",
]
