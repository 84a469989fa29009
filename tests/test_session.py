from __future__ import annotations

import pytest

from waffle.game.coloring import recolor
from waffle.game.generator import FALLBACK_SOLUTION
from waffle.game.grid import CellStatus, Grid
from waffle.game.session import (
    DEFAULT_SWAP_BUDGET,
    GameSession,
    GapCellSwapError,
    LockedCellSwapError,
    SameCellSwapError,
    SessionFinishedError,
    SessionStatus,
    apply_swap,
    new_session,
    stars_for,
)


def _board(rows: list[str]) -> Grid:
    return recolor(Grid.from_letters(rows), FALLBACK_SOLUTION)


# One swap away from solved: T and R traded on the top row.
ONE_SWAP_ROWS = ["SRATE", "C G A", "ERROR", "N E T", "TEETH"]
# C, G and N rotated: a single swap cannot fix all three.
ROTATED_ROWS = ["STARE", "G N A", "ERROR", "C E T", "TEETH"]


def test_new_session_starts_playing_with_full_budget() -> None:
    session = new_session(7, _board(ONE_SWAP_ROWS))

    assert session.puzzle_id == 7
    assert session.swaps_remaining == DEFAULT_SWAP_BUDGET == 15
    assert session.status is SessionStatus.PLAYING
    assert not session.is_finished

    with pytest.raises(ValueError):
        new_session(7, _board(ONE_SWAP_ROWS), swap_budget=0)


def test_winning_swap_finishes_the_game() -> None:
    session = new_session(1, _board(ONE_SWAP_ROWS))
    assert session.grid.cell(0, 1).status is CellStatus.PRESENT

    won = apply_swap(session, FALLBACK_SOLUTION, (0, 1), (0, 3))

    assert won.status is SessionStatus.WON
    assert won.swaps_remaining == 14
    assert won.grid.letters() == FALLBACK_SOLUTION.letters()
    assert stars_for(won) == 5
    assert session.swaps_remaining == 15


def test_stars_equal_leftover_swaps_up_to_five() -> None:
    session = GameSession(puzzle_id=1, grid=_board(ONE_SWAP_ROWS), swaps_remaining=4)

    won = apply_swap(session, FALLBACK_SOLUTION, (0, 3), (0, 1))

    assert won.status is SessionStatus.WON
    assert stars_for(won) == 3


def test_last_swap_without_solving_loses() -> None:
    session = GameSession(puzzle_id=1, grid=_board(ROTATED_ROWS), swaps_remaining=1)

    lost = apply_swap(session, FALLBACK_SOLUTION, (1, 0), (1, 2))

    assert lost.status is SessionStatus.LOST
    assert lost.swaps_remaining == 0
    assert lost.grid.cell(1, 2).status is CellStatus.CORRECT
    assert stars_for(lost) == 0


def test_swap_recolors_and_keeps_playing() -> None:
    session = new_session(1, _board(ROTATED_ROWS))

    after = apply_swap(session, FALLBACK_SOLUTION, (1, 0), (1, 2))

    assert after.status is SessionStatus.PLAYING
    assert after.swaps_remaining == 14
    assert after.grid.char_at(1, 2) == "G"
    assert after.grid.cell(1, 2).status is CellStatus.CORRECT
    assert stars_for(after) == 0


def test_finished_sessions_reject_swaps() -> None:
    won = GameSession(puzzle_id=1, grid=_board(ONE_SWAP_ROWS), swaps_remaining=3, status=SessionStatus.WON)
    with pytest.raises(SessionFinishedError):
        apply_swap(won, FALLBACK_SOLUTION, (0, 1), (0, 3))

    out_of_swaps = GameSession(puzzle_id=1, grid=_board(ONE_SWAP_ROWS), swaps_remaining=0)
    with pytest.raises(SessionFinishedError):
        apply_swap(out_of_swaps, FALLBACK_SOLUTION, (0, 1), (0, 3))


def test_same_cell_swap_is_rejected() -> None:
    with pytest.raises(SameCellSwapError):
        apply_swap(new_session(1, _board(ONE_SWAP_ROWS)), FALLBACK_SOLUTION, (0, 1), (0, 1))


@pytest.mark.parametrize("target", [(1, 1), (3, 3), (5, 0), (0, -1)])
def test_gap_and_off_grid_cells_are_rejected(target: tuple[int, int]) -> None:
    with pytest.raises(GapCellSwapError):
        apply_swap(new_session(1, _board(ONE_SWAP_ROWS)), FALLBACK_SOLUTION, (0, 1), target)


def test_green_tiles_are_locked() -> None:
    session = new_session(1, _board(ONE_SWAP_ROWS))

    with pytest.raises(LockedCellSwapError):
        apply_swap(session, FALLBACK_SOLUTION, (0, 1), (0, 0))
    with pytest.raises(LockedCellSwapError):
        apply_swap(session, FALLBACK_SOLUTION, (4, 4), (0, 3))
