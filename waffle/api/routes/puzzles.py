from __future__ import annotations

import structlog
from fastapi import APIRouter, Path

from waffle.api.guards import (
    apply_swap_or_409,
    ensure_board_matches_solution,
    ensure_puzzle_available,
    ensure_swaps_within_budget,
)
from waffle.api.schemas.puzzles import (
    BoardRequest,
    CellSnapshot,
    PuzzleResponse,
    RecolorResponse,
    SessionSnapshot,
    SwapRequest,
)
from waffle.core.config import get_settings
from waffle.game.coloring import is_won, recolor
from waffle.game.grid import Grid
from waffle.game.session import GameSession, new_session, stars_for
from waffle.services.daily_puzzle import DailyPuzzle, get_clock, get_daily_puzzle

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/puzzles", tags=["puzzles"])


def _session_snapshot(session: GameSession, puzzle: DailyPuzzle) -> SessionSnapshot:
    finished = session.is_finished
    return SessionSnapshot(
        puzzle_id=session.puzzle_id,
        status=session.status,
        swaps_remaining=session.swaps_remaining,
        stars=stars_for(session) if finished else None,
        cells=CellSnapshot.from_grid(session.grid),
        solution=list(puzzle.solution.rows) if finished else None,
    )


def _build_puzzle_response(puzzle_id: int) -> PuzzleResponse:
    settings = get_settings()
    clock = get_clock()
    puzzle = get_daily_puzzle(puzzle_id)
    session = new_session(puzzle_id, puzzle.initial_grid, settings.swap_budget)

    return PuzzleResponse(
        puzzle_id=puzzle_id,
        puzzle_date=clock.date_for_puzzle(puzzle_id),
        next_rollover_at=clock.next_rollover_instant(),
        swap_budget=settings.swap_budget,
        session=_session_snapshot(session, puzzle),
    )


def _load_submitted_board(puzzle_id: int, payload: BoardRequest) -> tuple[DailyPuzzle, Grid]:
    ensure_puzzle_available(get_clock(), puzzle_id)
    puzzle = get_daily_puzzle(puzzle_id)
    grid = Grid.from_letters(payload.letters)
    ensure_board_matches_solution(grid, puzzle.solution, puzzle_id)
    return puzzle, recolor(grid, puzzle.solution)


@router.get("/today", response_model=PuzzleResponse)
async def get_today_puzzle() -> PuzzleResponse:
    return _build_puzzle_response(get_clock().current_puzzle_number())


@router.get("/{puzzle_id}", response_model=PuzzleResponse)
async def get_puzzle(puzzle_id: int = Path(ge=1)) -> PuzzleResponse:
    ensure_puzzle_available(get_clock(), puzzle_id)
    return _build_puzzle_response(puzzle_id)


@router.post("/{puzzle_id}/recolor", response_model=RecolorResponse)
async def recolor_board(payload: BoardRequest, puzzle_id: int = Path(ge=1)) -> RecolorResponse:
    _, grid = _load_submitted_board(puzzle_id, payload)
    return RecolorResponse(puzzle_id=puzzle_id, won=is_won(grid), cells=CellSnapshot.from_grid(grid))


@router.post("/{puzzle_id}/swap", response_model=SessionSnapshot)
async def swap_tiles(payload: SwapRequest, puzzle_id: int = Path(ge=1)) -> SessionSnapshot:
    puzzle, grid = _load_submitted_board(puzzle_id, payload)
    ensure_swaps_within_budget(payload.swaps_remaining, get_settings().swap_budget, puzzle_id)

    session = GameSession(
        puzzle_id=puzzle_id,
        grid=grid,
        swaps_remaining=payload.swaps_remaining,
        status=payload.status,
    )
    next_session = apply_swap_or_409(
        session,
        puzzle.solution,
        payload.from_cell.to_coord(),
        payload.to_cell.to_coord(),
    )

    logger.info(
        "swap_applied",
        puzzle_id=puzzle_id,
        swaps_remaining=next_session.swaps_remaining,
        status=next_session.status.value,
    )
    return _session_snapshot(next_session, puzzle)


__all__ = ["router"]
