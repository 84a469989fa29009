from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from waffle.api.schemas.common import CoordRef, normalize_letters
from waffle.game.grid import CellStatus, Grid, cell_index_from_row_col, is_valid_cell
from waffle.game.session import SessionStatus


class CellSnapshot(BaseModel):
    index: int = Field(ge=0, le=24)
    row: int = Field(ge=0, le=4)
    col: int = Field(ge=0, le=4)
    char: str
    status: CellStatus

    @model_validator(mode="after")
    def validate_coordinates_and_gap(self) -> "CellSnapshot":
        if cell_index_from_row_col(self.row, self.col) != self.index:
            raise ValueError("index does not match row/col")

        gap = not is_valid_cell(self.row, self.col)
        if gap != (self.status is CellStatus.GAP):
            raise ValueError("gap status must match gap position")
        return self

    @classmethod
    def from_grid(cls, grid: Grid) -> list["CellSnapshot"]:
        return [
            cls(
                index=cell_index_from_row_col(row, col),
                row=row,
                col=col,
                char=cell.char,
                status=cell.status,
            )
            for row, cells in enumerate(grid.rows)
            for col, cell in enumerate(cells)
        ]


class SessionSnapshot(BaseModel):
    puzzle_id: int = Field(ge=1)
    status: SessionStatus
    swaps_remaining: int = Field(ge=0)
    stars: int | None = Field(default=None, ge=0, le=5)
    cells: list[CellSnapshot] = Field(min_length=25, max_length=25)
    solution: list[str] | None = None

    @model_validator(mode="after")
    def validate_terminal_fields(self) -> "SessionSnapshot":
        finished = self.status is not SessionStatus.PLAYING
        if finished != (self.stars is not None):
            raise ValueError("stars are reported only for finished sessions")
        if finished != (self.solution is not None):
            raise ValueError("solution is revealed only for finished sessions")
        return self


class PuzzleResponse(BaseModel):
    puzzle_id: int = Field(ge=1)
    puzzle_date: date
    next_rollover_at: datetime
    swap_budget: int = Field(gt=0)
    session: SessionSnapshot


class BoardRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    letters: list[list[str]]

    @field_validator("letters", mode="before")
    @classmethod
    def validate_letters(cls, value: object) -> list[list[str]]:
        return normalize_letters(value)


class SwapRequest(BoardRequest):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    swaps_remaining: int = Field(ge=0)
    status: SessionStatus = SessionStatus.PLAYING
    from_cell: CoordRef = Field(alias="from")
    to_cell: CoordRef = Field(alias="to")


class RecolorResponse(BaseModel):
    puzzle_id: int = Field(ge=1)
    won: bool
    cells: list[CellSnapshot] = Field(min_length=25, max_length=25)


__all__ = [
    "BoardRequest",
    "CellSnapshot",
    "PuzzleResponse",
    "RecolorResponse",
    "SessionSnapshot",
    "SwapRequest",
]
