from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from waffle.game.grid import GRID_SIDE_LENGTH, Coord, is_valid_cell


class CoordRef(BaseModel):
    model_config = ConfigDict(extra="forbid")

    row: int = Field(ge=0, le=4)
    col: int = Field(ge=0, le=4)

    def to_coord(self) -> Coord:
        return (self.row, self.col)


def normalize_letters(value: object) -> list[list[str]]:
    """Validate a 5x5 letter matrix; gaps must be blank, letters single characters."""
    if not isinstance(value, list) or len(value) != GRID_SIDE_LENGTH:
        raise ValueError("letters must be a list of 5 rows")

    normalized: list[list[str]] = []
    for row_index, row in enumerate(value):
        if not isinstance(row, list) or len(row) != GRID_SIDE_LENGTH:
            raise ValueError(f"row {row_index} must contain 5 entries")

        normalized_row: list[str] = []
        for col_index, raw_char in enumerate(row):
            if not isinstance(raw_char, str):
                raise ValueError(f"cell ({row_index}, {col_index}) must be a string")
            char = raw_char.strip().upper()
            if not is_valid_cell(row_index, col_index):
                if char:
                    raise ValueError(f"gap cell ({row_index}, {col_index}) must be empty")
            elif len(char) != 1 or not char.isalpha():
                raise ValueError(f"cell ({row_index}, {col_index}) must be a single letter")
            normalized_row.append(char)
        normalized.append(normalized_row)

    return normalized


__all__ = ["CoordRef", "normalize_letters"]
