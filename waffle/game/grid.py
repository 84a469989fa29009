from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

GRID_SIDE_LENGTH = 5
WORD_LINES = (0, 2, 4)
GAP_CHAR = " "

Coord = tuple[int, int]


class CellStatus(str, Enum):
    CORRECT = "correct"
    PRESENT = "present"
    WRONG = "wrong"
    GAP = "gap"


class Direction(str, Enum):
    ACROSS = "across"
    DOWN = "down"


def is_on_grid(row: int, col: int) -> bool:
    return 0 <= row < GRID_SIDE_LENGTH and 0 <= col < GRID_SIDE_LENGTH


def is_valid_cell(row: int, col: int) -> bool:
    # Gaps sit where both the row and the column are odd.
    return row % 2 == 0 or col % 2 == 0


VALID_COORDS: tuple[Coord, ...] = tuple(
    (row, col)
    for row in range(GRID_SIDE_LENGTH)
    for col in range(GRID_SIDE_LENGTH)
    if is_valid_cell(row, col)
)
VALID_CELL_COUNT = len(VALID_COORDS)


def cell_index_from_row_col(row: int, col: int) -> int:
    if not (0 <= row < GRID_SIDE_LENGTH):
        raise ValueError("row must be between 0 and 4")
    if not (0 <= col < GRID_SIDE_LENGTH):
        raise ValueError("col must be between 0 and 4")
    return (row * GRID_SIDE_LENGTH) + col


def line_coords(direction: Direction | str, index: int) -> list[Coord]:
    if index not in WORD_LINES:
        raise ValueError("index must be one of 0, 2, 4")

    if direction == Direction.ACROSS:
        return [(index, col) for col in range(GRID_SIDE_LENGTH)]
    if direction == Direction.DOWN:
        return [(row, index) for row in range(GRID_SIDE_LENGTH)]
    raise ValueError("direction must be either 'across' or 'down'")


@dataclass(frozen=True)
class Cell:
    char: str
    status: CellStatus

    @property
    def is_gap(self) -> bool:
        return self.status is CellStatus.GAP


GAP_CELL = Cell(char="", status=CellStatus.GAP)


@dataclass(frozen=True)
class Grid:
    """Immutable 5x5 board of cells; transforms return new grids."""

    rows: tuple[tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        if len(self.rows) != GRID_SIDE_LENGTH or any(len(row) != GRID_SIDE_LENGTH for row in self.rows):
            raise ValueError("grid must be 5x5")

        for row_index, row in enumerate(self.rows):
            for col_index, cell in enumerate(row):
                if not is_valid_cell(row_index, col_index):
                    if cell != GAP_CELL:
                        raise ValueError(f"cell ({row_index}, {col_index}) must be a gap")
                    continue
                if cell.is_gap or len(cell.char) != 1:
                    raise ValueError(f"cell ({row_index}, {col_index}) must hold a single letter")

    @classmethod
    def from_letters(
        cls,
        letters: Sequence[Sequence[str]],
        status: CellStatus = CellStatus.WRONG,
    ) -> Grid:
        """Build a grid from a 5x5 character matrix; gap positions are ignored."""
        if len(letters) != GRID_SIDE_LENGTH:
            raise ValueError("grid must be 5x5")
        return cls(
            rows=tuple(
                tuple(
                    Cell(char=letters[row][col].upper(), status=status)
                    if is_valid_cell(row, col)
                    else GAP_CELL
                    for col in range(GRID_SIDE_LENGTH)
                )
                for row in range(GRID_SIDE_LENGTH)
            )
        )

    @classmethod
    def from_placements(
        cls,
        placements: Mapping[Coord, str],
        status: CellStatus = CellStatus.WRONG,
    ) -> Grid:
        missing = [coord for coord in VALID_COORDS if coord not in placements]
        if missing:
            raise ValueError(f"placements missing valid cells: {missing}")
        return cls(
            rows=tuple(
                tuple(
                    Cell(char=placements[(row, col)], status=status)
                    if is_valid_cell(row, col)
                    else GAP_CELL
                    for col in range(GRID_SIDE_LENGTH)
                )
                for row in range(GRID_SIDE_LENGTH)
            )
        )

    def cell(self, row: int, col: int) -> Cell:
        return self.rows[row][col]

    def char_at(self, row: int, col: int) -> str:
        return self.rows[row][col].char

    def letters(self) -> list[str]:
        return [self.char_at(row, col) for row, col in VALID_COORDS]

    def with_statuses(self, statuses: Mapping[Coord, CellStatus]) -> Grid:
        return Grid(
            rows=tuple(
                tuple(
                    Cell(char=cell.char, status=statuses.get((row, col), cell.status))
                    if not cell.is_gap
                    else cell
                    for col, cell in enumerate(cells)
                )
                for row, cells in enumerate(self.rows)
            )
        )

    def with_swapped(self, first: Coord, second: Coord) -> Grid:
        """Swap the letters of two valid cells; statuses travel with the slots."""
        for row, col in (first, second):
            if not is_on_grid(row, col) or not is_valid_cell(row, col):
                raise ValueError(f"({row}, {col}) is not a valid cell")

        chars = {coord: self.char_at(*coord) for coord in VALID_COORDS}
        chars[first], chars[second] = chars[second], chars[first]
        statuses = {coord: self.cell(*coord).status for coord in VALID_COORDS}
        return Grid.from_placements(chars).with_statuses(statuses)

    def to_letters(self) -> list[list[str]]:
        return [[cell.char for cell in row] for row in self.rows]


@dataclass(frozen=True)
class Solution:
    """Solved board: five strings of five characters, blanks at the gaps."""

    rows: tuple[str, ...]

    def __post_init__(self) -> None:
        if len(self.rows) != GRID_SIDE_LENGTH or any(len(row) != GRID_SIDE_LENGTH for row in self.rows):
            raise ValueError("solution must be 5x5")

        for row_index, row in enumerate(self.rows):
            for col_index, char in enumerate(row):
                if not is_valid_cell(row_index, col_index):
                    if char != GAP_CHAR:
                        raise ValueError(f"solution gap ({row_index}, {col_index}) must be blank")
                elif not char.isalpha() or char != char.upper():
                    raise ValueError(f"solution cell ({row_index}, {col_index}) must be an uppercase letter")

    @classmethod
    def from_words(cls, across: Sequence[str], down: Sequence[str]) -> Solution:
        """Lay out three across words on rows 0/2/4 and three down words on cols 0/2/4."""
        h1, h2, h3 = across
        v1, v2, v3 = down
        if any(len(word) != GRID_SIDE_LENGTH for word in (*across, *down)):
            raise ValueError("solution words must be 5 letters long")
        for across_index, across_word in enumerate(across):
            for down_index, down_word in enumerate(down):
                if across_word[down_index * 2] != down_word[across_index * 2]:
                    raise ValueError(
                        f"across word {across_word!r} and down word {down_word!r} disagree at their crossing"
                    )
        return cls(
            rows=(
                h1,
                f"{v1[1]}{GAP_CHAR}{v2[1]}{GAP_CHAR}{v3[1]}",
                h2,
                f"{v1[3]}{GAP_CHAR}{v2[3]}{GAP_CHAR}{v3[3]}",
                h3,
            )
        )

    def letter_at(self, row: int, col: int) -> str:
        return self.rows[row][col]

    def letters(self) -> list[str]:
        return [self.letter_at(row, col) for row, col in VALID_COORDS]

    @property
    def words_across(self) -> tuple[str, ...]:
        return tuple(self.rows[row] for row in WORD_LINES)

    @property
    def words_down(self) -> tuple[str, ...]:
        return tuple("".join(self.rows[row][col] for row in range(GRID_SIDE_LENGTH)) for col in WORD_LINES)

    def to_grid(self, status: CellStatus = CellStatus.CORRECT) -> Grid:
        return Grid.from_letters(self.rows, status=status)


__all__ = [
    "Cell",
    "CellStatus",
    "Coord",
    "Direction",
    "GAP_CELL",
    "GAP_CHAR",
    "GRID_SIDE_LENGTH",
    "Grid",
    "Solution",
    "VALID_CELL_COUNT",
    "VALID_COORDS",
    "WORD_LINES",
    "cell_index_from_row_col",
    "is_on_grid",
    "is_valid_cell",
    "line_coords",
]
