"""Per-cell feedback for a candidate board.

Duplicate letters are resolved with remaining-need counters: each word line
counts the solution letters it is still missing, and cells claim those needs in
row-major order. A line that needs one ``A`` therefore colors at most one
misplaced ``A`` yellow. Intersection cells are checked against their row and
their column independently.
"""

from __future__ import annotations

from collections import Counter

from waffle.game.grid import (
    VALID_COORDS,
    WORD_LINES,
    CellStatus,
    Coord,
    Direction,
    Grid,
    Solution,
    line_coords,
)


def _remaining_need(grid: Grid, solution: Solution, coords: list[Coord]) -> Counter[str]:
    need: Counter[str] = Counter()
    for row, col in coords:
        expected = solution.letter_at(row, col)
        if grid.char_at(row, col) != expected:
            need[expected] += 1
    return need


def recolor(grid: Grid, solution: Solution) -> Grid:
    statuses: dict[Coord, CellStatus] = {
        (row, col): (
            CellStatus.CORRECT if grid.char_at(row, col) == solution.letter_at(row, col) else CellStatus.WRONG
        )
        for row, col in VALID_COORDS
    }

    row_needs = {row: _remaining_need(grid, solution, line_coords(Direction.ACROSS, row)) for row in WORD_LINES}
    col_needs = {col: _remaining_need(grid, solution, line_coords(Direction.DOWN, col)) for col in WORD_LINES}

    for row, col in VALID_COORDS:
        if statuses[(row, col)] is CellStatus.CORRECT:
            continue

        char = grid.char_at(row, col)
        row_need = row_needs.get(row)
        if row_need is not None and row_need[char] > 0:
            statuses[(row, col)] = CellStatus.PRESENT
            row_need[char] -= 1

        col_need = col_needs.get(col)
        if col_need is not None and col_need[char] > 0:
            statuses[(row, col)] = CellStatus.PRESENT
            col_need[char] -= 1

    return grid.with_statuses(statuses)


def is_won(grid: Grid) -> bool:
    return all(grid.cell(row, col).status is CellStatus.CORRECT for row, col in VALID_COORDS)


def count_correct(grid: Grid, solution: Solution) -> int:
    return sum(1 for row, col in VALID_COORDS if grid.char_at(row, col) == solution.letter_at(row, col))


__all__ = ["count_correct", "is_won", "recolor"]
