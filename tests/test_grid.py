from __future__ import annotations

import pytest

from waffle.game.generator import FALLBACK_SOLUTION
from waffle.game.grid import (
    GAP_CELL,
    VALID_CELL_COUNT,
    VALID_COORDS,
    Cell,
    CellStatus,
    Direction,
    Grid,
    Solution,
    cell_index_from_row_col,
    is_valid_cell,
    line_coords,
)


def test_board_has_21_letter_cells_and_4_gaps() -> None:
    assert VALID_CELL_COUNT == 21
    assert len(VALID_COORDS) == 21
    gaps = [(row, col) for row in range(5) for col in range(5) if not is_valid_cell(row, col)]
    assert gaps == [(1, 1), (1, 3), (3, 1), (3, 3)]
    assert VALID_COORDS[:6] == ((0, 0), (0, 1), (0, 2), (0, 3), (0, 4), (1, 0))


def test_cell_index_and_bounds() -> None:
    assert cell_index_from_row_col(2, 3) == 13
    assert cell_index_from_row_col(4, 4) == 24

    with pytest.raises(ValueError):
        cell_index_from_row_col(5, 0)
    with pytest.raises(ValueError):
        cell_index_from_row_col(0, -1)


def test_line_coords() -> None:
    assert line_coords(Direction.ACROSS, 2) == [(2, 0), (2, 1), (2, 2), (2, 3), (2, 4)]
    assert line_coords("down", 4) == [(0, 4), (1, 4), (2, 4), (3, 4), (4, 4)]

    with pytest.raises(ValueError):
        line_coords(Direction.DOWN, 1)


def test_solution_from_words_lays_out_intersections() -> None:
    assert FALLBACK_SOLUTION.rows == ("STARE", "C G A", "ERROR", "N E T", "TEETH")
    assert FALLBACK_SOLUTION.words_across == ("STARE", "ERROR", "TEETH")
    assert FALLBACK_SOLUTION.words_down == ("SCENT", "AGREE", "EARTH")
    assert len(FALLBACK_SOLUTION.letters()) == 21


@pytest.mark.parametrize(
    "rows",
    [
        ("STARE", "CXGYA", "ERROR", "N E T", "TEETH"),
        ("stare", "C G A", "ERROR", "N E T", "TEETH"),
        ("STARE", "C G A", "ERR0R", "N E T", "TEETH"),
        ("STARE", "C G A", "ERROR", "N E T"),
    ],
)
def test_solution_rejects_malformed_rows(rows: tuple[str, ...]) -> None:
    with pytest.raises(ValueError):
        Solution(rows=rows)


def test_solution_accepts_non_latin_letters() -> None:
    solution = Solution(rows=("АБВГД", "Е Ж З", "ИЙКЛМ", "Н О П", "РСТУФ"))
    assert solution.words_down[0] == "АЕИНР"


def test_grid_from_letters_uppercases_and_fills_gaps() -> None:
    grid = Grid.from_letters(["stare", "c g a", "error", "n e t", "teeth"])

    assert grid.char_at(0, 0) == "S"
    assert grid.cell(1, 1) == GAP_CELL
    assert grid.cell(0, 0).status is CellStatus.WRONG
    assert grid.letters() == FALLBACK_SOLUTION.letters()


def test_grid_rejects_letters_in_gaps_and_empty_cells() -> None:
    rows = [list(row) for row in FALLBACK_SOLUTION.to_grid().rows]
    rows[1][1] = Cell(char="X", status=CellStatus.WRONG)
    with pytest.raises(ValueError):
        Grid(rows=tuple(tuple(row) for row in rows))

    rows = [list(row) for row in FALLBACK_SOLUTION.to_grid().rows]
    rows[0][0] = Cell(char="", status=CellStatus.WRONG)
    with pytest.raises(ValueError):
        Grid(rows=tuple(tuple(row) for row in rows))


def test_with_swapped_moves_letters_and_keeps_slot_statuses() -> None:
    grid = FALLBACK_SOLUTION.to_grid().with_statuses({(0, 1): CellStatus.PRESENT})
    swapped = grid.with_swapped((0, 1), (4, 4))

    assert swapped.char_at(0, 1) == "H"
    assert swapped.char_at(4, 4) == "T"
    assert swapped.cell(0, 1).status is CellStatus.PRESENT
    assert swapped.cell(4, 4).status is CellStatus.CORRECT
    assert grid.char_at(0, 1) == "T"

    with pytest.raises(ValueError):
        grid.with_swapped((1, 1), (0, 0))
    with pytest.raises(ValueError):
        grid.with_swapped((0, 0), (0, 5))


def test_to_letters_uses_empty_strings_for_gaps() -> None:
    letters = FALLBACK_SOLUTION.to_grid().to_letters()
    assert letters[1] == ["C", "", "G", "", "A"]


@pytest.mark.parametrize(
    ("across", "down"),
    [
        (("STARE", "ERROR", "TEETH"), ("SCENT", "AGREE", "EARTS")),
        (("STARE", "ERROR", "TEETH"), ("AGREE", "SCENT", "EARTH")),
        (("SCENT", "AGREE", "EARTH"), ("SCENT", "AGREE", "EARTH")),
    ],
)
def test_solution_from_words_rejects_mismatched_crossings(across: tuple[str, ...], down: tuple[str, ...]) -> None:
    with pytest.raises(ValueError, match="crossing"):
        Solution.from_words(across, down)


def test_solution_from_words_rejects_short_words() -> None:
    with pytest.raises(ValueError):
        Solution.from_words(("STARE", "ERROR", "TEETH"), ("SCENT", "AGRE", "EARTH"))
