import numpy as np
import pytest

from blockfall.game.board import Board


def test_new_board_is_empty():
    board = Board()
    assert board.grid.shape == (20, 10)
    assert board.is_empty()
    assert not board.is_occupied(0, 0)


@pytest.mark.parametrize("row, col", [(-1, 0), (20, 0), (0, -1), (0, 10)])
def test_out_of_range_queries_fail_loudly(row, col):
    board = Board()
    with pytest.raises(IndexError):
        board.is_occupied(row, col)
    with pytest.raises(IndexError):
        board.cell(row, col)


def test_place_writes_in_range_and_drops_out_of_range():
    board = Board()
    board.place(19, 3, 5)
    assert board.cell(19, 3) == 5
    assert board.is_occupied(19, 3)

    before = board.get_grid()
    board.place(-1, 3, 2)
    board.place(-4, 0, 2)
    board.place(20, 3, 2)
    board.place(0, 10, 2)
    board.place(0, -1, 2)
    np.testing.assert_array_equal(board.grid, before)


@pytest.mark.parametrize("bad_id", [0, 8, -1, 99])
def test_place_rejects_invalid_piece_id(bad_id):
    board = Board()
    with pytest.raises(ValueError):
        board.place(0, 0, bad_id)
    assert board.is_empty()


def test_invalid_dimensions_rejected():
    with pytest.raises(ValueError):
        Board(0, 20)


def test_clear_full_rows_noop_when_nothing_full(fill_row):
    board = Board()
    fill_row(board, 19, skip=(4,))
    before = board.get_grid()
    assert board.clear_full_rows() == 0
    np.testing.assert_array_equal(board.grid, before)


def test_clear_non_contiguous_rows_in_one_pass(fill_row):
    board = Board()
    fill_row(board, 19)
    fill_row(board, 18, skip=(0,), piece_id=2)
    fill_row(board, 17)
    fill_row(board, 16, skip=(9,), piece_id=3)
    fill_row(board, 15)

    assert board.clear_full_rows() == 3

    assert board.grid.shape == (20, 10)
    # Surviving rows keep their order and settle at the bottom
    assert board.cell(19, 0) == 0 and board.cell(19, 1) == 2
    assert board.cell(18, 9) == 0 and board.cell(18, 0) == 3
    assert not board.grid[:18].any()


def test_clear_four_adjacent_rows(fill_row):
    board = Board()
    for row in range(16, 20):
        fill_row(board, row)
    board.place(15, 4, 6)

    assert board.clear_full_rows() == 4
    assert board.cell(19, 4) == 6
    assert int((board.grid != 0).sum()) == 1


def test_clear_returns_count_of_rows_full_before_the_call(fill_row):
    board = Board(width=4, height=6)
    pattern = [False, True, False, True, True, False]
    for row, full in enumerate(pattern):
        fill_row(board, row, skip=() if full else (row % 4,), piece_id=row + 1)
    kept = [board.grid[row].copy() for row, full in enumerate(pattern) if not full]

    assert board.clear_full_rows() == 3
    assert not board.grid[:3].any()
    for offset, row in enumerate(kept):
        np.testing.assert_array_equal(board.grid[3 + offset], row)


def test_copy_is_independent():
    board = Board()
    board.place(10, 5, 1)
    clone = board.copy()
    clone.place(11, 5, 1)
    assert not board.is_occupied(11, 5)
    assert clone.is_occupied(10, 5)


def test_reset_empties_board(fill_row):
    board = Board()
    fill_row(board, 19)
    board.reset()
    assert board.is_empty()


def test_surface_metrics():
    board = Board(width=4, height=5)
    board.place(2, 0, 1)   # column 0: block with two holes below
    board.place(4, 1, 1)
    board.place(3, 1, 1)

    np.testing.assert_array_equal(board.get_column_heights(), [3, 2, 0, 0])
    assert board.get_aggregate_height() == 5
    assert board.get_holes() == 2
    assert board.get_bumpiness() == 1 + 2 + 0
