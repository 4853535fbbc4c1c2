"""
Placement checks for a piece shape against the board.

The top of the board is open: cells above row 0 never collide with board
contents, but they still have to stay between the side walls. The side walls
and the floor are hard.
"""

from __future__ import annotations

from typing import Iterator

import numpy as np

from blockfall.game.board import Board


def piece_cells(piece: dict, rotation: int, x: int, y: int) -> Iterator[tuple[int, int]]:
    """Yield the board (row, col) of every filled cell of a piece.

    Rows may be negative for cells above the board.
    """
    shape = piece["rotations"][rotation]
    for r, c in np.argwhere(shape != 0):
        yield y + int(r), x + int(c)


def collides(board: Board, piece: dict, rotation: int, x: int, y: int) -> bool:
    """Return True if the piece cannot legally occupy (x, y) at ``rotation``.

    Args:
        board: Board to test against. Not modified.
        piece: Piece dict from the catalog.
        rotation: Rotation state index.
        x: Column offset of the piece's top-left corner.
        y: Row offset of the piece's top-left corner.
    """
    for board_row, board_col in piece_cells(piece, rotation, x, y):
        if board_col < 0 or board_col >= board.width:
            return True
        if board_row >= board.height:
            return True
        if board_row >= 0 and board.grid[board_row, board_col] != 0:
            return True
    return False


def drop_distance(board: Board, piece: dict, rotation: int, x: int, y: int) -> int:
    """Number of rows the piece can fall from (x, y) before it would collide."""
    rows = 0
    while not collides(board, piece, rotation, x, y + rows + 1):
        rows += 1
    return rows


def landing_y(board: Board, piece: dict, rotation: int, x: int, y: int) -> int:
    """Row offset where the piece comes to rest when dropped straight down."""
    return y + drop_distance(board, piece, rotation, x, y)
