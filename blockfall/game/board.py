"""
Board logic for a 20x10 falling-block grid.

The board is a 2D numpy array (height x width) of int8 values:
  - 0 = empty cell
  - 1-7 = piece id of the piece that locked there (used for coloring)

Row 0 is the top of the board. Pieces may hang above row 0 while falling,
but nothing is ever stored there: writes above the top are dropped.
"""

from __future__ import annotations

import numpy as np

from blockfall.game.pieces import PIECE_IDS

EMPTY = 0


class Board:
    """Occupancy grid with row clearing and surface metrics.

    Attributes:
        width: Number of columns (default 10).
        height: Number of rows (default 20).
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(self, width: int = 10, height: int = 20) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Board dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _check(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise IndexError(
                f"Cell ({row}, {col}) outside {self.height}x{self.width} board"
            )

    def cell(self, row: int, col: int) -> int:
        """Return the piece id stored at (row, col), 0 if empty.

        Raises:
            IndexError: If the cell is outside the board. Negative indices are
                rejected rather than wrapped.
        """
        self._check(row, col)
        return int(self.grid[row, col])

    def is_occupied(self, row: int, col: int) -> bool:
        """Return True if (row, col) holds a locked block.

        Raises:
            IndexError: If the cell is outside the board.
        """
        return self.cell(row, col) != EMPTY

    def place(self, row: int, col: int, piece_id: int) -> None:
        """Write a piece id into a cell.

        Coordinates outside the board (including rows above the top) are
        silently ignored.

        Raises:
            ValueError: If ``piece_id`` is not a catalog piece id.
        """
        if piece_id not in PIECE_IDS:
            raise ValueError(f"Invalid piece id: {piece_id!r}")
        if self.in_bounds(row, col):
            self.grid[row, col] = piece_id

    def clear_full_rows(self) -> int:
        """Remove every full row at once and pad the top with empty rows.

        Rows are partitioned into kept and cleared in one pass, so a cleared
        row never shifts another full row out of the scan.

        Returns:
            The number of rows removed (0 if none).
        """
        full = np.all(self.grid != EMPTY, axis=1)
        cleared = int(full.sum())
        if cleared == 0:
            return 0

        remaining = self.grid[~full]
        empty_rows = np.zeros((cleared, self.width), dtype=np.int8)
        self.grid = np.vstack([empty_rows, remaining])
        return cleared

    def get_grid(self) -> np.ndarray:
        """Return a copy of the board grid."""
        return self.grid.copy()

    def copy(self) -> "Board":
        """Return an independent board with the same contents."""
        clone = Board(self.width, self.height)
        clone.grid = self.grid.copy()
        return clone

    def is_empty(self) -> bool:
        return not np.any(self.grid != EMPTY)

    def reset(self) -> None:
        """Clear the entire board, setting all cells to 0."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    # -- surface metrics ---------------------------------------------------

    def get_column_heights(self) -> np.ndarray:
        """Get the height of every column.

        A column's height is measured from the bottom of the board up to the
        topmost filled cell. An empty column has height 0.
        """
        filled = self.grid != EMPTY
        has_block = filled.any(axis=0)
        first_block = np.argmax(filled, axis=0)
        return np.where(has_block, self.height - first_block, 0)

    def get_aggregate_height(self) -> int:
        return int(self.get_column_heights().sum())

    def get_holes(self) -> int:
        """Count empty cells that have a filled cell somewhere above them."""
        filled = self.grid != EMPTY
        block_above = np.maximum.accumulate(filled, axis=0)
        return int((block_above & ~filled).sum())

    def get_bumpiness(self) -> int:
        """Sum of absolute height differences between adjacent columns."""
        heights = self.get_column_heights()
        return int(np.abs(np.diff(heights)).sum())
