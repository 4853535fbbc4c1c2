"""
Tetromino catalog and the active-piece value type.

Each piece kind is a dict with an integer id (the value stored in board
cells), a one-letter name, an RGB color and 4 rotation states. Rotation
states are square 0/1 matrices generated by rotating the spawn shape
clockwise inside its bounding box, so index 1 is one clockwise turn from
spawn, index 2 is 180 degrees and index 3 is counter-clockwise.

Coordinate convention:
  - On the board, row 0 is the top and row increases downward.
  - Column 0 is the left edge and column increases rightward.
  - A piece position (x, y) is the board cell of the matrix's top-left corner.

The rotation arrays are shared by every piece of a kind and are read-only.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np

# =============================================================================
# Piece Colors
# =============================================================================

COLOR_CYAN   = (0, 255, 255)    # I
COLOR_YELLOW = (255, 255, 0)    # O
COLOR_PURPLE = (128, 0, 128)    # T
COLOR_GREEN  = (0, 255, 0)      # S
COLOR_RED    = (255, 0, 0)      # Z
COLOR_BLUE   = (0, 0, 255)      # J
COLOR_ORANGE = (255, 165, 0)    # L

NUM_ROTATIONS = 4


def _rotations(spawn: list[list[int]]) -> list[np.ndarray]:
    """Build the 4 clockwise rotation states of a spawn matrix."""
    base = np.array(spawn, dtype=np.int8)
    states = []
    for k in range(NUM_ROTATIONS):
        # np.rot90 with negative k turns clockwise
        state = np.ascontiguousarray(np.rot90(base, -k))
        state.setflags(write=False)
        states.append(state)
    return states


def _piece(piece_id: int, name: str, color: tuple[int, int, int], spawn: list[list[int]]) -> dict:
    return {
        "id": piece_id,
        "name": name,
        "color": color,
        "rotations": _rotations(spawn),
    }


# =============================================================================
# Tetromino Definitions (spawn orientation)
# =============================================================================

I_PIECE = _piece(1, "I", COLOR_CYAN, [
    [0, 0, 0, 0],
    [1, 1, 1, 1],
    [0, 0, 0, 0],
    [0, 0, 0, 0],
])

# The O piece is invariant under rotation; it still carries 4 states so the
# rotation index cycles like every other kind.
O_PIECE = _piece(2, "O", COLOR_YELLOW, [
    [1, 1],
    [1, 1],
])

T_PIECE = _piece(3, "T", COLOR_PURPLE, [
    [0, 1, 0],
    [1, 1, 1],
    [0, 0, 0],
])

S_PIECE = _piece(4, "S", COLOR_GREEN, [
    [0, 1, 1],
    [1, 1, 0],
    [0, 0, 0],
])

Z_PIECE = _piece(5, "Z", COLOR_RED, [
    [1, 1, 0],
    [0, 1, 1],
    [0, 0, 0],
])

J_PIECE = _piece(6, "J", COLOR_BLUE, [
    [1, 0, 0],
    [1, 1, 1],
    [0, 0, 0],
])

L_PIECE = _piece(7, "L", COLOR_ORANGE, [
    [0, 0, 1],
    [1, 1, 1],
    [0, 0, 0],
])

# =============================================================================
# Lookup tables
# =============================================================================

PIECE_TYPES: tuple[dict, ...] = (I_PIECE, O_PIECE, T_PIECE, S_PIECE, Z_PIECE, J_PIECE, L_PIECE)

PIECE_IDS: frozenset[int] = frozenset(piece["id"] for piece in PIECE_TYPES)

PIECE_COLORS: dict[int, tuple[int, int, int]] = {
    piece["id"]: piece["color"] for piece in PIECE_TYPES
}

_BY_ID: dict[int, dict] = {piece["id"]: piece for piece in PIECE_TYPES}
_BY_NAME: dict[str, dict] = {piece["name"]: piece for piece in PIECE_TYPES}


def get_piece(kind: int | str | dict) -> dict:
    """Look up a piece kind by id, name or the piece dict itself.

    Args:
        kind: Piece id (1-7), one-letter name ("I", "O", ...), or a piece dict.

    Returns:
        The catalog piece dict.

    Raises:
        KeyError: If the kind is not part of the catalog.
    """
    if isinstance(kind, dict):
        kind = kind["id"]
    if isinstance(kind, str):
        return _BY_NAME[kind.upper()]
    return _BY_ID[int(kind)]


def rotation_count(piece: dict) -> int:
    """Return the number of rotation states defined for a piece."""
    return len(piece["rotations"])


@dataclass(frozen=True)
class ActivePiece:
    """A piece kind placed at a rotation and board offset.

    Used for both the falling piece and the queued next piece. Instances are
    immutable; movement produces a new value via ``moved``/``rotated``.
    """

    kind: dict
    rotation: int = 0
    x: int = 0
    y: int = 0

    @property
    def shape(self) -> np.ndarray:
        return self.kind["rotations"][self.rotation]

    @property
    def piece_id(self) -> int:
        return self.kind["id"]

    @property
    def name(self) -> str:
        return self.kind["name"]

    def moved(self, dx: int = 0, dy: int = 0) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "ActivePiece":
        """Return the piece advanced one rotation state (clockwise, cyclic)."""
        return replace(self, rotation=(self.rotation + 1) % rotation_count(self.kind))
