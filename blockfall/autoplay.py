"""
Heuristic autoplayer for headless games.

Instead of choosing individual key presses, the player decides WHERE the
active piece should land: (rotation, column). Every reachable placement is
simulated on a copy of the board (hard drop + lock + row clear) and the
resulting afterstate is scored with a weighted sum of board metrics. The
winner is then turned back into ordinary session commands, so the game is
only ever driven through its public command interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from blockfall.game.board import Board
from blockfall.game.collision import collides, landing_y, piece_cells
from blockfall.game.pieces import rotation_count
from blockfall.game.session import Action, GameSession


@dataclass
class Weights:
    """Afterstate evaluation weights; holes, height and bumpiness are penalties."""
    lines: float = 0.76
    holes: float = 0.36
    height: float = 0.51
    bumpiness: float = 0.18

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "Weights":
        return cls(
            lines=config.get("line_weight", cls.lines),
            holes=config.get("holes_weight", cls.holes),
            height=config.get("height_weight", cls.height),
            bumpiness=config.get("bumpiness_weight", cls.bumpiness),
        )


@dataclass
class Placement:
    rotation: int
    x: int
    y: int
    lines_cleared: int
    value: float


def _reachable(session: GameSession, rotation: int, x: int) -> bool:
    """Check the rotate-in-place then slide path from the active position."""
    piece = session.active
    board = session.board
    count = rotation_count(piece.kind)
    r = piece.rotation
    while r != rotation:
        r = (r + 1) % count
        if collides(board, piece.kind, r, piece.x, piece.y):
            return False
    step = 1 if x > piece.x else -1
    for col in range(piece.x + step, x + step, step):
        if collides(board, piece.kind, rotation, col, piece.y):
            return False
    return not collides(board, piece.kind, rotation, x, piece.y)


def simulate_placement(board: Board, piece: dict, rotation: int, x: int, y: int) -> tuple[Board, int]:
    """Lock a piece onto a copy of the board and clear rows.

    Returns:
        (afterstate board, rows cleared)
    """
    after = board.copy()
    for row, col in piece_cells(piece, rotation, x, y):
        after.place(row, col, piece["id"])
    lines = after.clear_full_rows()
    return after, lines


def evaluate_placements(session: GameSession, weights: Weights | None = None) -> list[Placement]:
    """Enumerate and score every reachable landing spot of the active piece."""
    weights = weights or Weights()
    piece = session.active
    board = session.board
    results: list[Placement] = []
    seen_shapes: set[bytes] = set()

    for rotation in range(rotation_count(piece.kind)):
        shape = piece.kind["rotations"][rotation]
        # Skip rotation states identical to one already tried (O piece)
        key = shape.tobytes()
        if key in seen_shapes:
            continue
        seen_shapes.add(key)

        for x in range(-shape.shape[1] + 1, board.width):
            if not _reachable(session, rotation, x):
                continue
            y = landing_y(board, piece.kind, rotation, x, piece.y)
            after, lines = simulate_placement(board, piece.kind, rotation, x, y)
            value = (
                weights.lines * lines
                - weights.holes * after.get_holes()
                - weights.height * after.get_aggregate_height()
                - weights.bumpiness * after.get_bumpiness()
            )
            results.append(Placement(rotation, x, y, lines, value))

    return results


class HeuristicPlayer:
    """Picks the best-valued placement and plays it through session commands."""

    def __init__(self, weights: Weights | None = None) -> None:
        self.weights = weights or Weights()

    def plan(self, session: GameSession) -> list[Action]:
        """Return the command sequence for the best placement.

        Falls back to a plain hard drop when nothing is reachable.
        """
        placements = evaluate_placements(session, self.weights)
        if not placements:
            return [Action.HARD_DROP]
        best = max(placements, key=lambda p: p.value)

        piece = session.active
        turns = (best.rotation - piece.rotation) % rotation_count(piece.kind)
        shift = best.x - piece.x
        moves = [Action.RIGHT if shift > 0 else Action.LEFT] * abs(shift)
        return [Action.ROTATE] * turns + moves + [Action.HARD_DROP]

    def play_piece(self, session: GameSession) -> bool:
        """Play one piece. Returns True if a piece was locked."""
        locked = False
        for action in self.plan(session):
            locked = session.dispatch(action)
        return locked
