"""
Game session: command handling, locking, scoring, levels and gravity.

This module ties the Board, the piece catalog and the collision checks into
a playable game. A session owns its board and pieces; renderers and score
displays read from it, input layers call its command methods, and a timing
source feeds it elapsed time through ``tick``/``update``.

Lifecycle: a new session is paused with a piece already spawned. ``toggle_pause``
starts it. Once the game is over only ``reset`` (directly or via
``toggle_pause``) brings it back.
"""

from __future__ import annotations

import enum
from typing import Any, Callable

from blockfall.game.board import Board
from blockfall.game.collision import collides, landing_y, piece_cells
from blockfall.game.pieces import ActivePiece
from blockfall.game.randomizer import PieceSource, make_piece_source


class Action(enum.IntEnum):
    """Discrete commands an input layer can send to a session."""
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    PAUSE = 5


# Points per resolution pass, indexed by rows cleared (0-4), times the level
SCORE_TABLE: tuple[int, ...] = (0, 40, 100, 300, 1200)

LINES_PER_LEVEL = 10
BASE_DROP_INTERVAL_MS = 1000
DROP_INTERVAL_STEP_MS = 100
MIN_DROP_INTERVAL_MS = 100


def score_for_lines(lines_cleared: int, level: int) -> int:
    """Points for clearing ``lines_cleared`` rows at ``level``.

    Raises:
        ValueError: If more rows are reported than the table covers.
    """
    if not 0 <= lines_cleared < len(SCORE_TABLE):
        raise ValueError(f"Cannot score {lines_cleared} rows in one clear")
    return SCORE_TABLE[lines_cleared] * level


def level_for_lines(total_lines: int) -> int:
    return total_lines // LINES_PER_LEVEL + 1


def drop_interval_for_level(level: int) -> int:
    """Milliseconds between gravity drops; never below MIN_DROP_INTERVAL_MS."""
    return max(
        MIN_DROP_INTERVAL_MS,
        BASE_DROP_INTERVAL_MS - (level - 1) * DROP_INTERVAL_STEP_MS,
    )


class GameSession:
    """One game: board, active and next piece, score and run state.

    Attributes:
        board: The locked-block grid. Only the session writes to it.
        active: The falling piece.
        next_piece: The queued piece, shown as a preview only.
        score: Current score.
        lines: Total rows cleared since the last reset.
        level: Current level (starts at 1).
        drop_interval_ms: Gravity interval derived from the level.
        paused: True while commands and gravity are suspended.
        game_over: True after a spawn collision, until reset.
    """

    def __init__(
        self,
        board_width: int = 10,
        board_height: int = 20,
        piece_source: PieceSource | None = None,
        on_game_over: Callable[[int], None] | None = None,
    ) -> None:
        """Create a session in the ready state (paused, first piece spawned).

        Args:
            board_width: Board width in columns.
            board_height: Board height in rows.
            piece_source: Supplies piece kinds; defaults to uniform random.
            on_game_over: Called with the final score once per game over.
        """
        self.board = Board(board_width, board_height)
        self.piece_source = piece_source if piece_source is not None else make_piece_source()
        self.on_game_over = on_game_over

        self.score: int = 0
        self.lines: int = 0
        self.level: int = 1
        self.drop_interval_ms: int = BASE_DROP_INTERVAL_MS
        self.paused: bool = True
        self.game_over: bool = False
        self.active: ActivePiece = self._new_piece()
        self.next_piece: ActivePiece = self._new_piece()
        self.pieces_locked: int = 0

        self._elapsed_ms: float = 0.0
        self._last_timestamp: float | None = None

    @classmethod
    def from_config(
        cls,
        config: dict[str, Any],
        seed: int | None = None,
        on_game_over: Callable[[int], None] | None = None,
    ) -> "GameSession":
        """Build a session from a config dict (see config/game.yaml).

        An explicit ``seed`` overrides the config's ``seed`` key.
        """
        if seed is None:
            seed = config.get("seed")
        source = make_piece_source(config.get("randomizer", "uniform"), seed)
        return cls(
            board_width=config.get("board_width", 10),
            board_height=config.get("board_height", 20),
            piece_source=source,
            on_game_over=on_game_over,
        )

    # -- lifecycle ---------------------------------------------------------

    def reset(self) -> None:
        """Return to the ready state: empty board, zeroed stats, fresh pieces."""
        self.board.reset()
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval_ms = BASE_DROP_INTERVAL_MS
        self.paused = True
        self.game_over = False
        self.active = self._new_piece()
        self.next_piece = self._new_piece()
        self.pieces_locked = 0
        self._elapsed_ms = 0.0
        self._last_timestamp = None

    def toggle_pause(self) -> None:
        """Pause or resume. After a game over this starts a fresh game."""
        if self.game_over:
            self.reset()
        self.paused = not self.paused

    @property
    def running(self) -> bool:
        return not (self.paused or self.game_over)

    # -- commands ----------------------------------------------------------

    def move_left(self) -> bool:
        """Shift the active piece one column left. Returns True if it moved."""
        return self._try_replace(self.active.moved(dx=-1))

    def move_right(self) -> bool:
        """Shift the active piece one column right. Returns True if it moved."""
        return self._try_replace(self.active.moved(dx=1))

    def rotate(self) -> bool:
        """Advance to the next rotation state.

        There are no wall kicks: if the rotated shape collides where it
        stands, the rotation is rejected and the piece is left unchanged.
        """
        return self._try_replace(self.active.rotated())

    def soft_drop(self) -> bool:
        """Move the piece down one row, locking it if it cannot move.

        Returns:
            True if the piece was locked by this call.
        """
        if not self.running:
            return False
        if self._try_replace(self.active.moved(dy=1)):
            return False
        self._lock_and_spawn()
        return True

    def hard_drop(self) -> bool:
        """Drop the piece straight to its resting row and lock it.

        Returns:
            True if a piece was locked.
        """
        if not self.running:
            return False
        ghost_x, ghost_y = self.ghost_position()
        self.active = ActivePiece(self.active.kind, self.active.rotation, ghost_x, ghost_y)
        self._lock_and_spawn()
        return True

    def dispatch(self, action: Action | int) -> bool:
        """Run the command for an Action value.

        Returns whatever the command returns (False for PAUSE).
        """
        action = Action(action)
        if action == Action.LEFT:
            return self.move_left()
        if action == Action.RIGHT:
            return self.move_right()
        if action == Action.ROTATE:
            return self.rotate()
        if action == Action.SOFT_DROP:
            return self.soft_drop()
        if action == Action.HARD_DROP:
            return self.hard_drop()
        self.toggle_pause()
        return False

    # -- gravity -----------------------------------------------------------

    def tick(self, elapsed_ms: float) -> bool:
        """Advance the gravity clock by ``elapsed_ms``.

        Once the accumulated time exceeds the drop interval, exactly one soft
        drop runs and the accumulator restarts at zero, however many
        intervals the tick spanned. Time does not accumulate while paused.

        Returns:
            True if a gravity drop was performed.
        """
        if not self.running:
            return False
        self._elapsed_ms += elapsed_ms
        if self._elapsed_ms <= self.drop_interval_ms:
            return False
        self._elapsed_ms = 0.0
        self.soft_drop()
        return True

    def update(self, timestamp_ms: float) -> bool:
        """Feed a monotonic timestamp; the first call only sets the baseline."""
        if self._last_timestamp is None:
            self._last_timestamp = timestamp_ms
            return False
        elapsed = timestamp_ms - self._last_timestamp
        self._last_timestamp = timestamp_ms
        return self.tick(elapsed)

    # -- queries -----------------------------------------------------------

    def ghost_position(self) -> tuple[int, int]:
        """Where the active piece would come to rest if hard-dropped now."""
        piece = self.active
        return piece.x, landing_y(self.board, piece.kind, piece.rotation, piece.x, piece.y)

    def spawn_position(self) -> tuple[int, int]:
        return self.board.width // 2 - 1, 0

    def get_state(self) -> dict[str, Any]:
        """Return a snapshot of the observable state for renderers and displays.

        Returns:
            Dict with keys board_grid (copy), current_piece, current_x,
            current_y, current_rotation, next_piece, ghost_y, score, lines,
            level, drop_interval_ms, paused and game_over.
        """
        _, ghost_y = self.ghost_position()
        return {
            "board_grid": self.board.get_grid(),
            "current_piece": self.active.kind,
            "current_x": self.active.x,
            "current_y": self.active.y,
            "current_rotation": self.active.rotation,
            "next_piece": self.next_piece.kind,
            "ghost_y": ghost_y,
            "score": self.score,
            "lines": self.lines,
            "level": self.level,
            "drop_interval_ms": self.drop_interval_ms,
            "paused": self.paused,
            "game_over": self.game_over,
        }

    # -- internals ---------------------------------------------------------

    def _new_piece(self) -> ActivePiece:
        x, y = self.spawn_position()
        return ActivePiece(self.piece_source.next_kind(), 0, x, y)

    def _collides(self, piece: ActivePiece) -> bool:
        return collides(self.board, piece.kind, piece.rotation, piece.x, piece.y)

    def _try_replace(self, candidate: ActivePiece) -> bool:
        """Adopt ``candidate`` as the active piece if the session is running
        and it fits; otherwise leave the active piece untouched."""
        if not self.running or self._collides(candidate):
            return False
        self.active = candidate
        return True

    def _lock_and_spawn(self) -> None:
        piece = self.active
        for row, col in piece_cells(piece.kind, piece.rotation, piece.x, piece.y):
            self.board.place(row, col, piece.piece_id)
        self.pieces_locked += 1

        cleared = self.board.clear_full_rows()
        if cleared:
            self._apply_clear(cleared)

        self.active = ActivePiece(self.next_piece.kind, 0, *self.spawn_position())
        self.next_piece = self._new_piece()

        if self._collides(self.active):
            self.game_over = True
            self.paused = True
            if self.on_game_over is not None:
                self.on_game_over(self.score)

    def _apply_clear(self, cleared: int) -> None:
        self.score += score_for_lines(cleared, self.level)
        self.lines += cleared
        self.level = level_for_lines(self.lines)
        self.drop_interval_ms = drop_interval_for_level(self.level)
