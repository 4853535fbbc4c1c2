"""Game logic: piece catalog, board, collision checks, and game session."""

from blockfall.game.pieces import PIECE_TYPES, ActivePiece, get_piece, rotation_count
from blockfall.game.board import Board
from blockfall.game.collision import collides, drop_distance, landing_y
from blockfall.game.randomizer import (
    BagPieceSource,
    SequencePieceSource,
    UniformPieceSource,
    make_piece_source,
)
from blockfall.game.session import Action, GameSession

__all__ = [
    "PIECE_TYPES",
    "ActivePiece",
    "get_piece",
    "rotation_count",
    "Board",
    "collides",
    "drop_distance",
    "landing_y",
    "BagPieceSource",
    "SequencePieceSource",
    "UniformPieceSource",
    "make_piece_source",
    "Action",
    "GameSession",
]
