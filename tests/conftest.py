"""Shared fixtures for blockfall tests."""

from __future__ import annotations

import pytest

from blockfall.game.randomizer import SequencePieceSource
from blockfall.game.session import GameSession


def _make_session(kinds="I", width: int = 10, height: int = 20, start: bool = True, **kwargs) -> GameSession:
    session = GameSession(width, height, piece_source=SequencePieceSource(kinds), **kwargs)
    if start:
        session.toggle_pause()
    return session


def _fill_row(board, row: int, skip: tuple[int, ...] = (), piece_id: int = 1) -> None:
    for col in range(board.width):
        if col not in skip:
            board.place(row, col, piece_id)


@pytest.fixture
def make_session():
    """Factory for sessions fed by a fixed kind sequence, running by default."""
    return _make_session


@pytest.fixture
def fill_row():
    """Fill a board row, leaving the ``skip`` columns empty."""
    return _fill_row
