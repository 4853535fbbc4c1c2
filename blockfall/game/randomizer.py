"""
Piece sources: where the next piece kind comes from.

A session only ever calls ``next_kind()`` on its source, so tests can swap
in a fixed sequence while play uses a seeded random generator.
"""

from __future__ import annotations

import itertools
import random
from typing import Iterable, Protocol

from blockfall.game.pieces import PIECE_TYPES, get_piece


class PieceSource(Protocol):
    def next_kind(self) -> dict:
        ...


class UniformPieceSource:
    """Independent uniform choice over all 7 kinds."""

    def __init__(self, seed: int | None = None) -> None:
        self.rng = random.Random(seed)

    def next_kind(self) -> dict:
        return self.rng.choice(PIECE_TYPES)


class BagPieceSource:
    """7-bag randomizer.

    Each batch of 7 pieces contains every kind exactly once, in shuffled
    order, which bounds droughts of any single kind.
    """

    def __init__(self, seed: int | None = None) -> None:
        self.rng = random.Random(seed)
        self._bag: list[dict] = []

    def _fill_bag(self) -> None:
        bag = list(PIECE_TYPES)
        self.rng.shuffle(bag)
        self._bag = bag

    def next_kind(self) -> dict:
        if not self._bag:
            self._fill_bag()
        return self._bag.pop()


class SequencePieceSource:
    """Deterministic source that cycles through a fixed list of kinds.

    Kinds may be given as names ("I"), ids (1) or piece dicts.
    """

    def __init__(self, kinds: Iterable[int | str | dict]) -> None:
        resolved = [get_piece(kind) for kind in kinds]
        if not resolved:
            raise ValueError("SequencePieceSource needs at least one kind")
        self._cycle = itertools.cycle(resolved)

    def next_kind(self) -> dict:
        return next(self._cycle)


RANDOMIZERS = {
    "uniform": UniformPieceSource,
    "bag": BagPieceSource,
}


def make_piece_source(name: str = "uniform", seed: int | None = None) -> PieceSource:
    """Build a random piece source by name ("uniform" or "bag").

    Raises:
        ValueError: If the name is unknown.
    """
    try:
        factory = RANDOMIZERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown randomizer {name!r}; expected one of {sorted(RANDOMIZERS)}"
        ) from None
    return factory(seed)
