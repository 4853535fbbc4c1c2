"""
Headless game driver.

Runs complete games without any display: a player issues commands and a
fixed-step clock feeds gravity ticks, exactly as an input layer and a frame
timer would. Two players are available:
  - simulate: the heuristic autoplayer (blockfall.autoplay).
  - random:   uniformly random commands, mostly useful as a smoke test.
"""

from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Any

import numpy as np

from blockfall.autoplay import HeuristicPlayer, Weights
from blockfall.game.session import Action, GameSession

RANDOM_ACTIONS = (Action.LEFT, Action.RIGHT, Action.ROTATE, Action.SOFT_DROP, Action.HARD_DROP)


@dataclass
class GameResult:
    score: int
    lines: int
    level: int
    pieces: int
    ticks: int
    game_over: bool


class RandomPlayer:
    """Sends one random command per call."""

    def __init__(self, seed: int | None = None) -> None:
        self.rng = random.Random(seed)

    def play_piece(self, session: GameSession) -> bool:
        return session.dispatch(self.rng.choice(RANDOM_ACTIONS))


def run_game(
    session: GameSession,
    player: Any,
    tick_ms: float = 16.0,
    max_ticks: int = 100_000,
) -> GameResult:
    """Play one game until it is over or ``max_ticks`` frames have passed.

    Each frame the player gets one ``play_piece`` call, then the session
    receives a gravity tick of ``tick_ms``.
    """
    if session.paused and not session.game_over:
        session.toggle_pause()

    ticks = 0
    while not session.game_over and ticks < max_ticks:
        player.play_piece(session)
        session.tick(tick_ms)
        ticks += 1

    return GameResult(
        score=session.score,
        lines=session.lines,
        level=session.level,
        pieces=session.pieces_locked,
        ticks=ticks,
        game_over=session.game_over,
    )


def make_player(mode: str, config: dict[str, Any], seed: int | None = None) -> Any:
    if mode == "simulate":
        return HeuristicPlayer(Weights.from_config(config))
    if mode == "random":
        return RandomPlayer(seed)
    raise ValueError(f"Unknown player mode: {mode!r}")


def simulate(
    config: dict[str, Any],
    games: int = 1,
    seed: int | None = None,
    mode: str = "simulate",
    max_ticks: int | None = None,
) -> list[GameResult]:
    """Play several headless games and print a line per game plus a summary.

    Args:
        config: Config dict loaded from game.yaml.
        games: Number of games to play.
        seed: Base seed; game i uses seed + i. None means unseeded.
        mode: "simulate" (heuristic player) or "random".
        max_ticks: Frame budget per game; defaults to the config's max_ticks.

    Returns:
        One GameResult per game.
    """
    tick_ms = config.get("tick_ms", 16)
    if max_ticks is None:
        max_ticks = config.get("max_ticks", 100_000)

    results: list[GameResult] = []
    start_time = time.time()

    for game_num in range(games):
        game_seed = None if seed is None else seed + game_num
        final_scores: list[int] = []
        session = GameSession.from_config(config, seed=game_seed, on_game_over=final_scores.append)
        player = make_player(mode, config, game_seed)

        result = run_game(session, player, tick_ms=tick_ms, max_ticks=max_ticks)
        results.append(result)

        status = "game over" if final_scores else "tick limit"
        print(
            f"Game {game_num + 1}/{games} | Score: {result.score} | Lines: {result.lines}"
            f" | Level: {result.level} | Pieces: {result.pieces} | Ticks: {result.ticks} ({status})"
        )

    elapsed = time.time() - start_time
    if results:
        scores = np.array([r.score for r in results])
        lines = np.array([r.lines for r in results])
        print(f"\nPlayed {len(results)} game(s) in {elapsed:.1f}s")
        print(f"{'Metric':<15} {'Mean':>10} {'Median':>10} {'Min':>10} {'Max':>10}")
        print("-" * 57)
        for name, arr in [("Score", scores), ("Lines", lines)]:
            print(f"{name:<15} {arr.mean():>10.1f} {np.median(arr):>10.1f} "
                  f"{int(arr.min()):>10d} {int(arr.max()):>10d}")

    return results
