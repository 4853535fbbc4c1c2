"""
Entry point for headless blockfall games.

Supports two modes:
  - simulate: the heuristic autoplayer plays complete games.
  - random:   random commands, a quick smoke test of the engine.

Usage:
    python main.py --mode simulate
    python main.py --mode simulate --games 10 --seed 7
    python main.py --mode random --config config/game.yaml --max-ticks 2000
"""

from __future__ import annotations

import argparse
import pathlib
import sys

import yaml


def load_config(config_path: str | pathlib.Path) -> dict:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dict of configuration key-value pairs (empty if the file is empty).

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    config_path = pathlib.Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Namespace with mode, config, games, seed and max_ticks attributes.
    """
    parser = argparse.ArgumentParser(
        description="blockfall: run headless falling-block games.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        type=str,
        choices=["simulate", "random"],
        default="simulate",
        help="Player: 'simulate' (heuristic autoplayer) or 'random' (random commands).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/game.yaml",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "--games",
        type=int,
        default=None,
        help="Number of games to play (default: 'games' from the config, else 1).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Base random seed (default: 'seed' from the config, else unseeded).",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help="Frame budget per game (default: 'max_ticks' from the config).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point: parse args, load config, and run the games."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    from blockfall.simulate import simulate

    games = args.games if args.games is not None else config.get("games", 1)
    seed = args.seed if args.seed is not None else config.get("seed")
    try:
        simulate(config, games=games, seed=seed, mode=args.mode, max_ticks=args.max_ticks)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
