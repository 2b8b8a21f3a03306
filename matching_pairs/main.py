"""Main entry point for the matching pairs game."""

import argparse
import logging
import random
import sys
from pathlib import Path

from pydantic import ValidationError

from matching_pairs.config import load_config
from matching_pairs.console import ConsoleBoard
from matching_pairs.game.engine import GameEngine
from matching_pairs.game.scheduler import EventLoop
from matching_pairs.models.player import Player
from matching_pairs.session import register_players
from matching_pairs.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        description="Matching pairs (Concentration) card game"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-n",
        "--pairs",
        type=int,
        help="Number of pairs on the board (overrides config)",
    )
    parser.add_argument(
        "-d",
        "--delay",
        type=int,
        help="Reveal delay in milliseconds (overrides config)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for shuffling",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    args = parser.parse_args(argv)

    try:
        # Load config
        config = load_config(args.config)

        # Apply command-line overrides
        if args.pairs is not None:
            config.game.num_pairs = args.pairs
        if args.delay is not None:
            config.game.reveal_delay_ms = args.delay
        if args.verbose:
            config.logging.level = "DEBUG"
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 2

    # Log to stderr so records do not interleave with the board
    setup_logging(config.logging.level, stream=sys.stderr)

    try:
        board = ConsoleBoard(config.game.num_pairs)
        players = register_players(board, config)

        loop = EventLoop()
        engine = GameEngine(players, config, loop, rng=random.Random(args.seed))

        def on_game_end(winner: Player, ranking: list[Player]) -> None:
            board.announce("Press s to play again.")

        engine.set_callbacks(on_game_end=on_game_end)
        engine.initialize(board)
        board.run(engine, loop)
        return 0

    except KeyboardInterrupt:
        print("\nGame interrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Game error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
