"""Main entry point: headless self-play of "26"."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from twentysix.config import load_config
from twentysix.game.engine import GameEngine
from twentysix.game.opponent import OpponentPolicy
from twentysix.logging import GameLogConfig, GameLogger
from twentysix.utils.logger import GameDisplay, setup_logging

logger = logging.getLogger(__name__)


def generate_log_filename(log_dir: str) -> str:
    """Generate a timestamped log filename inside ``log_dir``."""
    timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
    return str(Path(log_dir) / f"{timestamp}_selfplay.jsonl")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="26 card game: self-play with the automated policy"
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config file (YAML)",
    )
    parser.add_argument(
        "-n",
        "--num-games",
        type=int,
        help="Number of games to play (overrides config)",
    )
    parser.add_argument(
        "-s",
        "--seed",
        type=int,
        help="Base shuffle seed (overrides config)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        help="Pause between automated moves in seconds (overrides config)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--show-hands",
        action="store_true",
        help="Show player hands in output",
    )
    parser.add_argument(
        "--game-log",
        type=Path,
        help="Directory for game log files (filename auto-generated)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        Exit code (0 for success)
    """
    args = parse_args(argv)

    config = load_config(args.config)

    # Apply command-line overrides
    if args.num_games is not None:
        config.game.num_games = args.num_games
    if args.seed is not None:
        config.game.seed = args.seed
    if args.delay is not None:
        config.opponent.move_delay = args.delay
        config.opponent.discard_delay = args.delay
    if args.verbose:
        config.logging.level = "DEBUG"
    if args.show_hands:
        config.logging.show_hands = True

    game_log_enabled = args.game_log is not None or config.game_log.enabled
    game_log_dir = str(args.game_log) if args.game_log else config.game_log.output_path

    setup_logging(config.logging.level)
    display = GameDisplay(show_hands=config.logging.show_hands)

    if game_log_enabled:
        game_log_config = GameLogConfig(enabled=True, output_path=generate_log_filename(game_log_dir))
        print(f"Game log: {game_log_config.output_path}")
    else:
        game_log_config = GameLogConfig(enabled=False)

    try:
        with GameLogger(game_log_config) as game_logger:
            engine = GameEngine(config, game_logger, OpponentPolicy.from_config(config))
            engine.set_callbacks(
                on_turn_end=display.print_turn if config.logging.show_hands else None,
                on_game_end=lambda result, state: display.print_game_end(result),
            )

            print(f"Starting {config.game.num_games} games...")
            display.print_separator()
            results = engine.run_games()
            display.print_final_results(results)
        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 1
    except Exception as e:
        logger.exception(f"Self-play error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
