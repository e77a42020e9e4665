"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel

from twentysix.logging.game_logger import GameLogConfig
from twentysix.models.player import Seat


class DeckConfig(BaseModel):
    """Card pool composition."""

    num_suits: int = 4
    deck_count: int = 2
    wildcard_count: int = 4


class RulesConfig(BaseModel):
    """Rules configuration."""

    reserve_size: int = 20
    hand_size: int = 5
    first_player: Seat = Seat.HUMAN


class OpponentConfig(BaseModel):
    """Automated player pacing (seconds)."""

    move_delay: float = 0.8
    discard_delay: float = 0.8


class GameConfig(BaseModel):
    """Self-play session configuration."""

    num_games: int = 10
    max_turns: int = 500  # Stalemate after this many turns
    seed: int | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_hands: bool = False


class Config(BaseModel):
    """Root configuration."""

    deck: DeckConfig = DeckConfig()
    rules: RulesConfig = RulesConfig()
    opponent: OpponentConfig = OpponentConfig()
    game: GameConfig = GameConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig(output_path="game_logs")


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
