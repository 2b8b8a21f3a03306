"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field


class GameConfig(BaseModel):
    """Game configuration."""

    model_config = ConfigDict(validate_assignment=True)

    num_pairs: int = Field(default=4, gt=0)
    reveal_delay_ms: int = Field(default=1000, ge=0)
    max_players: int = Field(default=8, gt=0)
    default_player_name: str = "Guest"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = Field(default_factory=GameConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


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
