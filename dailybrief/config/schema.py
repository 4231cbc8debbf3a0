"""Configuration schema using Pydantic."""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)


class StorageConfig(BaseModel):
    """Where providers and preferences are kept."""

    directory: str = "~/.dailybrief/data"

    @property
    def path(self) -> Path:
        """Get expanded storage directory."""
        return Path(self.directory).expanduser()


class ProbeConfig(BaseModel):
    """Connection test configuration."""

    timeout: float = 30.0  # seconds, single attempt


class GenerationConfig(BaseModel):
    """Briefing generation configuration."""

    max_tokens: int = 2048
    temperature: float = 0.7
    timeout: float = 120.0
    trending_count: int = 3


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    console: bool = True
    file: str = ""  # empty disables the log file


class Config(BaseModel):
    """Root configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """Get the config file path."""
    return Path.home() / ".dailybrief" / "config.json"


def load_config() -> Config:
    """Load configuration from file, falling back to defaults."""
    config_path = get_config_path()

    if config_path.exists():
        try:
            data = json.loads(config_path.read_text())
            return Config(**data)
        except (OSError, json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.warning("Ignoring unreadable config at %s: %s", config_path, e)

    return Config()


def save_config(config: Config) -> None:
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(config.model_dump_json(indent=2))
