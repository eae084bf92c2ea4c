"""Configuration management for Horizon."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

HORIZON_HOME = Path(os.environ.get("HORIZON_HOME", Path.home() / ".horizon"))
CONFIG_FILE = HORIZON_HOME / "horizon.conf"
DATA_FILE = HORIZON_HOME / "data.json"


@dataclass
class Config:
    """Horizon configuration."""

    data_file: Path = field(default_factory=lambda: DATA_FILE)
    default_horizon: str = "short"
    default_priority: str = "medium"
    short_id_length: int = 6


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from horizon.conf, then apply env overrides."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if config_file.exists():
        for line in config_file.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "data_file":
                    if value:
                        config.data_file = Path(value).expanduser()
                case "default_horizon":
                    config.default_horizon = value
                case "default_priority":
                    config.default_priority = value
                case "short_id_length":
                    try:
                        length = int(value)
                    except ValueError:
                        logger.warning(f"Ignoring non-integer SHORT_ID_LENGTH: {value!r}")
                        continue
                    if length < 1:
                        logger.warning(f"Ignoring SHORT_ID_LENGTH below 1: {length}")
                        continue
                    config.short_id_length = length

    env_data_file = os.environ.get("HORIZON_DATA_FILE")
    if env_data_file:
        config.data_file = Path(env_data_file).expanduser()

    return config
