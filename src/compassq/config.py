"""Configuration management for Compass-Q."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

COMPASSQ_HOME = Path(os.environ.get("COMPASSQ_HOME", Path.home() / "compassq"))
CONFIG_FILE = COMPASSQ_HOME / "config" / "compassq.conf"
DATA_DIR = COMPASSQ_HOME / "data"

_TRUE = {"1", "true", "yes", "y", "on"}


@dataclass
class Config:
    """Compass-Q configuration."""

    data_file: Path = field(default_factory=lambda: DATA_DIR / "board.json")
    save_debounce_ms: int = 200
    bell: bool = True
    log_level: str = "WARNING"


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from unquoted values."""
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from compassq.conf."""
    config = Config()
    path = config_file or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
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
            case "save_debounce_ms":
                try:
                    config.save_debounce_ms = max(0, int(value))
                except ValueError:
                    logger.warning(f"Invalid SAVE_DEBOUNCE_MS: {value}")
            case "bell":
                config.bell = value.strip().lower() in _TRUE
            case "log_level":
                config.log_level = value.upper() or config.log_level

    return config
