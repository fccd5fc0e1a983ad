"""Configuration management for voicejournal."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.windows import DEFAULT_CUTOFF_HOUR

logger = logging.getLogger(__name__)

VOICEJOURNAL_HOME = Path(os.environ.get("VOICEJOURNAL_HOME", Path.home() / "voicejournal"))
CONFIG_FILE = VOICEJOURNAL_HOME / "config" / "voicejournal.conf"
DATA_DIR = VOICEJOURNAL_HOME / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """voicejournal configuration."""

    data_dir: str = ""
    # IANA zone name; empty = system local time
    timezone: str = ""
    morning_cutoff_hour: int = DEFAULT_CUTOFF_HOUR
    log_level: str = "WARNING"

    def resolved_data_dir(self) -> Path:
        """Data directory from config, falling back to the default."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR

    def tzinfo(self) -> ZoneInfo | None:
        """Configured time zone, or None for system local time."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            logger.warning(f"Unknown TIMEZONE {self.timezone!r}, using local time: {e}")
            return None


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(config_file: Path | None = None) -> Config:
    """Load configuration from voicejournal.conf file."""
    config = Config()
    config_file = config_file or CONFIG_FILE

    if not config_file.exists():
        return config

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
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "morning_cutoff_hour":
                try:
                    hour = int(value)
                except ValueError:
                    logger.warning(f"Ignoring non-numeric MORNING_CUTOFF_HOUR: {value!r}")
                    continue
                if not 1 <= hour <= 23:
                    logger.warning(f"Ignoring out-of-range MORNING_CUTOFF_HOUR: {hour}")
                    continue
                config.morning_cutoff_hour = hour
            case "log_level":
                level = value.upper()
                if level in LOG_LEVELS:
                    config.log_level = level
                else:
                    logger.warning(f"Ignoring unknown LOG_LEVEL: {value!r}")
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
