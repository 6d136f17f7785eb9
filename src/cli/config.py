"""Configuration loading and management."""

from pathlib import Path
from typing import Optional

import yaml

from .config_models import MoodlogConfig


def find_config() -> Optional[Path]:
    """Find config file in standard locations."""
    locations = [
        Path.cwd() / "config.yaml",
        Path.home() / ".moodlog" / "config.yaml",
        Path.home() / "moodlog" / "config.yaml",
    ]
    for loc in locations:
        if loc.exists():
            return loc
    return None


def load_config_model(config_path: Optional[Path] = None) -> MoodlogConfig:
    """Load configuration as Pydantic model with validation.

    Raises:
        ValueError: On invalid YAML or failed validation
    """
    base_config = {}

    path = config_path or find_config()
    if path and path.exists():
        try:
            with open(path) as f:
                base_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

    try:
        return MoodlogConfig.from_dict(base_config)
    except Exception as e:
        raise ValueError(f"Config validation failed: {e}")


def setup_logging(config: MoodlogConfig, verbose: bool = False) -> None:
    """Configure structlog from the logging section."""
    from .logging_config import setup_logging as _setup

    level = "DEBUG" if verbose else config.logging.level
    _setup(json_mode=config.logging.json_mode, level=level, log_file=config.paths.log_file)
