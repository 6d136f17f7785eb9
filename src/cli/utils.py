"""Shared CLI utilities."""

from datetime import datetime

import structlog
from rich.console import Console

console = Console()
logger = structlog.get_logger()


def get_components():
    """Initialize store and engine from config."""
    from cli.config import load_config_model
    from moods import AnalyticsEngine, MoodEntryStore

    config = load_config_model()
    return {
        "config": config,
        "user_id": config.user.id,
        "store": MoodEntryStore(config.paths.db_path),
        "engine": AnalyticsEngine.from_config(config.analytics),
    }


def now() -> datetime:
    """Reference instant for analytics."""
    return datetime.now()


def parse_day(value: str | None) -> datetime | None:
    """Parse YYYY-MM-DD (or full ISO) from the command line."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")
