"""Dependency injection for FastAPI routes."""

from datetime import datetime
from functools import lru_cache

import structlog

from cli.config import load_config_model
from cli.config_models import MoodlogConfig
from moods import AnalyticsEngine, MoodEntryStore

logger = structlog.get_logger()


@lru_cache
def get_config() -> MoodlogConfig:
    """Load shared config (config.yaml or defaults)."""
    return load_config_model()


def get_store() -> MoodEntryStore:
    """Entry store; rows are scoped per user inside the store."""
    return MoodEntryStore(get_config().paths.db_path)


def get_engine() -> AnalyticsEngine:
    return AnalyticsEngine.from_config(get_config().analytics)


def get_now() -> datetime:
    """Reference instant when the caller doesn't pin one."""
    return datetime.now()
