"""Pydantic configuration models for moodlog."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from shared_types import FrequencyWindow

VALID_SCALES = {"insights", "dashboard"}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def default_home() -> Path:
    return Path(os.environ.get("MOODLOG_HOME", "~/moodlog"))


class PathsConfig(BaseModel):
    """File paths configuration."""

    db_path: Path = Field(default_factory=lambda: default_home() / "moods.db")
    log_file: Path = Field(default_factory=lambda: default_home() / "moodlog.log")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.db_path = self.db_path.expanduser()
        self.log_file = self.log_file.expanduser()
        return self


class AnalyticsConfig(BaseModel):
    """Analytics engine tables and limits."""

    scale: str = "insights"
    trailing_lookback_days: int = Field(default=7, ge=1)
    max_recommendations: int = Field(default=6, ge=1)
    dashboard_frequency_window: FrequencyWindow = FrequencyWindow.MONTH
    insights_frequency_window: FrequencyWindow = FrequencyWindow.WEEK

    @field_validator("scale")
    @classmethod
    def validate_scale(cls, v: str) -> str:
        if v not in VALID_SCALES:
            raise ValueError(f"Invalid mood scale: {v}. Must be one of {VALID_SCALES}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class UserConfig(BaseModel):
    """Identity used by the CLI (single local user)."""

    id: str = "local"


class MoodlogConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    user: UserConfig = Field(default_factory=UserConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "MoodlogConfig":
        """Create config from dict (paths may be plain strings)."""
        if "paths" in data:
            for key in ["db_path", "log_file"]:
                if key in data["paths"] and isinstance(data["paths"][key], str):
                    data["paths"][key] = Path(data["paths"][key])
        return cls.model_validate(data)
