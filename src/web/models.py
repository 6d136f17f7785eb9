"""Pydantic request/response schemas for the web API."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from moods.models import MoodEntry
from moods.storage import MAX_CONTENT_LENGTH, parse_tags
from shared_types import Mood


def _split_tags(v):
    if v is None:
        return v
    return list(parse_tags(v))


# --- Mood entries ---


class MoodEntryCreate(BaseModel):
    date: datetime
    mood: Mood
    content: str = Field(..., min_length=1, max_length=MAX_CONTENT_LENGTH)
    tags: list[str] = Field(default_factory=list)

    @field_validator("mood", mode="before")
    @classmethod
    def lower_mood(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _split_tags(v) or []


class MoodEntryUpdate(BaseModel):
    """Partial update: only fields sent are changed."""

    date: Optional[datetime] = None
    mood: Optional[Mood] = None
    content: Optional[str] = Field(None, min_length=1, max_length=MAX_CONTENT_LENGTH)
    tags: Optional[list[str]] = None

    @field_validator("mood", mode="before")
    @classmethod
    def lower_mood(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        return _split_tags(v)


class MoodEntryOut(BaseModel):
    id: str
    date: datetime
    mood: str
    content: str
    tags: list[str] = []
    created_at: str
    updated_at: Optional[str] = None

    @classmethod
    def from_entry(cls, entry: MoodEntry) -> "MoodEntryOut":
        return cls(
            id=entry.id,
            date=entry.date,
            mood=entry.mood,
            content=entry.content,
            tags=list(entry.tags),
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )
