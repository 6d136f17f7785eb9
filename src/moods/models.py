"""Mood entry and analytics result value types."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from shared_types import NEUTRAL_MOOD, FrequencyWindow, Mood


def parse_mood(value: Optional[str]) -> Optional[Mood]:
    """Map a raw mood string to Mood, or None if unrecognized."""
    if not value:
        return None
    try:
        return Mood(value.strip().lower())
    except ValueError:
        return None


def display_name(mood: Optional[str]) -> str:
    """Capitalize a mood name for display ("" for missing)."""
    if not mood:
        return ""
    return mood[0].upper() + mood[1:]


@dataclass(frozen=True)
class MoodEntry:
    user_id: str
    date: datetime
    mood: str
    content: str = ""
    tags: tuple[str, ...] = ()
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])
    created_at: str = field(default_factory=lambda: datetime.now().isoformat())
    updated_at: Optional[str] = None

    @property
    def known_mood(self) -> Optional[Mood]:
        return parse_mood(self.mood)

    @property
    def bucket_mood(self) -> str:
        """Mood name for aggregation; unrecognized moods fall into "neutral"."""
        mood = self.known_mood
        return mood.value if mood else NEUTRAL_MOOD


# --- Analytics result ---


@dataclass(frozen=True)
class WeeklyAverage:
    label: str
    value: float
    improvement: str

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "value": f"{self.value:.2f}",
            "improvement": self.improvement,
        }


@dataclass(frozen=True)
class MostFrequentMood:
    mood: Optional[Mood]
    count: int
    emoji: str
    window: FrequencyWindow = FrequencyWindow.WEEK

    def to_dict(self) -> dict:
        return {
            "mood": display_name(self.mood.value if self.mood else None),
            "count": self.count,
            "emoji": self.emoji,
            "window": self.window.value,
        }


@dataclass(frozen=True)
class JournalEntryStats:
    total: int
    this_week: int
    previous_week: int
    change: str

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "this_week": self.this_week,
            "previous_week": self.previous_week,
            "change": self.change,
        }


@dataclass(frozen=True)
class Streak:
    """Longest-ever run of consecutive days, and the run ending today."""

    longest: int
    current: int

    def to_dict(self) -> dict:
        return {"longest": self.longest, "current": self.current}


@dataclass(frozen=True)
class WeekdayBucket:
    day: str
    value: int
    mood: str
    count: int = 0

    def to_dict(self) -> dict:
        return {"day": self.day, "value": self.value, "mood": self.mood, "count": self.count}


@dataclass(frozen=True)
class MoodCount:
    name: str
    value: int

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


@dataclass(frozen=True)
class Goal:
    name: str
    current: int
    target: int

    def to_dict(self) -> dict:
        return {"name": self.name, "current": self.current, "target": self.target}


@dataclass(frozen=True)
class Insight:
    type: str
    title: str
    description: str
    content: Optional[str] = None
    goals: tuple[Goal, ...] = ()

    def to_dict(self) -> dict:
        d = {"type": self.type, "title": self.title, "description": self.description}
        if self.content is not None:
            d["content"] = self.content
        if self.goals:
            d["goals"] = [g.to_dict() for g in self.goals]
        return d


@dataclass(frozen=True)
class Recommendation:
    title: str
    description: str
    content: str

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "content": self.content}


@dataclass(frozen=True)
class AnalyticsResult:
    weekly_average_mood: WeeklyAverage
    most_frequent_mood: MostFrequentMood
    journal_entries: JournalEntryStats
    streak: Streak
    weekly_mood_data: tuple[WeekdayBucket, ...]
    monthly_mood_data: tuple[MoodCount, ...]
    insights: tuple[Insight, ...]
    recommendations: tuple[Recommendation, ...]

    def to_dashboard_dict(self) -> dict:
        """Headline stats only (dashboard cards)."""
        return {
            "weekly_average_mood": self.weekly_average_mood.to_dict(),
            "most_frequent_mood": self.most_frequent_mood.to_dict(),
            "journal_entries": self.journal_entries.to_dict(),
            "streak": self.streak.to_dict(),
        }

    def to_dict(self) -> dict:
        return {
            **self.to_dashboard_dict(),
            "weekly_mood_data": [b.to_dict() for b in self.weekly_mood_data],
            "monthly_mood_data": [m.to_dict() for m in self.monthly_mood_data],
            "insights": [i.to_dict() for i in self.insights],
            "recommendations": [r.to_dict() for r in self.recommendations],
        }
