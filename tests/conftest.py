"""Shared test fixtures for moodlog."""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from moods.models import MoodEntry  # noqa: E402

# Wednesday afternoon; the week window is Thu 2024-06-06 .. Wed 2024-06-12
FIXED_NOW = datetime(2024, 6, 12, 15, 30)


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def make_entry():
    """Build a MoodEntry ``days_ago`` days before FIXED_NOW."""

    def _make(mood="happy", days_ago=0, content="", hour=9, user_id="user-123", tags=()):
        day = FIXED_NOW - timedelta(days=days_ago)
        return MoodEntry(
            user_id=user_id,
            date=day.replace(hour=hour, minute=0, second=0, microsecond=0),
            mood=mood,
            content=content,
            tags=tuple(tags),
        )

    return _make


@pytest.fixture
def sample_entries(make_entry):
    """Happy today and yesterday, sad three days ago."""
    return [
        make_entry("happy", 0, "Great walk in the park"),
        make_entry("happy", 1, "Dinner with friends"),
        make_entry("sad", 3, "Rainy and grey"),
    ]
