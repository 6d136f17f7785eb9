"""Shared enums and types for moodlog."""

from enum import StrEnum


class Mood(StrEnum):
    # Declaration order is the tie-break order for frequency tallies.
    HAPPY = "happy"
    CALM = "calm"
    ANXIOUS = "anxious"
    SAD = "sad"
    ANGRY = "angry"
    TIRED = "tired"
    EXCITED = "excited"
    GRATEFUL = "grateful"


class FrequencyWindow(StrEnum):
    WEEK = "week"
    MONTH = "month"


POSITIVE_MOODS = (Mood.HAPPY, Mood.EXCITED, Mood.GRATEFUL)

NEUTRAL_MOOD = "neutral"
