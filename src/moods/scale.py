"""Mood valence scales, display glyphs and average labels."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from shared_types import Mood

MIDPOINT = 3
FALLBACK_EMOJI = "🙂"
NO_DATA_LABEL = "No Data"

# (lower bound, label), checked top-down; the last tier is strict (> 0)
LABEL_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (4.5, "Excellent"),
    (4.0, "Good"),
    (3.0, "Okay"),
    (2.0, "Low"),
)
POOR_LABEL = "Poor"

_EMOJI = {
    Mood.HAPPY: "😊",
    Mood.SAD: "😢",
    Mood.ANGRY: "😡",
    Mood.ANXIOUS: "😰",
    Mood.TIRED: "😴",
    Mood.CALM: "😌",
    Mood.GRATEFUL: "🙏",
    Mood.EXCITED: "😄",
}

_INSIGHTS_VALENCE = {
    Mood.HAPPY: 5,
    Mood.EXCITED: 5,
    Mood.GRATEFUL: 4,
    Mood.CALM: 4,
    Mood.TIRED: 3,
    Mood.SAD: 2,
    Mood.ANXIOUS: 2,
    Mood.ANGRY: 1,
}

_DASHBOARD_VALENCE = {**_INSIGHTS_VALENCE, Mood.ANXIOUS: 3}


def get_mood_label(value: float) -> str:
    """Map a numeric average in [0, 5] to its display tier."""
    for bound, label in LABEL_THRESHOLDS:
        if value >= bound:
            return label
    if value > 0:
        return POOR_LABEL
    return NO_DATA_LABEL


@dataclass(frozen=True)
class MoodScale:
    """Read-only mood -> valence and mood -> glyph tables."""

    name: str
    valence: Mapping[Mood, int]
    emoji: Mapping[Mood, str] = field(default_factory=lambda: MappingProxyType(dict(_EMOJI)))
    fallback_valence: int = MIDPOINT
    fallback_emoji: str = FALLBACK_EMOJI

    def __post_init__(self):
        for mood, score in self.valence.items():
            if not 1 <= score <= 5:
                raise ValueError(f"Valence for {mood} must be in [1, 5], got {score}")
        # Freeze caller-supplied dicts
        object.__setattr__(self, "valence", MappingProxyType(dict(self.valence)))
        object.__setattr__(self, "emoji", MappingProxyType(dict(self.emoji)))

    def value_of(self, mood: Optional[Mood]) -> int:
        if mood is None:
            return self.fallback_valence
        return self.valence.get(mood, self.fallback_valence)

    def emoji_for(self, mood: Optional[Mood]) -> str:
        if mood is None:
            return self.fallback_emoji
        return self.emoji.get(mood, self.fallback_emoji)


INSIGHTS_SCALE = MoodScale(name="insights", valence=_INSIGHTS_VALENCE)
DASHBOARD_SCALE = MoodScale(name="dashboard", valence=_DASHBOARD_VALENCE)

SCALES: Mapping[str, MoodScale] = MappingProxyType(
    {INSIGHTS_SCALE.name: INSIGHTS_SCALE, DASHBOARD_SCALE.name: DASHBOARD_SCALE}
)


def get_scale(name: str) -> MoodScale:
    """Look up a named preset scale."""
    try:
        return SCALES[name]
    except KeyError:
        raise ValueError(f"Unknown mood scale: {name}. Must be one of {sorted(SCALES)}")
