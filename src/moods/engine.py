"""Mood analytics engine: entry history + reference instant -> AnalyticsResult."""

import math
from collections import Counter
from datetime import datetime
from typing import Iterable, Optional

import structlog

from shared_types import NEUTRAL_MOOD, FrequencyWindow, Mood

from .models import (
    AnalyticsResult,
    Insight,
    JournalEntryStats,
    MoodCount,
    MoodEntry,
    MostFrequentMood,
    Recommendation,
    Streak,
    WeekdayBucket,
    WeeklyAverage,
    display_name,
)
from .rules import (
    DEFAULT_RULES,
    GENERAL_RECOMMENDATIONS,
    MAX_RECOMMENDATIONS,
    RecommendationRule,
    count_mood,
    entry_text,
    goals_insight,
    mood_patterns_insight,
    progress_insight,
    select_recommendations,
)
from .scale import INSIGHTS_SCALE, MIDPOINT, NO_DATA_LABEL, MoodScale, get_mood_label, get_scale
from .streaks import DEFAULT_LOOKBACK_DAYS, longest_streak, trailing_streak
from .windows import Windows, WindowedEntries

logger = structlog.get_logger()

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


def percent_change(current: float, previous: float) -> str:
    """Integer percent change; a zero baseline reports 100% (or 0% if both are zero)."""
    if previous <= 0:
        return "100%" if current > 0 else "0%"
    return f"{round_half_away((current - previous) / previous * 100)}%"


def tally(entries: Iterable[MoodEntry]) -> Counter:
    """Count recognized moods; unrecognized entries are skipped."""
    return Counter(m for m in (e.known_mood for e in entries) if m is not None)


def dominant_mood(counts: Counter) -> Optional[Mood]:
    """Highest count wins; ties go to the mood declared first in Mood."""
    best, best_count = None, 0
    for mood in Mood:
        if counts[mood] > best_count:
            best, best_count = mood, counts[mood]
    return best


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (12.5 -> 13, -12.5 -> -13)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


class AnalyticsEngine:
    """Stateless analytics over one user's mood history.

    All tables and limits are injected; ``compute`` never reads the clock.
    """

    def __init__(
        self,
        scale: MoodScale = INSIGHTS_SCALE,
        rules: tuple[RecommendationRule, ...] = DEFAULT_RULES,
        general_recommendations: tuple[Recommendation, ...] = GENERAL_RECOMMENDATIONS,
        trailing_lookback: int = DEFAULT_LOOKBACK_DAYS,
        max_recommendations: int = MAX_RECOMMENDATIONS,
    ):
        self.scale = scale
        self.rules = tuple(rules)
        self.general_recommendations = tuple(general_recommendations)
        self.trailing_lookback = trailing_lookback
        self.max_recommendations = max_recommendations

    @classmethod
    def from_config(cls, analytics) -> "AnalyticsEngine":
        """Build from an AnalyticsConfig model."""
        return cls(
            scale=get_scale(analytics.scale),
            trailing_lookback=analytics.trailing_lookback_days,
            max_recommendations=analytics.max_recommendations,
        )

    def compute(
        self,
        entries: Iterable[MoodEntry],
        now: datetime,
        frequency_window: FrequencyWindow = FrequencyWindow.WEEK,
    ) -> AnalyticsResult:
        """Run every generator over ``entries`` as seen at ``now``."""
        windows = Windows.around(now)
        split = windows.split(entries)
        window_entries = split.month if frequency_window == FrequencyWindow.MONTH else split.week

        streak = self.streaks(split, windows)
        weekly_avg = self.average_value(split.week)

        result = AnalyticsResult(
            weekly_average_mood=self.weekly_average(split.week, split.previous_week),
            most_frequent_mood=self.most_frequent(window_entries, frequency_window),
            journal_entries=self.entry_stats(split),
            streak=streak,
            weekly_mood_data=self.weekly_mood_series(split.week, windows),
            monthly_mood_data=self.monthly_distribution(split.month),
            insights=self.insights(split.week, weekly_avg, streak.current),
            recommendations=self.recommendations(split.week),
        )
        logger.debug(
            "analytics.computed",
            total=len(split.all),
            week=len(split.week),
            month=len(split.month),
            scale=self.scale.name,
        )
        return result

    # --- Stats ---

    def average_value(self, entries: list[MoodEntry]) -> Optional[float]:
        """Mean valence, or None for an empty window."""
        if not entries:
            return None
        return sum(self.scale.value_of(e.known_mood) for e in entries) / len(entries)

    def weekly_average(self, week: list[MoodEntry], previous_week: list[MoodEntry]) -> WeeklyAverage:
        current = self.average_value(week)
        previous = self.average_value(previous_week)
        # The midpoint is a display default only; an empty week is a 0 baseline
        # so the zero-baseline sentinel reports it instead of a fake 3.0 reading.
        improvement = percent_change(current or 0.0, previous or 0.0)
        if current is None:
            return WeeklyAverage(label=NO_DATA_LABEL, value=float(MIDPOINT), improvement=improvement)
        return WeeklyAverage(label=get_mood_label(current), value=current, improvement=improvement)

    def most_frequent(
        self,
        entries: list[MoodEntry],
        window: FrequencyWindow = FrequencyWindow.WEEK,
    ) -> MostFrequentMood:
        counts = tally(entries)
        mood = dominant_mood(counts)
        return MostFrequentMood(
            mood=mood,
            count=counts[mood] if mood else 0,
            emoji=self.scale.emoji_for(mood),
            window=window,
        )

    @staticmethod
    def entry_stats(split: WindowedEntries) -> JournalEntryStats:
        return JournalEntryStats(
            total=len(split.all),
            this_week=len(split.week),
            previous_week=len(split.previous_week),
            change=percent_change(len(split.week), len(split.previous_week)),
        )

    def streaks(self, split: WindowedEntries, windows: Windows) -> Streak:
        days = [windows.day_of(e) for e in split.all]
        return Streak(
            longest=longest_streak(days),
            current=trailing_streak(days, windows.today, self.trailing_lookback),
        )

    # --- Aggregate views ---

    def weekly_mood_series(self, week: list[MoodEntry], windows: Windows) -> tuple[WeekdayBucket, ...]:
        """One bucket per weekday, always Sun..Sat."""
        by_day: dict[str, list[MoodEntry]] = {d: [] for d in WEEKDAYS}
        for entry in week:
            day = windows.day_of(entry)
            by_day[WEEKDAYS[(day.weekday() + 1) % 7]].append(entry)

        buckets = []
        for name in WEEKDAYS:
            day_entries = by_day[name]
            if not day_entries:
                buckets.append(WeekdayBucket(day=name, value=MIDPOINT, mood=NEUTRAL_MOOD))
                continue
            mood = dominant_mood(tally(day_entries))
            buckets.append(
                WeekdayBucket(
                    day=name,
                    value=round_half_away(self.average_value(day_entries)),
                    mood=mood.value if mood else NEUTRAL_MOOD,
                    count=len(day_entries),
                )
            )
        return tuple(buckets)

    @staticmethod
    def monthly_distribution(month: list[MoodEntry]) -> tuple[MoodCount, ...]:
        """Count per mood in declaration order; unrecognized moods fold into Neutral."""
        counts = Counter(e.bucket_mood for e in month)
        order = [m.value for m in Mood] + [NEUTRAL_MOOD]
        return tuple(
            MoodCount(name=display_name(name), value=counts[name])
            for name in order
            if counts[name]
        )

    # --- Text blocks ---

    def insights(
        self,
        week: list[MoodEntry],
        weekly_average: Optional[float],
        trailing_days: int,
    ) -> tuple[Insight, ...]:
        blocks = [
            mood_patterns_insight(count_mood(week, Mood.ANXIOUS)),
            progress_insight(weekly_average),
            goals_insight(trailing_days, week),
        ]
        return tuple(b for b in blocks if b is not None)

    def recommendations(self, week: list[MoodEntry]) -> tuple[Recommendation, ...]:
        return tuple(
            select_recommendations(
                entry_text(week),
                rules=self.rules,
                general=self.general_recommendations,
                limit=self.max_recommendations,
            )
        )
