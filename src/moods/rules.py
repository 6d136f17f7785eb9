"""Rule tables for insight and recommendation text blocks."""

from dataclasses import dataclass

from shared_types import POSITIVE_MOODS, Mood

from .models import Goal, Insight, MoodEntry, Recommendation

MAX_RECOMMENDATIONS = 6
PROGRESS_THRESHOLD = 4.0

MINDFULNESS_TARGET = 7
ENTRIES_TARGET = 7
POSITIVE_TARGET = 5


@dataclass(frozen=True)
class RecommendationRule:
    """Emit ``recommendation`` when any keyword appears in the week's text."""

    name: str
    keywords: tuple[str, ...]
    recommendation: Recommendation

    def matches(self, text: str) -> bool:
        return any(k in text for k in self.keywords)


DEFAULT_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule(
        name="stress",
        keywords=("work", "stress", "anxious"),
        recommendation=Recommendation(
            title="Stress Management",
            description="Based on your anxiety patterns",
            content=(
                "Try the 4-7-8 breathing technique: inhale for 4 seconds, hold for 7, "
                "exhale for 8. This can help reduce stress levels quickly."
            ),
        ),
    ),
    RecommendationRule(
        name="sleep",
        keywords=("sleep", "tired", "exhausted"),
        recommendation=Recommendation(
            title="Sleep Improvement",
            description="Your sleep quality affects your mood",
            content=(
                "Consider creating a bedtime routine by turning off screens 1 hour before "
                "bed and reading or meditating instead."
            ),
        ),
    ),
    RecommendationRule(
        name="isolation",
        keywords=("alone", "lonely", "isolated"),
        recommendation=Recommendation(
            title="Social Connection",
            description="Important for emotional wellbeing",
            content=(
                "You've mentioned feeling isolated. Consider scheduling a weekly social "
                "activity, even a brief coffee with a friend."
            ),
        ),
    ),
)

GENERAL_RECOMMENDATIONS: tuple[Recommendation, ...] = (
    Recommendation(
        title="Physical Activity",
        description="Boosts mood and reduces anxiety",
        content=(
            "Even short 10-minute walks can significantly improve your mood. "
            "Try to incorporate movement into your daily routine."
        ),
    ),
    Recommendation(
        title="Gratitude Practice",
        description="Shifts focus to positive aspects",
        content=(
            "Consider writing down 3 things you're grateful for each morning "
            "to prime your mind for positive thinking."
        ),
    ),
    Recommendation(
        title="Self-compassion",
        description="Be kind to yourself",
        content=(
            "Notice your negative self-talk and try to speak to yourself with "
            "the kindness you'd offer a good friend."
        ),
    ),
)


def entry_text(entries: list[MoodEntry]) -> str:
    """Lower-cased, space-joined content of all entries."""
    return " ".join((e.content or "").lower() for e in entries)


def select_recommendations(
    text: str,
    rules: tuple[RecommendationRule, ...] = DEFAULT_RULES,
    general: tuple[Recommendation, ...] = GENERAL_RECOMMENDATIONS,
    limit: int = MAX_RECOMMENDATIONS,
) -> list[Recommendation]:
    """Triggered rules first (table order), then the general set, capped."""
    triggered = [r.recommendation for r in rules if r.matches(text)]
    return [*triggered, *general][:limit]


# --- Insights ---


def mood_patterns_insight(anxious_count: int) -> Insight | None:
    if anxious_count <= 0:
        return None
    unit = "day" if anxious_count == 1 else "days"
    return Insight(
        type="mood-patterns",
        title="Mood Patterns",
        description="Based on your journal entries",
        content=(
            f"You've felt anxious {anxious_count} {unit} this week. Consider scheduling "
            "short breaks during your workday to practice mindfulness."
        ),
    )


def progress_insight(weekly_average: float | None) -> Insight | None:
    if weekly_average is None or weekly_average < PROGRESS_THRESHOLD:
        return None
    return Insight(
        type="progress",
        title="Progress Insight",
        description="Your weekly improvement",
        content=(
            "Your overall mood has been positive this week. Your journaling consistency "
            "is making a difference in your emotional awareness."
        ),
    )


def goals_insight(trailing_days: int, weekly: list[MoodEntry]) -> Insight:
    positive = sum(1 for e in weekly if e.known_mood in POSITIVE_MOODS)
    return Insight(
        type="goals",
        title="Goal Tracking",
        description="Progress toward your mental health goals",
        goals=(
            Goal("Daily Mindfulness", min(trailing_days, MINDFULNESS_TARGET), MINDFULNESS_TARGET),
            Goal("Journal Entries", min(len(weekly), ENTRIES_TARGET), ENTRIES_TARGET),
            Goal("Positive Reflection", min(positive, POSITIVE_TARGET), POSITIVE_TARGET),
        ),
    )


def count_mood(entries: list[MoodEntry], mood: Mood) -> int:
    return sum(1 for e in entries if e.known_mood is mood)
