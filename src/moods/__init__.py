from .engine import AnalyticsEngine
from .models import AnalyticsResult, MoodEntry
from .scale import DASHBOARD_SCALE, INSIGHTS_SCALE, MoodScale
from .storage import MoodEntryStore

__all__ = [
    "AnalyticsEngine",
    "AnalyticsResult",
    "MoodEntry",
    "MoodEntryStore",
    "MoodScale",
    "INSIGHTS_SCALE",
    "DASHBOARD_SCALE",
]
