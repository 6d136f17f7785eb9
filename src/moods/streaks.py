"""Consecutive-day streak detection."""

from datetime import date, timedelta
from typing import Iterable

DEFAULT_LOOKBACK_DAYS = 7


def longest_streak(days: Iterable[date]) -> int:
    """Longest run of consecutive calendar days ever logged.

    Duplicate days count once. Returns 0 for no days.
    """
    best = 0
    run = 0
    previous = None
    for day in sorted(set(days)):
        if previous is not None and day - previous == timedelta(days=1):
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = day
    return best


def trailing_streak(
    days: Iterable[date],
    today: date,
    lookback: int = DEFAULT_LOOKBACK_DAYS,
) -> int:
    """Unbroken run of logged days ending today, capped at ``lookback``.

    A day without an entry today means no active streak (0).
    """
    logged = set(days)
    count = 0
    day = today
    while count < lookback and day in logged:
        count += 1
        day -= timedelta(days=1)
    return count
