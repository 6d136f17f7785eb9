"""Calendar-day windows (week, month, previous week) around a reference instant.

All windows are inclusive at both ends after truncating to calendar days, so
an entry stamped at 23:59 today or at 00:00 on the first day is inside. The
previous week ends the day before the current week starts; the two never
share a day.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional

from .models import MoodEntry

WEEK_DAYS = 7
MONTH_DAYS = 30


def to_day(value: datetime | date, tz: Optional[tzinfo] = None) -> date:
    """Truncate to a calendar day.

    Naive datetimes are local time. Everything is converted to ``tz`` first
    (local time when None), so a naive value only stays as-is without ``tz``.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None or tz is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


@dataclass(frozen=True)
class DayRange:
    start: date
    end: date

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(len(self))]


@dataclass(frozen=True)
class WindowedEntries:
    all: list[MoodEntry]
    week: list[MoodEntry]
    month: list[MoodEntry]
    previous_week: list[MoodEntry]


@dataclass(frozen=True)
class Windows:
    today: date
    week: DayRange
    month: DayRange
    previous_week: DayRange
    tz: Optional[tzinfo] = None

    @classmethod
    def around(cls, now: datetime) -> "Windows":
        """Build the windows for ``now`` (its own zone is the day boundary)."""
        today = now.date()
        week_start = today - timedelta(days=WEEK_DAYS - 1)
        return cls(
            today=today,
            week=DayRange(week_start, today),
            month=DayRange(today - timedelta(days=MONTH_DAYS - 1), today),
            previous_week=DayRange(
                week_start - timedelta(days=WEEK_DAYS),
                week_start - timedelta(days=1),
            ),
            tz=now.tzinfo,
        )

    def day_of(self, entry: MoodEntry) -> date:
        return to_day(entry.date, self.tz)

    def within(self, entries: Iterable[MoodEntry], window: DayRange) -> list[MoodEntry]:
        return [e for e in entries if self.day_of(e) in window]

    def split(self, entries: Iterable[MoodEntry]) -> WindowedEntries:
        entries = list(entries)
        return WindowedEntries(
            all=entries,
            week=self.within(entries, self.week),
            month=self.within(entries, self.month),
            previous_week=self.within(entries, self.previous_week),
        )
