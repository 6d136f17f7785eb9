"""Tests for streak detection."""

from datetime import date, timedelta

from moods.streaks import longest_streak, trailing_streak

TODAY = date(2024, 6, 12)


def _days(*offsets):
    return [TODAY - timedelta(days=o) for o in offsets]


class TestLongestStreak:
    def test_empty(self):
        assert longest_streak([]) == 0

    def test_single_day(self):
        assert longest_streak(_days(0)) == 1

    def test_no_gaps(self):
        assert longest_streak(_days(*range(10))) == 10

    def test_gap_returns_larger_run(self):
        # 3-day run, gap, 5-day run
        assert longest_streak(_days(0, 1, 2, 4, 5, 6, 7, 8)) == 5
        assert longest_streak(_days(0, 1, 2, 3, 4, 6, 7)) == 5

    def test_duplicates_count_once(self):
        assert longest_streak(_days(0, 0, 1, 1, 1)) == 2

    def test_unsorted_input(self):
        assert longest_streak(_days(2, 0, 1, 10)) == 3

    def test_month_boundary(self):
        days = [date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
        assert longest_streak(days) == 3


class TestTrailingStreak:
    def test_empty(self):
        assert trailing_streak([], TODAY) == 0

    def test_no_entry_today(self):
        assert trailing_streak(_days(1, 2, 3), TODAY) == 0

    def test_counts_back_from_today(self):
        assert trailing_streak(_days(0, 1, 2, 4), TODAY) == 3

    def test_capped_at_lookback(self):
        assert trailing_streak(_days(*range(20)), TODAY) == 7
        assert trailing_streak(_days(*range(20)), TODAY, lookback=3) == 3

    def test_differs_from_longest(self):
        days = _days(0, 3, 4, 5, 6)
        assert trailing_streak(days, TODAY) == 1
        assert longest_streak(days) == 4
