"""Tests for MoodEntryStore."""

from datetime import date, datetime, timedelta, timezone

import pytest

from moods.models import MoodEntry
from moods.storage import MoodEntryStore, parse_tags


@pytest.fixture
def store(tmp_path):
    return MoodEntryStore(tmp_path / "moods.db")


def _entry(mood="happy", when=datetime(2024, 6, 12, 9, 0), user_id="u1", **kw):
    return MoodEntry(user_id=user_id, date=when, mood=mood, **kw)


def test_save_and_get(store):
    entry = _entry(content="Sunny", tags=("walk", "outside"))
    eid = store.save(entry)
    assert eid == entry.id

    loaded = store.get("u1", eid)
    assert loaded.mood == "happy"
    assert loaded.content == "Sunny"
    assert loaded.tags == ("walk", "outside")
    assert loaded.date == datetime(2024, 6, 12, 9, 0)


def test_mood_normalized_on_save(store):
    eid = store.save(_entry(mood=" Calm "))
    assert store.get("u1", eid).mood == "calm"


def test_invalid_mood_rejected(store):
    with pytest.raises(ValueError, match="Invalid mood"):
        store.save(_entry(mood="bored"))
    assert store.count("u1") == 0


def test_entries_scoped_to_user(store):
    eid = store.save(_entry(user_id="u1"))
    store.save(_entry(user_id="u2"))
    assert store.get("u2", eid) is None
    assert len(store.list_entries("u1")) == 1
    assert store.delete("u2", eid) is False


def test_list_newest_first(store):
    base = datetime(2024, 6, 12, 9, 0)
    for i in range(3):
        store.save(_entry(when=base - timedelta(days=i), content=str(i)))
    assert [e.content for e in store.list_entries("u1")] == ["0", "1", "2"]
    assert len(store.list_entries("u1", limit=2)) == 2


def test_list_range_inclusive(store):
    for day in (5, 6, 7, 8):
        store.save(_entry(when=datetime(2024, 6, day, 23, 59, 59)))
    rows = store.list_entries("u1", start=date(2024, 6, 6), end=date(2024, 6, 7))
    assert [e.date.day for e in rows] == [7, 6]


def test_aware_dates_stored_as_local(store):
    aware = datetime(2024, 6, 12, 9, 0, tzinfo=timezone.utc)
    eid = store.save(_entry(when=aware))
    assert store.get("u1", eid).date == aware.astimezone().replace(tzinfo=None)


def test_partial_update(store):
    eid = store.save(_entry(content="before", tags=("a",)))
    updated = store.update("u1", eid, mood="tired", tags="x, y")
    assert updated.mood == "tired"
    assert updated.content == "before"
    assert updated.tags == ("x", "y")
    assert updated.updated_at is not None


def test_update_missing_returns_none(store):
    assert store.update("u1", "nope", content="x") is None


def test_update_rejects_bad_values(store):
    eid = store.save(_entry())
    with pytest.raises(ValueError):
        store.update("u1", eid, mood="meh")
    with pytest.raises(ValueError, match="Cannot update"):
        store.update("u1", eid, user_id="u2")
    with pytest.raises(ValueError, match="Cannot update"):
        store.update("u1", eid, id="other", created_at="2020-01-01")
    assert store.get("u1", eid).user_id == "u1"


def test_delete(store):
    eid = store.save(_entry())
    assert store.delete("u1", eid) is True
    assert store.get("u1", eid) is None
    assert store.delete("u1", eid) is False


def test_count(store):
    for _ in range(3):
        store.save(_entry())
    assert store.count("u1") == 3
    assert store.count("u2") == 0


class TestParseTags:
    def test_comma_string(self):
        assert parse_tags("work, family,, ,sleep ") == ("work", "family", "sleep")

    def test_list(self):
        assert parse_tags([" a ", "", "b"]) == ("a", "b")

    def test_empty(self):
        assert parse_tags(None) == ()
        assert parse_tags("") == ()
