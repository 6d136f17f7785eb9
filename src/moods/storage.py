"""SQLite persistence for mood entries, scoped per user."""

import json
import sqlite3
from datetime import date, datetime, time
from pathlib import Path
from typing import Iterable, Optional

import structlog

from db import wal_connect

from .models import MoodEntry, parse_mood

logger = structlog.get_logger()

MAX_CONTENT_LENGTH = 100_000
MAX_TAGS = 20
UPDATABLE_FIELDS = ("date", "mood", "content", "tags")


def parse_tags(tags: str | Iterable[str] | None) -> tuple[str, ...]:
    """Accept "a, b,,c" or a list; trim and drop empties."""
    if not tags:
        return ()
    if isinstance(tags, str):
        tags = tags.split(",")
    return tuple(t.strip() for t in tags if t and t.strip())[:MAX_TAGS]


def _normalize_date(value: datetime | date) -> datetime:
    """Naive local datetime, second precision (sortable as ISO text)."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.replace(microsecond=0)


def _validate(mood: str, content: str) -> None:
    if parse_mood(mood) is None:
        raise ValueError(f"Invalid mood '{mood}'")
    if len(content) > MAX_CONTENT_LENGTH:
        raise ValueError(f"Content exceeds max length ({MAX_CONTENT_LENGTH} chars)")


class MoodEntryStore:
    """Mood entries in a single SQLite file; every query is filtered by user_id."""

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path).expanduser()
        self._init_tables()

    def _init_tables(self):
        with wal_connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS mood_entries (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    date TIMESTAMP NOT NULL,
                    mood TEXT NOT NULL,
                    content TEXT NOT NULL DEFAULT '',
                    tags TEXT NOT NULL DEFAULT '[]',
                    created_at TIMESTAMP NOT NULL,
                    updated_at TIMESTAMP
                )
            """)
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_mood_user_date ON mood_entries(user_id, date DESC)"
            )

    def save(self, entry: MoodEntry) -> str:
        """Insert entry, return id.

        Raises:
            ValueError: If mood is not recognized or content is too long
        """
        _validate(entry.mood, entry.content)
        try:
            with wal_connect(self.db_path) as conn:
                conn.execute(
                    """INSERT INTO mood_entries
                    (id, user_id, date, mood, content, tags, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                    (
                        entry.id,
                        entry.user_id,
                        _normalize_date(entry.date).isoformat(),
                        parse_mood(entry.mood).value,
                        entry.content,
                        json.dumps(list(parse_tags(entry.tags))),
                        entry.created_at,
                        entry.updated_at,
                    ),
                )
        except sqlite3.Error as e:
            logger.error("mood_store.save_error", error=str(e), entry_id=entry.id)
        return entry.id

    def get(self, user_id: str, entry_id: str) -> Optional[MoodEntry]:
        with wal_connect(self.db_path, row_factory=True) as conn:
            row = conn.execute(
                "SELECT * FROM mood_entries WHERE id = ? AND user_id = ?",
                (entry_id, user_id),
            ).fetchone()
        return self._row_to_entry(row) if row else None

    def list_entries(
        self,
        user_id: str,
        start: Optional[datetime | date] = None,
        end: Optional[datetime | date] = None,
        limit: Optional[int] = None,
    ) -> list[MoodEntry]:
        """Entries for user, newest first. ``start``/``end`` are inclusive."""
        query = "SELECT * FROM mood_entries WHERE user_id = ?"
        params: list = [user_id]
        if start is not None:
            query += " AND date >= ?"
            params.append(_normalize_date(start).isoformat())
        if end is not None:
            if not isinstance(end, datetime):
                end = datetime.combine(end, time.max)
            query += " AND date <= ?"
            params.append(_normalize_date(end).isoformat())
        query += " ORDER BY date DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        with wal_connect(self.db_path, row_factory=True) as conn:
            rows = conn.execute(query, params).fetchall()
        return [self._row_to_entry(r) for r in rows]

    def update(self, user_id: str, entry_id: str, /, **fields) -> Optional[MoodEntry]:
        """Update any of date/mood/content/tags. Returns None if not found.

        Raises:
            ValueError: On unknown fields or invalid values
        """
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {sorted(unknown)}")

        current = self.get(user_id, entry_id)
        if current is None:
            return None

        mood = fields.get("mood", current.mood)
        content = fields.get("content", current.content)
        _validate(mood, content)

        values = {
            "date": _normalize_date(fields.get("date", current.date)).isoformat(),
            "mood": parse_mood(mood).value,
            "content": content,
            "tags": json.dumps(list(parse_tags(fields.get("tags", current.tags)))),
            "updated_at": datetime.now().isoformat(),
        }
        try:
            with wal_connect(self.db_path) as conn:
                conn.execute(
                    """UPDATE mood_entries
                    SET date = ?, mood = ?, content = ?, tags = ?, updated_at = ?
                    WHERE id = ? AND user_id = ?""",
                    (*values.values(), entry_id, user_id),
                )
        except sqlite3.Error as e:
            logger.error("mood_store.update_error", error=str(e), entry_id=entry_id)
            return None
        return self.get(user_id, entry_id)

    def delete(self, user_id: str, entry_id: str) -> bool:
        try:
            with wal_connect(self.db_path) as conn:
                cur = conn.execute(
                    "DELETE FROM mood_entries WHERE id = ? AND user_id = ?",
                    (entry_id, user_id),
                )
                return cur.rowcount > 0
        except sqlite3.Error as e:
            logger.error("mood_store.delete_error", error=str(e), entry_id=entry_id)
            return False

    def count(self, user_id: str) -> int:
        with wal_connect(self.db_path) as conn:
            (n,) = conn.execute(
                "SELECT COUNT(*) FROM mood_entries WHERE user_id = ?", (user_id,)
            ).fetchone()
        return n

    @staticmethod
    def _row_to_entry(row) -> MoodEntry:
        return MoodEntry(
            id=row["id"],
            user_id=row["user_id"],
            date=datetime.fromisoformat(row["date"]),
            mood=row["mood"],
            content=row["content"],
            tags=tuple(json.loads(row["tags"] or "[]")),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
