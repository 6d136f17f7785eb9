"""Account store for the web service: users seen via JWT plus their activity log."""

import json
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Iterator, Optional

import structlog

from db import wal_connect

logger = structlog.get_logger()

_DEFAULT_DB_PATH = Path(os.environ.get("MOODLOG_HOME", Path.home() / "moodlog")).expanduser() / "users.db"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id           TEXT PRIMARY KEY,
    email        TEXT,
    name         TEXT,
    created_at   TEXT NOT NULL,
    last_seen_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS activity (
    id         INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id    TEXT NOT NULL,
    action     TEXT NOT NULL,
    detail     TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_activity_user ON activity(user_id, created_at DESC);
"""


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


@contextmanager
def _session(db_path: Optional[Path] = None) -> Iterator[sqlite3.Connection]:
    """Connection that commits on success and always closes."""
    conn = wal_connect(db_path or _DEFAULT_DB_PATH, row_factory=True)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def init_db(db_path: Optional[Path] = None) -> None:
    with _session(db_path) as conn:
        conn.executescript(_SCHEMA)


def touch_user(
    user_id: str,
    email: Optional[str] = None,
    name: Optional[str] = None,
    db_path: Optional[Path] = None,
) -> dict[str, Any]:
    """Register on first sight, otherwise refresh last_seen_at and any new claims."""
    now = _utcnow()
    with _session(db_path) as conn:
        known = conn.execute("SELECT 1 FROM users WHERE id = ?", (user_id,)).fetchone()
        conn.execute(
            """INSERT INTO users (id, email, name, created_at, last_seen_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                email = COALESCE(excluded.email, users.email),
                name = COALESCE(excluded.name, users.name),
                last_seen_at = excluded.last_seen_at""",
            (user_id, email, name, now, now),
        )
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    if known is None:
        logger.info("accounts.user_registered", user_id=user_id)
    return dict(row)


def get_user(user_id: str, db_path: Optional[Path] = None) -> Optional[dict[str, Any]]:
    with _session(db_path) as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
    return dict(row) if row else None


def record_activity(
    user_id: str,
    action: str,
    detail: Optional[dict] = None,
    db_path: Optional[Path] = None,
) -> None:
    """Append to the user's activity log. Write failures are logged, not raised."""
    try:
        with _session(db_path) as conn:
            conn.execute(
                "INSERT INTO activity (user_id, action, detail, created_at) VALUES (?, ?, ?, ?)",
                (user_id, action, json.dumps(detail) if detail else None, _utcnow()),
            )
    except sqlite3.Error as e:
        logger.warning("accounts.activity_write_failed", user_id=user_id, action=action, error=str(e))


def activity_counts(user_id: str, days: int = 30, db_path: Optional[Path] = None) -> dict[str, int]:
    """Action -> count for one user over the last ``days`` days."""
    cutoff = (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()
    with _session(db_path) as conn:
        rows = conn.execute(
            """SELECT action, COUNT(*) AS n FROM activity
            WHERE user_id = ? AND created_at >= ?
            GROUP BY action ORDER BY n DESC, action""",
            (user_id, cutoff),
        ).fetchall()
    return {r["action"]: r["n"] for r in rows}
