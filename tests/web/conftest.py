"""Shared fixtures for web API tests."""

import os
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from moods.storage import MoodEntryStore
from web.user_store import init_db


@pytest.fixture
def jwt_secret():
    return "test-moodlog-secret"


def _make_auth_token(jwt_secret, user_id, email="u@test.com", name="U"):
    return jwt.encode(
        {"sub": user_id, "email": email, "name": name},
        jwt_secret,
        algorithm="HS256",
    )


@pytest.fixture
def auth_headers(jwt_secret):
    token = _make_auth_token(jwt_secret, "user-123", "test@example.com", "Test")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers_b(jwt_secret):
    """Second user for isolation tests."""
    token = _make_auth_token(jwt_secret, "user-456", "b@test.com", "UserB")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def users_db(tmp_path):
    db_path = tmp_path / "users.db"
    init_db(db_path)
    return db_path


@pytest.fixture
def mood_store(tmp_path):
    return MoodEntryStore(tmp_path / "moods.db")


@pytest.fixture
def client(jwt_secret, users_db, mood_store):
    """Test client backed by tmp databases."""
    patches = [
        patch.dict(os.environ, {"MOODLOG_JWT_SECRET": jwt_secret}),
        patch("web.routes.moods.get_store", return_value=mood_store),
        patch("web.routes.insights.get_store", return_value=mood_store),
        patch("web.routes.account.get_store", return_value=mood_store),
        patch("web.user_store._DEFAULT_DB_PATH", users_db),
    ]
    for p in patches:
        p.start()

    from web.app import app

    yield TestClient(app)

    for p in reversed(patches):
        p.stop()
