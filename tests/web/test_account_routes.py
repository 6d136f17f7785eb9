"""Tests for the /api/me account route."""


def test_requires_auth(client):
    res = client.get("/api/me")
    assert res.status_code in (401, 403)


def test_first_call_registers_user(client, auth_headers):
    res = client.get("/api/me", headers=auth_headers)
    assert res.status_code == 200
    data = res.json()
    assert data["id"] == "user-123"
    assert data["email"] == "test@example.com"
    assert data["entries"] == 0
    assert data["activity"] == {"days": 30, "counts": {}}


def test_counts_entries_and_activity(client, auth_headers, auth_headers_b):
    body = {"date": "2024-06-12T09:00:00", "mood": "happy", "content": "Good run"}
    first = client.post("/api/moods", json=body, headers=auth_headers).json()
    client.post("/api/moods", json=body, headers=auth_headers)
    client.delete(f"/api/moods/{first['id']}", headers=auth_headers)
    client.post("/api/moods", json=body, headers=auth_headers_b)

    data = client.get("/api/me", params={"days": 7}, headers=auth_headers).json()
    assert data["entries"] == 1
    assert data["activity"]["days"] == 7
    assert data["activity"]["counts"] == {"entry_created": 2, "entry_deleted": 1}


def test_days_validated(client, auth_headers):
    res = client.get("/api/me", params={"days": 0}, headers=auth_headers)
    assert res.status_code == 422
