"""Shared fixtures: an isolated app per test with its own store and upload dir."""

import json

import pytest
from fastapi.testclient import TestClient

from playlist_server.app.core.config import Settings
from playlist_server.app.main import create_app


PASSWORD = "abc123"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        data_file=str(tmp_path / "db" / "users.json"),
        upload_dir=str(tmp_path / "uploads"),
        public_dir=str(tmp_path / "public"),
        session_ttl_minutes=0,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def read_store(settings):
    """Return the raw JSON document currently on disk (``None`` if absent)."""

    def _read():
        path = settings.data_path
        if not path.exists():
            return None
        return json.loads(path.read_text(encoding="utf-8"))

    return _read


def user_payload(username="alice", password=PASSWORD, **overrides):
    payload = {
        "username": username,
        "password": password,
        "email": f"{username}@example.com",
        "firstName": "Alice",
        "lastName": "Liddell",
        "imageUrl": "https://example.com/avatar.png",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def login(client):
    """Register (if needed) and log in ``username``; returns the profile."""

    def _login(username="alice", password=PASSWORD):
        client.post("/api/register", json=user_payload(username, password))
        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return response.json()["user"]

    return _login


@pytest.fixture
def playlist(client, login):
    """Log in as alice and create a playlist; returns its JSON."""
    login()
    response = client.post("/api/playlists", json={"name": "Road Trip"})
    assert response.status_code == 200, response.text
    return response.json()
