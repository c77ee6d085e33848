"""Shared pytest fixtures: each test gets an app over its own in-memory SQLite database."""

import logging
from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from technotes.config import Settings
from technotes.database import Database
from technotes.main import create_app

# aiosqlite DEBUG output drowns the test report
logging.getLogger("aiosqlite").setLevel(logging.WARNING)

ALLOWED_ORIGIN = "http://localhost:3000"


@pytest.fixture
def test_settings(tmp_path):
    """Settings for an isolated app: SQLite in memory, no Redis, logs under tmp."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        secret_key="test-secret-key",
        debug=True,
        redis_enabled=False,
        refresh_cookie_secure=False,
        cors_origins=[ALLOWED_ORIGIN],
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture
def database(test_settings):
    """Unconnected handle; StaticPool keeps one in-memory database across sessions."""
    return Database(
        test_settings.database_url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


@pytest.fixture
async def db_session(database):
    """A session on a freshly created schema, for repository tests."""
    await database.connect()
    await database.create_tables()
    async with database.session() as session:
        yield session
    await database.drop_tables()
    await database.disconnect()


@pytest.fixture
def app(test_settings, database):
    return create_app(settings=test_settings, database=database)


@pytest.fixture
def client(app):
    """Test client with the lifespan running (database connected, tables created)."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(client):
    """Create a user through the API and return its JSON representation."""

    def _make_user(
        username: str = "alice",
        password: str = "Passw0rd!",
        roles: Optional[list] = None,
    ) -> dict:
        payload = {"username": username, "password": password}
        if roles is not None:
            payload["roles"] = roles
        response = client.post("/api/v1/users", json=payload)
        assert response.status_code == 201, response.text
        users = client.get("/api/v1/users").json()
        return next(user for user in users if user["username"] == username)

    return _make_user


@pytest.fixture
def make_note(client):
    """Create a note through the API and return its JSON representation."""

    def _make_note(user_id: str, title: str = "Printer jam", text: str = "Tray 2 keeps jamming") -> dict:
        response = client.post("/api/v1/notes", json={"user": user_id, "title": title, "text": text})
        assert response.status_code == 201, response.text
        notes = client.get("/api/v1/notes").json()
        return next(note for note in notes if note["title"] == title)

    return _make_note
