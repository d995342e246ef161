"""Pytest fixtures — file-backed SQLite database, recreated for every test."""
import os

# Point the app at SQLite before it builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from event_planner.auth import create_access_token  # noqa: E402
from event_planner.database import Base, get_db  # noqa: E402
from event_planner.main import app  # noqa: E402

# Import all models so they register with Base.metadata
from event_planner.models.user import User                 # noqa: E402, F401
from event_planner.models.event import Event               # noqa: E402, F401
from event_planner.models.attendee import EventAttendee    # noqa: E402, F401
from event_planner.models.invitation import Invitation     # noqa: E402, F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session bound to the test engine."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: create users via the API and mint bearer tokens for them
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, email: str = "user@example.com", name: str = "Test User") -> dict:
    """Helper — POST /api/users and return response JSON."""
    resp = client.post("/api/users/", json={"email": email, "display_name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()


def auth_headers(user: dict) -> dict:
    """Helper — Authorization header carrying a token for `user`."""
    token = create_access_token(user["id"], user["email"])
    return {"Authorization": f"Bearer {token}"}


def create_test_event(client: TestClient, organizer: dict, title: str = "Test Event", **overrides) -> dict:
    """Helper — POST /api/events as `organizer` and return response JSON."""
    payload = {
        "title": title,
        "description": "A test event",
        "date": "2026-12-01",
        "time": "18:30:00",
        "location": "Main Hall",
    }
    payload.update(overrides)
    resp = client.post("/api/events/", json=payload, headers=auth_headers(organizer))
    assert resp.status_code == 201, resp.text
    return resp.json()
