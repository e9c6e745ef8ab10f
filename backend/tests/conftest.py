"""Pytest fixtures: per-test SQLite database for fast, isolated tests."""
from datetime import date, time, timedelta
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from goodeats.database import Base, get_db
from goodeats.main import app
from goodeats.services.event_service import local_start_to_utc

# Import all models so they register with Base.metadata
from goodeats.models.user import User                    # noqa: F401
from goodeats.models.auth_session import AuthSession     # noqa: F401
from goodeats.models.event import Event, EventCategory   # noqa: F401
from goodeats.models.rsvp import RSVP                    # noqa: F401
from goodeats.models.post import Post, Comment, PostLike  # noqa: F401
from goodeats.models.friendship import Friendship        # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session, closed after the test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# API helpers
# ---------------------------------------------------------------------------
def sign_up(client: TestClient, username: str = "tester", password: str = "secret123") -> dict:
    """Helper: POST /api/auth/signup and return the user plus ready-made auth headers."""
    resp = client.post("/api/auth/signup", json={
        "email": f"{username}@example.com",
        "password": password,
        "username": username,
        "full_name": username.title(),
    })
    assert resp.status_code == 201, resp.text
    data = resp.json()
    return {
        "user": data["user"],
        "user_id": data["user"]["user_id"],
        "token": data["access_token"],
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
    }


def create_test_event(client: TestClient, headers: dict, **overrides) -> dict:
    """Helper: POST /api/events/ with sensible potluck defaults and return response JSON."""
    payload = {
        "title": "Sunday Potluck",
        "description": "Bring something to share",
        "event_type": "potluck",
        "date": (date.today() + timedelta(days=30)).isoformat(),
        "time": "18:00:00",
        "duration_hours": 3,
        "location_name": "Dolores Park",
        "location_address": "Dolores St & 19th St, San Francisco, CA",
        "latitude": 37.7596,
        "longitude": -122.4269,
        "max_attendees": 10,
    }
    payload.update(overrides)
    resp = client.post("/api/events/", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def rsvp(client: TestClient, event_id: str, headers: dict, **body):
    """Helper: PUT /api/events/{id}/rsvp and return the raw response."""
    body.setdefault("status", "attending")
    return client.put(f"/api/events/{event_id}/rsvp", json=body, headers=headers)


# ---------------------------------------------------------------------------
# ORM helpers for service-level tests
# ---------------------------------------------------------------------------
def make_user(db, username: str) -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        full_name=username.title(),
        password_hash="not-a-real-hash",
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_event(db, host: User, max_attendees: int = 10, days_ahead: int = 30, **overrides) -> Event:
    event_date = date.today() + timedelta(days=days_ahead)
    start = time(18, 0)
    fields = {
        "host_id": host.user_id,
        "title": "Test Dinner",
        "event_type": EventCategory.dinner,
        "date": event_date,
        "time": start,
        "timezone": "UTC",
        "starts_at_utc": local_start_to_utc(event_date, start, "UTC"),
        "location_name": "Test Kitchen",
        "location_address": "1 Test St",
        "latitude": 37.77,
        "longitude": -122.42,
        "max_attendees": max_attendees,
        "current_attendees": 0,
    }
    fields.update(overrides)
    ev = Event(**fields)
    db.add(ev)
    db.commit()
    db.refresh(ev)
    return ev
