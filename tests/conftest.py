"""Shared test fixtures and configuration."""
import os

# Keep the app's own engine off the developer's database file
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from campusvibe.main import app
from campusvibe.db.base import Base
from campusvibe.db.models import Checkin, Event, Message, Rsvp, Thread
from campusvibe.api.deps import get_db
from campusvibe.core.constants import EventStatus
from campusvibe.core.rate_limit import limiter
from campusvibe.core.security import create_access_token, create_user_token


# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

# SINES, NUST H-12 campus
VENUE_LAT = 33.6425
VENUE_LNG = 72.9905


@pytest.fixture(autouse=True)
def disable_rate_limiting_for_tests(request):
    """Disable rate limiting for all tests except rate limiting tests."""
    if "rate_limit" in request.keywords:
        limiter.reset()
        yield
        limiter.reset()
    else:
        limiter.enabled = False
        yield
        limiter.enabled = True


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh database for each test."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(db_engine):
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with a test database."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_token():
    """Generate a valid admin JWT token."""
    return create_access_token({"is_admin": True})


@pytest.fixture
def admin_client(client, admin_token):
    """Create a test client with admin cookie already set."""
    client.cookies.set("admin_token", admin_token)
    return client


@pytest.fixture
def user_id():
    return "student-42"


@pytest.fixture
def user_headers(user_id):
    """Bearer header for a signed-in student."""
    return {"Authorization": f"Bearer {create_user_token(user_id)}"}


@pytest.fixture
def make_event(db_session):
    """Factory inserting an event straight into the database (approved by default)."""
    def _make_event(**overrides):
        now = datetime.now(timezone.utc)
        fields = {
            "title": "Spring Music Night",
            "start_time": now - timedelta(minutes=30),
            "end_time": now + timedelta(hours=2),
            "venue_name": "SINES",
            "venue_lat": VENUE_LAT,
            "venue_lng": VENUE_LNG,
            "tags": ["music"],
            "status": EventStatus.APPROVED.value,
        }
        fields.update(overrides)
        event = Event(**fields)
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event

    return _make_event


@pytest.fixture
def event(make_event):
    return make_event()


@pytest.fixture
def add_checkins(db_session):
    """Insert check-ins with the given sentiments for distinct users."""
    def _add_checkins(event_id, sentiments, prefix="user"):
        for i, sentiment in enumerate(sentiments):
            db_session.add(Checkin(event_id=event_id, user_id=f"{prefix}-{i}", sentiment=sentiment))
        db_session.commit()

    return _add_checkins


@pytest.fixture
def add_rsvps(db_session):
    """Insert ``count`` RSVPs for distinct users."""
    def _add_rsvps(event_id, count, prefix="rsvp"):
        for i in range(count):
            db_session.add(Rsvp(event_id=event_id, user_id=f"{prefix}-{i}"))
        db_session.commit()

    return _add_rsvps


@pytest.fixture
def make_thread(db_session):
    """Factory inserting a topic room (active by default)."""
    def _make_thread(**overrides):
        fields = {"title": "Hostel Life", "description": "Mess food reviews", "emoji": "🏠"}
        fields.update(overrides)
        thread = Thread(**fields)
        db_session.add(thread)
        db_session.commit()
        db_session.refresh(thread)
        return thread

    return _make_thread


@pytest.fixture
def thread(make_thread):
    return make_thread()


@pytest.fixture
def add_messages(db_session):
    """Insert messages into a room, one per text, and return them in order."""
    def _add_messages(thread_id, texts, user_id="chatter"):
        messages = [Message(thread_id=thread_id, user_id=user_id, content=text) for text in texts]
        db_session.add_all(messages)
        db_session.commit()
        return messages

    return _add_messages
