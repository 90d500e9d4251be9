"""Shared fixtures: a throwaway SQLite database and small data builders."""

from __future__ import annotations

import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "event_finder_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["JWT_SECRET"] = "test-jwt-secret"
os.environ["SERVICE_ROLE_KEY"] = "test-service-key"
os.environ["APP_TIMEZONE"] = "UTC"
os.environ["SITE_URL"] = "https://events.example.com"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from app.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.domain.entities import Event, Notification, NotificationType, Profile  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.repositories import (  # noqa: E402
    AttendeeRepository,
    EventRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
    ProfileRepository,
)

NOW = datetime(2026, 10, 16, 12, 0, tzinfo=timezone.utc)
SERVICE_HEADERS = {"Authorization": "Bearer test-service-key"}


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_profile(session):
    counter = {"value": 0}

    def _make(email: str | None = None, full_name: str | None = "Test User") -> Profile:
        counter["value"] += 1
        return ProfileRepository(session).create(
            Profile(
                id="",
                email=email or f"user{counter['value']}@example.com",
                full_name=full_name,
            )
        )

    return _make


@pytest.fixture()
def make_event(session, make_profile):
    organizer = {}

    def _make(
        *,
        starts_in: timedelta,
        title: str = "Jazz in the Park",
        location: str = "Central Park",
        now: datetime = NOW,
    ) -> Event:
        if "profile" not in organizer:
            organizer["profile"] = make_profile(email="organizer@example.com")
        starts_at = now + starts_in
        return EventRepository(session).create(
            Event(
                id="",
                title=title,
                date=starts_at.date(),
                time=starts_at.time().replace(tzinfo=None),
                location_name=location,
                organizer_id=organizer["profile"].id,
                category="music",
            )
        )

    return _make


@pytest.fixture()
def attend(session):
    def _attend(profile: Profile, event: Event) -> None:
        AttendeeRepository(session).add(user_id=profile.id, event_id=event.id)

    return _attend


@pytest.fixture()
def set_preferences(session):
    def _set(profile: Profile, **changes) -> None:
        NotificationPreferenceRepository(session).upsert(profile.id, changes)

    return _set


@pytest.fixture()
def make_notification(session):
    def _make(
        profile: Profile,
        *,
        created_at: datetime = NOW,
        is_read: bool = False,
        notification_type: NotificationType = NotificationType.UPDATE,
        event: Event | None = None,
        title: str = "Something changed",
    ) -> Notification:
        return NotificationRepository(session).create(
            Notification(
                id=None,
                user_id=profile.id,
                event_id=event.id if event else None,
                type=notification_type,
                title=title,
                message="Details",
                is_read=is_read,
                created_at=created_at,
            )
        )

    return _make
