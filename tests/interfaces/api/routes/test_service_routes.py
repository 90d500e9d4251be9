"""Integration tests for the timer-invoked service endpoints."""

from __future__ import annotations

import types
from datetime import timedelta, timezone

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.application.use_cases.reminders import ReminderScheduler
from app.domain.entities import ReminderPolicy
from app.infrastructure.database import get_db
from app.infrastructure.email import EmailSender, EmailSettings
from app.infrastructure.repositories import NotificationRepository
from app.interfaces.api.dependencies import get_email_sender, get_reminder_scheduler
from main import create_app

from conftest import NOW, SERVICE_HEADERS


class AcceptingClient:
    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        return types.SimpleNamespace(status_code=202, body=None)


@pytest.fixture()
def app():
    application = create_app()

    def fixed_clock_scheduler(db: Session = Depends(get_db)) -> ReminderScheduler:
        return ReminderScheduler(
            db, policy=ReminderPolicy(), timezone=timezone.utc, clock=lambda: NOW
        )

    application.dependency_overrides[get_reminder_scheduler] = fixed_clock_scheduler
    return application


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def _email_payload(notification_id: str) -> dict:
    return {
        "notification_id": notification_id,
        "user_email": "user@example.com",
        "user_name": "Ada",
        "notification_type": "reminder",
        "title": "Event Tomorrow: Jazz in the Park",
        "message": "See you there",
        "event_title": "Jazz in the Park",
        "event_date": "2026-10-17",
        "event_time": "12:00:00",
        "event_location": "Central Park",
    }


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("post", "/reminders/schedule"),
        ("post", "/notifications/archive"),
        ("post", "/events/some-event/notifications"),
    ],
)
def test_service_endpoints_require_service_key(client: TestClient, method, path) -> None:
    response = getattr(client, method)(
        path, headers={"Authorization": "Bearer wrong-key"}, json={"type": "cancellation"}
    )

    assert response.status_code == 401


def test_schedule_reminders_reports_count(
    client: TestClient, session, make_profile, make_event, attend
) -> None:
    event = make_event(starts_in=timedelta(hours=24))
    attend(make_profile(), event)
    attend(make_profile(), event)

    first = client.post("/reminders/schedule", headers=SERVICE_HEADERS)
    second = client.post("/reminders/schedule", headers=SERVICE_HEADERS)

    assert first.status_code == 200
    assert first.json() == {"success": True, "reminders_sent": 2, "error": None}
    assert second.json()["reminders_sent"] == 0


def test_schedule_reminders_failure_returns_500(app, client: TestClient) -> None:
    class BrokenScheduler:
        def run(self) -> int:
            raise RuntimeError("database unavailable")

    app.dependency_overrides[get_reminder_scheduler] = lambda: BrokenScheduler()

    response = client.post("/reminders/schedule", headers=SERVICE_HEADERS)

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "reminders_sent": 0,
        "error": "database unavailable",
    }


def test_send_email_without_configuration_fails(
    client: TestClient, session, make_profile, make_notification
) -> None:
    """An unconfigured transport is reported and the notification stays unsent."""

    notification = make_notification(make_profile())

    response = client.post(
        "/notifications/send-email",
        headers=SERVICE_HEADERS,
        json=_email_payload(notification.id),
    )

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "notification_id": notification.id,
        "error": "SENDGRID_API_KEY is not configured",
    }
    session.expire_all()
    assert NotificationRepository(session).get(notification.id).email_sent is False


def test_send_email_marks_notification(
    app, client: TestClient, session, make_profile, make_notification
) -> None:
    notification = make_notification(make_profile())
    app.dependency_overrides[get_email_sender] = lambda: EmailSender(
        EmailSettings(api_key="SG.fake", sender="noreply@example.com"),
        client_factory=AcceptingClient,
    )

    response = client.post(
        "/notifications/send-email",
        headers=SERVICE_HEADERS,
        json=_email_payload(notification.id),
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    session.expire_all()
    assert NotificationRepository(session).get(notification.id).email_sent is True


def test_send_email_rejects_invalid_address(client: TestClient) -> None:
    payload = _email_payload("n-1")
    payload["user_email"] = "not-an-email"

    response = client.post("/notifications/send-email", headers=SERVICE_HEADERS, json=payload)

    assert response.status_code == 422


def test_archive_endpoint_deletes_old_read_notifications(
    client: TestClient, session, make_profile, make_notification
) -> None:
    user = make_profile()
    make_notification(user, created_at=NOW - timedelta(days=400), is_read=True)
    make_notification(user, created_at=NOW - timedelta(days=400), is_read=False)

    response = client.post("/notifications/archive", headers=SERVICE_HEADERS)

    assert response.status_code == 200
    assert response.json()["deleted"] == 1


def test_event_update_fan_out(
    client: TestClient, session, make_profile, make_event, attend
) -> None:
    event = make_event(starts_in=timedelta(days=3))
    attendee = make_profile()
    attend(attendee, event)

    response = client.post(
        f"/events/{event.id}/notifications",
        headers=SERVICE_HEADERS,
        json={"type": "update", "changes": {"time": {"old": "12:00", "new": "13:00"}}},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "notified": 1}
    session.expire_all()
    (notification,) = NotificationRepository(session).list_for_user(attendee.id)
    assert notification.title == "Event Updated: Jazz in the Park"


def test_event_update_without_changes_is_rejected(client: TestClient, make_event) -> None:
    event = make_event(starts_in=timedelta(days=3))

    response = client.post(
        f"/events/{event.id}/notifications",
        headers=SERVICE_HEADERS,
        json={"type": "update"},
    )

    assert response.status_code == 400


def test_unknown_event_is_404(client: TestClient) -> None:
    response = client.post(
        "/events/missing/rsvp-notifications",
        headers=SERVICE_HEADERS,
        json={"user_id": "someone", "action": "rsvp"},
    )

    assert response.status_code == 404


def test_rsvp_confirmation(client: TestClient, make_profile, make_event) -> None:
    event = make_event(starts_in=timedelta(days=3))
    user = make_profile()

    response = client.post(
        f"/events/{event.id}/rsvp-notifications",
        headers=SERVICE_HEADERS,
        json={"user_id": user.id, "action": "rsvp"},
    )

    assert response.json() == {"success": True, "notified": 1}


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}
