"""Integration tests for the authenticated notification inbox endpoints."""

from __future__ import annotations

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from app.domain.entities import NotificationType
from app.infrastructure.security import create_access_token
from main import create_app

from conftest import NOW


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def _auth(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


def test_requires_authentication(client: TestClient) -> None:
    assert client.get("/notifications/").status_code == 401
    response = client.get(
        "/notifications/", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 401


def test_list_filters_and_counts(
    client: TestClient, make_profile, make_event, make_notification
) -> None:
    user = make_profile()
    other = make_profile()
    event = make_event(starts_in=timedelta(days=1))
    make_notification(
        user,
        event=event,
        notification_type=NotificationType.REMINDER,
        created_at=NOW - timedelta(hours=1),
        title="Reminder",
    )
    make_notification(user, title="Update", created_at=NOW)
    make_notification(user, title="Old", is_read=True, created_at=NOW - timedelta(days=1))
    make_notification(other, title="Not yours")

    listed = client.get("/notifications/", headers=_auth(user.id)).json()
    assert [n["title"] for n in listed] == ["Update", "Reminder", "Old"]
    assert listed[1]["event"]["title"] == "Jazz in the Park"
    assert listed[0]["event"] is None

    reminders = client.get(
        "/notifications/", params={"type": "reminder"}, headers=_auth(user.id)
    ).json()
    assert [n["title"] for n in reminders] == ["Reminder"]

    unread = client.get(
        "/notifications/", params={"unread_only": True}, headers=_auth(user.id)
    ).json()
    assert len(unread) == 2

    count = client.get("/notifications/unread-count", headers=_auth(user.id))
    assert count.json() == {"count": 2}


def test_mark_read_flows(client: TestClient, make_profile, make_notification) -> None:
    user = make_profile()
    other = make_profile()
    first = make_notification(user)
    second = make_notification(user)
    third = make_notification(user)

    single = client.post(f"/notifications/{first.id}/read", headers=_auth(user.id))
    assert single.status_code == 200
    assert single.json()["is_read"] is True

    forbidden = client.post(f"/notifications/{second.id}/read", headers=_auth(other.id))
    assert forbidden.status_code == 404

    batch = client.post(
        "/notifications/read",
        json={"ids": [second.id, second.id, first.id]},
        headers=_auth(user.id),
    )
    assert batch.json() == {"updated": 1}

    remaining = client.post("/notifications/read-all", headers=_auth(user.id))
    assert remaining.json() == {"updated": 1}
    assert third.id is not None
    assert client.get("/notifications/unread-count", headers=_auth(user.id)).json() == {
        "count": 0
    }


def test_delete_notifications(client: TestClient, make_profile, make_notification) -> None:
    user = make_profile()
    first = make_notification(user)
    make_notification(user)

    assert client.delete(f"/notifications/{first.id}", headers=_auth(user.id)).status_code == 204
    assert client.delete(f"/notifications/{first.id}", headers=_auth(user.id)).status_code == 404

    cleared = client.delete("/notifications/", headers=_auth(user.id))
    assert cleared.json() == {"updated": 1}
    assert client.get("/notifications/", headers=_auth(user.id)).json() == []


def test_preferences_round_trip(client: TestClient, make_profile) -> None:
    user = make_profile()

    defaults = client.get("/notifications/preferences", headers=_auth(user.id)).json()
    assert defaults["email_enabled"] is True
    assert defaults["reminder_hours"] == [24, 1]

    updated = client.put(
        "/notifications/preferences",
        json={"email_enabled": False, "reminder_hours": [1]},
        headers=_auth(user.id),
    ).json()
    assert updated["email_enabled"] is False
    assert updated["reminders_enabled"] is True
    assert updated["reminder_hours"] == [1]

    rejected = client.put(
        "/notifications/preferences",
        json={"reminder_hours": [-2]},
        headers=_auth(user.id),
    )
    assert rejected.status_code == 400


def test_websocket_sends_pending_and_handles_ack(
    client: TestClient, make_profile, make_notification
) -> None:
    user = make_profile()
    pending = make_notification(user, title="Pending")
    token = create_access_token({"sub": user.id})

    with client.websocket_connect(f"/notifications/ws?token={token}") as websocket:
        init = websocket.receive_json()
        assert init["type"] == "init"
        assert [item["id"] for item in init["data"]] == [pending.id]

        websocket.send_json({"type": "ack", "ids": [pending.id]})
        websocket.send_json({"type": "ping"})
        assert websocket.receive_json() == {"type": "pong"}

    count = client.get("/notifications/unread-count", headers=_auth(user.id))
    assert count.json() == {"count": 0}


def test_websocket_rejects_invalid_token(client: TestClient) -> None:
    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/notifications/ws?token=invalid") as websocket:
            websocket.receive_json()
