"""Use cases backing a user's notification inbox."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import EventSummary, Notification, NotificationType
from app.infrastructure.repositories import EventRepository, NotificationRepository


@dataclass
class InboxItem:
    notification: Notification
    event: EventSummary | None = None


def list_notifications(
    session: Session,
    user_id: str,
    *,
    limit: int = 50,
    offset: int = 0,
    notification_type: NotificationType | None = None,
    unread_only: bool = False,
) -> Sequence[InboxItem]:
    """Return the user's notifications, newest first, with event summaries."""

    notifications = NotificationRepository(session).list_for_user(
        user_id,
        limit=limit,
        offset=offset,
        notification_type=notification_type,
        unread_only=unread_only,
    )
    events = EventRepository(session).get_summaries(
        [n.event_id for n in notifications if n.event_id]
    )
    return [
        InboxItem(notification=n, event=events.get(n.event_id) if n.event_id else None)
        for n in notifications
    ]


def count_unread(session: Session, user_id: str) -> int:
    return NotificationRepository(session).count_unread(user_id)


def mark_as_read(session: Session, user_id: str, notification_id: str) -> Notification:
    notification = NotificationRepository(session).mark_as_read(
        notification_id, user_id=user_id
    )
    if notification is None:
        raise ValueError("Notification not found")
    return notification


def mark_many_as_read(
    session: Session, user_id: str, notification_ids: Sequence[str]
) -> int:
    return NotificationRepository(session).mark_many_as_read(
        notification_ids, user_id=user_id
    )


def mark_all_as_read(session: Session, user_id: str) -> int:
    return NotificationRepository(session).mark_all_as_read(user_id)


def delete_notification(session: Session, user_id: str, notification_id: str) -> None:
    if not NotificationRepository(session).delete(notification_id, user_id=user_id):
        raise ValueError("Notification not found")


def delete_all_notifications(session: Session, user_id: str) -> int:
    return NotificationRepository(session).delete_all_for_user(user_id)


__all__ = [
    "InboxItem",
    "count_unread",
    "delete_all_notifications",
    "delete_notification",
    "list_notifications",
    "mark_all_as_read",
    "mark_as_read",
    "mark_many_as_read",
]
