"""Builders for the notification records produced by the application."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Literal

from app.domain.entities import Event, Notification, NotificationType, ReminderWindow
from app.utils import now_in_app_timezone

RsvpAction = Literal["rsvp", "cancel"]


def format_reminder_notification(
    event: Event,
    window: ReminderWindow,
    *,
    user_id: str,
    created_at: datetime | None = None,
) -> Notification:
    """Return the reminder sent ``window.bucket`` before ``event`` starts."""

    event_time = event.formatted_time()
    if window.bucket == "24h":
        title = f"Event Tomorrow: {event.title}"
        message = (
            f'Your event "{event.title}" is tomorrow at {event_time} '
            f"at {event.location_name}"
        )
    else:
        lead = "1 hour" if window.lead_hours == 1 else f"{window.lead_hours} hours"
        title = f"Event Starting Soon: {event.title}"
        message = f'Your event "{event.title}" starts in {lead} at {event.location_name}'

    return Notification(
        id=None,
        user_id=user_id,
        event_id=event.id,
        type=NotificationType.REMINDER,
        title=title,
        message=message,
        metadata={
            "reminder_type": window.bucket,
            "event_date": event.date.isoformat(),
            "event_time": event_time,
        },
        created_at=created_at,
    )


def format_confirmation_notification(
    event: Event, action: RsvpAction, *, user_id: str
) -> Notification:
    is_rsvp = action == "rsvp"
    event_time = event.formatted_time()
    if is_rsvp:
        title = f"RSVP Confirmed: {event.title}"
        message = (
            f'You\'re going to "{event.title}" on {event.date.isoformat()} at '
            f"{event_time}. Location: {event.location_name}"
        )
    else:
        title = f"RSVP Cancelled: {event.title}"
        message = f'You\'ve cancelled your RSVP for "{event.title}"'
    return Notification(
        id=None,
        user_id=user_id,
        event_id=event.id,
        type=NotificationType.CONFIRMATION,
        title=title,
        message=message,
        metadata={
            "action": action,
            "event_date": event.date.isoformat(),
            "event_time": event_time,
        },
    )


def format_update_notification(
    event: Event,
    changes: Mapping[str, Mapping[str, str]],
    *,
    user_id: str,
) -> Notification:
    """Describe what changed on ``event``; ``changes`` maps field to old/new."""

    changes_list = ", ".join(
        f"{field}: {values.get('old')} → {values.get('new')}"
        for field, values in changes.items()
    )
    return Notification(
        id=None,
        user_id=user_id,
        event_id=event.id,
        type=NotificationType.UPDATE,
        title=f"Event Updated: {event.title}",
        message=f'The event "{event.title}" has been updated. Changes: {changes_list}',
        metadata={"changes": {field: dict(values) for field, values in changes.items()}},
    )


def format_cancellation_notification(event: Event, *, user_id: str) -> Notification:
    return Notification(
        id=None,
        user_id=user_id,
        event_id=event.id,
        type=NotificationType.CANCELLATION,
        title=f"Event Cancelled: {event.title}",
        message=(
            f'The event "{event.title}" scheduled for {event.date.isoformat()} at '
            f"{event.formatted_time()} has been cancelled by the organizer."
        ),
        metadata={"cancelled_at": now_in_app_timezone().isoformat()},
    )


__all__ = [
    "RsvpAction",
    "format_cancellation_notification",
    "format_confirmation_notification",
    "format_reminder_notification",
    "format_update_notification",
]
