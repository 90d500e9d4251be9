"""Utility helpers to generate and deliver event notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.domain.entities import Event, Notification
from app.infrastructure.email import EmailConfigurationError, EmailDeliveryError
from app.infrastructure.repositories import (
    AttendeeRepository,
    EventRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
    ProfileRepository,
)

from .dispatch_email import NotificationDispatcher
from .email_templates import EmailRequest
from .preferences import is_notification_enabled
from .templates import (
    RsvpAction,
    format_cancellation_notification,
    format_confirmation_notification,
    format_update_notification,
)

logger = logging.getLogger(__name__)

Publish = Callable[[Notification], None]


@dataclass
class DeliveryResult:
    notification: Notification | None
    skipped: bool = False
    email_sent: bool = False


def _email_request(
    notification: Notification, *, email: str, name: str | None, event: Event | None
) -> EmailRequest:
    return EmailRequest(
        notification_id=notification.id or "",
        user_email=email,
        user_name=name,
        notification_type=notification.type.value,
        title=notification.title,
        message=notification.message,
        event_title=event.title if event else None,
        event_date=event.date.isoformat() if event else None,
        event_time=event.formatted_time() if event else None,
        event_location=event.location_name if event else None,
    )


def create_notification_with_preference_check(
    session: Session,
    notification: Notification,
    *,
    dispatcher: NotificationDispatcher | None = None,
    publish: Publish | None = None,
) -> DeliveryResult:
    """Persist ``notification`` when the user allows its type, then email it.

    Email failures are logged and reflected in ``email_sent``; the stored
    notification is kept either way.
    """

    preference = NotificationPreferenceRepository(session).get_for_user(
        notification.user_id
    )
    if not is_notification_enabled(preference, notification.type):
        return DeliveryResult(notification=None, skipped=True)

    saved = NotificationRepository(session).create(notification)
    if publish is not None:
        publish(saved)

    email_enabled = preference.email_enabled if preference is not None else True
    if dispatcher is None or not email_enabled:
        return DeliveryResult(notification=saved)

    profile = ProfileRepository(session).get(saved.user_id)
    if profile is None or not profile.email:
        return DeliveryResult(notification=saved)

    event = EventRepository(session).get(saved.event_id) if saved.event_id else None
    request = _email_request(saved, email=profile.email, name=profile.full_name, event=event)
    try:
        dispatcher.dispatch(request)
    except (EmailConfigurationError, EmailDeliveryError) as exc:
        logger.warning("Could not email notification %s: %s", saved.id, exc)
        return DeliveryResult(notification=saved)

    saved.email_sent = True
    return DeliveryResult(notification=saved, email_sent=True)


def notify_event_attendees(
    session: Session,
    *,
    event: Event,
    build: Callable[[str], Notification],
    dispatcher: NotificationDispatcher | None = None,
    publish: Publish | None = None,
) -> int:
    """Send the notification produced by ``build(user_id)`` to every attendee.

    Returns the number of notifications created.
    """

    attendees = AttendeeRepository(session).list_for_event(event.id)
    created = 0
    for attendee in attendees:
        result = create_notification_with_preference_check(
            session,
            build(attendee.user_id),
            dispatcher=dispatcher,
            publish=publish,
        )
        if result.notification is not None:
            created += 1
    logger.info(
        "Notified %s of %s attendee(s) of event %s", created, len(attendees), event.id
    )
    return created


def notify_event_updated(
    session: Session,
    *,
    event: Event,
    changes: Mapping[str, Mapping[str, str]],
    dispatcher: NotificationDispatcher | None = None,
    publish: Publish | None = None,
) -> int:
    if not changes:
        raise ValueError("At least one change is required")
    return notify_event_attendees(
        session,
        event=event,
        build=lambda user_id: format_update_notification(event, changes, user_id=user_id),
        dispatcher=dispatcher,
        publish=publish,
    )


def notify_event_cancelled(
    session: Session,
    *,
    event: Event,
    dispatcher: NotificationDispatcher | None = None,
    publish: Publish | None = None,
) -> int:
    return notify_event_attendees(
        session,
        event=event,
        build=lambda user_id: format_cancellation_notification(event, user_id=user_id),
        dispatcher=dispatcher,
        publish=publish,
    )


def notify_rsvp(
    session: Session,
    *,
    event: Event,
    user_id: str,
    action: RsvpAction,
    dispatcher: NotificationDispatcher | None = None,
    publish: Publish | None = None,
) -> DeliveryResult:
    return create_notification_with_preference_check(
        session,
        format_confirmation_notification(event, action, user_id=user_id),
        dispatcher=dispatcher,
        publish=publish,
    )


def get_event_or_error(session: Session, event_id: str) -> Event:
    event = EventRepository(session).get(event_id)
    if event is None:
        raise ValueError("Event not found")
    return event


__all__ = [
    "DeliveryResult",
    "create_notification_with_preference_check",
    "get_event_or_error",
    "notify_event_attendees",
    "notify_event_cancelled",
    "notify_event_updated",
    "notify_rsvp",
]
