"""Use case that creates due event reminders for attendees."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, tzinfo

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.notifications.templates import (
    format_reminder_notification,
)
from app.domain.entities import (
    Event,
    Notification,
    NotificationPreference,
    ReminderPolicy,
    ReminderWindow,
)
from app.infrastructure.repositories import (
    AttendeeRepository,
    EventRepository,
    NotificationPreferenceRepository,
    NotificationRepository,
)
from app.utils import combine_in_timezone

logger = logging.getLogger(__name__)


def hours_until(event: Event, now: datetime, tz: tzinfo) -> float:
    """Return the signed number of hours between ``now`` and the event start."""

    starts_at = combine_in_timezone(event.date, event.time, tz)
    return (starts_at - now).total_seconds() / 3600


def wants_reminder(
    preference: NotificationPreference | None, window: ReminderWindow
) -> bool:
    """Return ``True`` when the attendee should get the ``window`` reminder.

    Attendees without saved preferences get every default reminder.
    """

    if preference is None:
        return True
    if not preference.reminders_enabled:
        return False
    return window.lead_hours in preference.reminder_hours


class ReminderScheduler:
    """Scan upcoming events and insert one reminder per attendee and bucket.

    Every (event, attendee, bucket) insert is committed on its own, so a
    failing row is logged and skipped without losing the rest of the run. The
    storage-level unique constraint on the reminder bucket is what prevents
    duplicates when two runs overlap.
    """

    def __init__(
        self,
        session: Session,
        *,
        policy: ReminderPolicy,
        timezone: tzinfo,
        clock: Callable[[], datetime],
        on_created: Callable[[Notification], None] | None = None,
    ) -> None:
        self._session = session
        self._policy = policy
        self._timezone = timezone
        self._clock = clock
        self._on_created = on_created

    def run(self) -> int:
        """Create all reminders due now and return how many were inserted."""

        now = self._clock().astimezone(self._timezone)
        today = now.date()
        events = EventRepository(self._session).list_between(
            today, today + timedelta(days=self._policy.lookahead_days)
        )

        created = 0
        for event in events:
            remaining = hours_until(event, now, self._timezone)
            if remaining < 0:
                continue
            window = self._policy.classify(remaining)
            if window is None:
                continue
            try:
                created += self._remind_attendees(event, window, now)
            except SQLAlchemyError:
                self._session.rollback()
                logger.exception(
                    "Failed to schedule %s reminders for event %s",
                    window.bucket,
                    event.id,
                )

        logger.info(
            "Scheduled %s reminder(s) across %s upcoming event(s)",
            created,
            len(events),
        )
        return created

    def _remind_attendees(
        self, event: Event, window: ReminderWindow, now: datetime
    ) -> int:
        attendees = AttendeeRepository(self._session).list_for_event(event.id)
        if not attendees:
            return 0

        preferences = NotificationPreferenceRepository(self._session).get_map_for_users(
            [attendee.user_id for attendee in attendees]
        )
        repository = NotificationRepository(self._session)

        created = 0
        for attendee in attendees:
            if not wants_reminder(preferences.get(attendee.user_id), window):
                continue

            notification = format_reminder_notification(
                event, window, user_id=attendee.user_id, created_at=now
            )
            try:
                saved = repository.create_unique(notification)
            except SQLAlchemyError:
                self._session.rollback()
                logger.exception(
                    "Failed to create %s reminder for user %s and event %s",
                    window.bucket,
                    attendee.user_id,
                    event.id,
                )
                continue

            if saved is None:
                continue
            created += 1
            if self._on_created is not None:
                self._on_created(saved)
        return created


__all__ = ["ReminderScheduler", "hours_until", "wants_reminder"]
