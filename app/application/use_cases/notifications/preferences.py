"""Use cases for reading and changing notification preferences."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreference, NotificationType
from app.infrastructure.repositories import NotificationPreferenceRepository


def get_or_create_preferences(session: Session, user_id: str) -> NotificationPreference:
    """Return the stored preferences, creating the defaults on first access."""

    repository = NotificationPreferenceRepository(session)
    existing = repository.get_for_user(user_id)
    if existing is not None:
        return existing
    return repository.upsert(user_id, {})


def update_preferences(
    session: Session, user_id: str, changes: dict[str, Any]
) -> NotificationPreference:
    if "reminder_hours" in changes:
        hours = changes["reminder_hours"]
        if any(int(value) <= 0 for value in hours):
            raise ValueError("Reminder hours must be positive")
    return NotificationPreferenceRepository(session).upsert(user_id, changes)


def is_notification_enabled(
    preference: NotificationPreference | None, notification_type: NotificationType
) -> bool:
    """Return whether ``notification_type`` may be delivered to the user."""

    if preference is None:
        return True
    if notification_type is NotificationType.REMINDER:
        return preference.reminders_enabled
    if notification_type is NotificationType.CONFIRMATION:
        return preference.confirmations_enabled
    return preference.updates_enabled


__all__ = ["get_or_create_preferences", "is_notification_enabled", "update_preferences"]
