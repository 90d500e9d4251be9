"""ORM models used by the application infrastructure."""

from .attendee import AttendeeModel
from .event import EventModel
from .notification import (
    REMINDER_BUCKET_COLUMNS,
    REMINDER_BUCKET_CONSTRAINT,
    NotificationModel,
)
from .notification_preference import NotificationPreferenceModel
from .profile import ProfileModel

__all__ = [
    "AttendeeModel",
    "EventModel",
    "NotificationModel",
    "NotificationPreferenceModel",
    "ProfileModel",
    "REMINDER_BUCKET_COLUMNS",
    "REMINDER_BUCKET_CONSTRAINT",
]
