"""Aggregate application use cases."""

from .auth import handle_oauth_callback
from .notifications import NotificationDispatcher, archive_old_notifications
from .reminders import ReminderScheduler

__all__ = [
    "NotificationDispatcher",
    "ReminderScheduler",
    "archive_old_notifications",
    "handle_oauth_callback",
]
