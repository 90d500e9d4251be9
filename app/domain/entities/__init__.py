"""Domain entities exposed by the application."""

from .attendee import Attendee
from .event import Event
from .notification import EventSummary, Notification, NotificationType
from .notification_preference import DEFAULT_REMINDER_HOURS, NotificationPreference
from .profile import Profile
from .reminder import REMINDER_1H, REMINDER_24H, ReminderPolicy, ReminderWindow

__all__ = [
    "Attendee",
    "DEFAULT_REMINDER_HOURS",
    "Event",
    "EventSummary",
    "Notification",
    "NotificationPreference",
    "NotificationType",
    "Profile",
    "REMINDER_1H",
    "REMINDER_24H",
    "ReminderPolicy",
    "ReminderWindow",
]
