"""Repository implementations for infrastructure layer."""

from .attendee_repository import AttendeeRepository
from .event_repository import EventRepository
from .notification_preference_repository import NotificationPreferenceRepository
from .notification_repository import NotificationRepository
from .profile_repository import ProfileRepository

__all__ = [
    "AttendeeRepository",
    "EventRepository",
    "NotificationPreferenceRepository",
    "NotificationRepository",
    "ProfileRepository",
]
