"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Kinds of notification a user can receive."""

    REMINDER = "reminder"
    CONFIRMATION = "confirmation"
    UPDATE = "update"
    CANCELLATION = "cancellation"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: str | None
    user_id: str
    type: NotificationType
    title: str
    message: str
    event_id: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    email_sent: bool = False
    created_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def reminder_type(self) -> str | None:
        """Return the reminder bucket tag stored in the metadata, if any."""

        if self.type is not NotificationType.REMINDER:
            return None
        value = (self.metadata or {}).get("reminder_type")
        return str(value) if value is not None else None


@dataclass
class EventSummary:
    """Subset of event fields attached to notifications shown to users."""

    id: str
    title: str
    date: str
    time: str
    location_name: str


__all__ = ["EventSummary", "Notification", "NotificationType"]
