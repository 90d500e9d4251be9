"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.domain.entities import NotificationType


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[str] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[str]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[str] = []
        seen: set[str] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class EventSummaryRead(BaseModel):
    id: str
    title: str
    date: str
    time: str
    location_name: str


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    id: str
    user_id: str
    event_id: str | None = None
    type: NotificationType
    title: str
    message: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    email_sent: bool
    created_at: datetime
    read_at: datetime | None = None
    event: EventSummaryRead | None = None


class UnreadCountRead(BaseModel):
    count: int


class BulkUpdateResult(BaseModel):
    updated: int


__all__ = [
    "BulkUpdateResult",
    "EventSummaryRead",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "UnreadCountRead",
]
