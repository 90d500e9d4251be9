"""Request and response bodies of the service (timer-invoked) endpoints."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from app.application.use_cases.notifications import EmailRequest


class ReminderRunResult(BaseModel):
    success: bool
    reminders_sent: int
    error: str | None = None


class ArchiveResult(BaseModel):
    success: bool
    deleted: int
    error: str | None = None


class EmailDispatchRequest(BaseModel):
    """Body accepted by the email dispatcher."""

    notification_id: str = Field(..., min_length=1)
    user_email: EmailStr
    user_name: str | None = None
    notification_type: str = Field(
        ..., description="reminder, confirmation, update or cancellation"
    )
    title: str
    message: str
    event_title: str | None = None
    event_date: str | None = None
    event_time: str | None = None
    event_location: str | None = None

    def to_email_request(self) -> EmailRequest:
        return EmailRequest(**self.model_dump())


class EmailDispatchResult(BaseModel):
    success: bool
    notification_id: str
    error: str | None = None


class FieldChange(BaseModel):
    old: str
    new: str


class EventNotificationRequest(BaseModel):
    """Fan-out of an update or cancellation to every attendee."""

    type: Literal["update", "cancellation"]
    changes: dict[str, FieldChange] = Field(default_factory=dict)


class RsvpNotificationRequest(BaseModel):
    user_id: str
    action: Literal["rsvp", "cancel"]


class EventNotificationResult(BaseModel):
    success: bool
    notified: int


__all__ = [
    "ArchiveResult",
    "EmailDispatchRequest",
    "EmailDispatchResult",
    "EventNotificationRequest",
    "EventNotificationResult",
    "FieldChange",
    "ReminderRunResult",
    "RsvpNotificationRequest",
]
