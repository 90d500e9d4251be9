"""Schemas for notification preferences."""

from __future__ import annotations

from pydantic import BaseModel, Field


class NotificationPreferenceRead(BaseModel):
    user_id: str
    email_enabled: bool
    reminders_enabled: bool
    confirmations_enabled: bool
    updates_enabled: bool
    reminder_hours: list[int]


class NotificationPreferenceUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    email_enabled: bool | None = None
    reminders_enabled: bool | None = None
    confirmations_enabled: bool | None = None
    updates_enabled: bool | None = None
    reminder_hours: list[int] | None = Field(
        default=None, description="Hours before an event at which reminders fire"
    )


__all__ = ["NotificationPreferenceRead", "NotificationPreferenceUpdate"]
