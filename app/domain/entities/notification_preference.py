"""Domain entity representing a user's notification preferences."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_REMINDER_HOURS: tuple[int, ...] = (24, 1)


@dataclass
class NotificationPreference:
    """Per-user delivery switches and reminder lead times."""

    user_id: str
    email_enabled: bool = True
    reminders_enabled: bool = True
    confirmations_enabled: bool = True
    updates_enabled: bool = True
    reminder_hours: list[int] = field(
        default_factory=lambda: list(DEFAULT_REMINDER_HOURS)
    )
    id: str | None = None

    @classmethod
    def defaults_for(cls, user_id: str) -> "NotificationPreference":
        """Return the preferences assumed for a user who never saved any."""

        return cls(user_id=user_id)


__all__ = ["DEFAULT_REMINDER_HOURS", "NotificationPreference"]
