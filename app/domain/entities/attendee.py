"""Domain entity representing an event attendee."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Attendee:
    """A user registered as planning to attend an event."""

    user_id: str
    event_id: str
    email: str | None = None
    full_name: str | None = None


__all__ = ["Attendee"]
