"""Domain entity representing an event."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time


@dataclass
class Event:
    """An event listed in the finder, happening at a wall-clock date and time."""

    id: str
    title: str
    date: date
    time: time
    location_name: str
    organizer_id: str
    description: str | None = None
    category: str = "other"

    def formatted_time(self) -> str:
        """Return the start time as ``HH:MM:SS``, the way it is shown to users."""

        return self.time.strftime("%H:%M:%S")


__all__ = ["Event"]
