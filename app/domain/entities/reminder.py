"""Reminder buckets and the policy that decides when reminders fire."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReminderWindow:
    """A named lead-time window, in hours before the event start.

    Both bounds are inclusive.
    """

    bucket: str
    lead_hours: int
    min_hours: float
    max_hours: float

    @property
    def width_hours(self) -> float:
        return self.max_hours - self.min_hours

    def contains(self, hours_until_event: float) -> bool:
        return self.min_hours <= hours_until_event <= self.max_hours


REMINDER_24H = ReminderWindow(bucket="24h", lead_hours=24, min_hours=23, max_hours=25)
REMINDER_1H = ReminderWindow(bucket="1h", lead_hours=1, min_hours=0.5, max_hours=1.5)


@dataclass(frozen=True)
class ReminderPolicy:
    """Windows checked by the scheduler and the cadence it is invoked at.

    A window narrower than the cadence could be skipped entirely between two
    runs, so the policy refuses that combination.
    """

    windows: tuple[ReminderWindow, ...] = field(
        default_factory=lambda: (REMINDER_24H, REMINDER_1H)
    )
    lookahead_days: int = 2
    cadence_minutes: int = 15

    def __post_init__(self) -> None:
        if not self.windows:
            raise ValueError("At least one reminder window is required")
        if self.lookahead_days < 1:
            raise ValueError("lookahead_days must be at least 1")
        narrowest = min(window.width_hours for window in self.windows)
        if self.cadence_minutes / 60 > narrowest:
            msg = (
                f"Scheduler cadence of {self.cadence_minutes} minutes exceeds the "
                f"narrowest reminder window ({narrowest:g}h); widen the windows"
            )
            raise ValueError(msg)

    def classify(self, hours_until_event: float) -> ReminderWindow | None:
        """Return the first window containing ``hours_until_event``."""

        for window in self.windows:
            if window.contains(hours_until_event):
                return window
        return None


__all__ = ["REMINDER_1H", "REMINDER_24H", "ReminderPolicy", "ReminderWindow"]
