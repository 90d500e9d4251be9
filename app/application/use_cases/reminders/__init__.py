"""Use cases for scheduling event reminders."""

from .schedule_reminders import ReminderScheduler, hours_until, wants_reminder

__all__ = ["ReminderScheduler", "hours_until", "wants_reminder"]
