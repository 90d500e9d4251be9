"""Retention sweep for old, already-read notifications."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 30


def archive_old_notifications(
    session: Session,
    *,
    now: datetime | None = None,
    retention_days: int = DEFAULT_RETENTION_DAYS,
) -> int:
    """Delete read notifications created more than ``retention_days`` ago.

    Unread notifications are kept regardless of age. Returns the number of
    rows deleted.
    """

    if retention_days <= 0:
        raise ValueError("retention_days must be positive")

    cutoff = (now or now_in_app_timezone()) - timedelta(days=retention_days)
    deleted = NotificationRepository(session).delete_read_older_than(cutoff)
    logger.info("Deleted %s read notification(s) older than %s", deleted, cutoff.isoformat())
    return deleted


__all__ = ["DEFAULT_RETENTION_DAYS", "archive_old_notifications"]
