"""Tests for the read-notification retention sweep."""

from __future__ import annotations

from datetime import timedelta

import pytest

from app.application.use_cases.notifications import archive_old_notifications
from app.infrastructure.repositories import NotificationRepository

from conftest import NOW


def test_only_old_read_notifications_are_deleted(
    session, make_profile, make_notification
) -> None:
    """Unread notifications survive regardless of age."""

    user = make_profile()
    old_read = make_notification(user, created_at=NOW - timedelta(days=31), is_read=True)
    recent_read = make_notification(user, created_at=NOW - timedelta(days=10), is_read=True)
    old_unread = make_notification(user, created_at=NOW - timedelta(days=40), is_read=False)

    assert archive_old_notifications(session, now=NOW) == 1

    repository = NotificationRepository(session)
    assert repository.get(old_read.id) is None
    assert repository.get(recent_read.id) is not None
    assert repository.get(old_unread.id) is not None


def test_custom_retention_period(session, make_profile, make_notification) -> None:
    user = make_profile()
    make_notification(user, created_at=NOW - timedelta(days=10), is_read=True)

    assert archive_old_notifications(session, now=NOW, retention_days=30) == 0
    assert archive_old_notifications(session, now=NOW, retention_days=7) == 1


def test_rerun_is_a_no_op(session, make_profile, make_notification) -> None:
    user = make_profile()
    make_notification(user, created_at=NOW - timedelta(days=45), is_read=True)

    assert archive_old_notifications(session, now=NOW) == 1
    assert archive_old_notifications(session, now=NOW) == 0


def test_non_positive_retention_is_rejected(session) -> None:
    with pytest.raises(ValueError):
        archive_old_notifications(session, now=NOW, retention_days=0)
