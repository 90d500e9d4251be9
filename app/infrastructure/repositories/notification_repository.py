"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.domain.entities import Notification, NotificationType
from app.infrastructure.models import (
    REMINDER_BUCKET_COLUMNS,
    REMINDER_BUCKET_CONSTRAINT,
    NotificationModel,
)
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


def _violates_reminder_bucket(exc: IntegrityError) -> bool:
    """Return whether ``exc`` was raised by the reminder bucket constraint."""

    diag = getattr(exc.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint:
        return constraint == REMINDER_BUCKET_CONSTRAINT
    # SQLite reports the columns instead of the constraint name.
    message = str(exc.orig)
    columns = ", ".join(f"notifications.{name}" for name in REMINDER_BUCKET_COLUMNS)
    return REMINDER_BUCKET_CONSTRAINT in message or columns in message


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects.

    Every user-facing query takes the owning ``user_id`` so a caller can never
    read or mutate another user's notifications.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: str) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: str,
        *,
        limit: int | None = 50,
        offset: int = 0,
        notification_type: NotificationType | None = None,
        unread_only: bool = False,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        query = query.filter(NotificationModel.user_id == user_id)
        if notification_type is not None:
            query = query.filter(NotificationModel.type == notification_type.value)
        if unread_only:
            query = query.filter(NotificationModel.is_read.is_(False))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def list_unread_for_user(
        self, user_id: str, *, limit: int | None = 50
    ) -> Sequence[Notification]:
        return self.list_for_user(user_id, limit=limit, unread_only=True)

    def count_unread(self, user_id: str) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .scalar()
            or 0
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def create_unique(self, notification: Notification) -> Notification | None:
        """Insert ``notification`` unless an identical reminder already exists.

        Returns ``None`` when the reminder bucket constraint rejects the row.
        Other database errors propagate after the transaction is rolled back.
        """

        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if not _violates_reminder_bucket(exc):
                raise
            logger.debug(
                "Reminder %s for user %s and event %s already exists",
                notification.reminder_type,
                notification.user_id,
                notification.event_id,
            )
            return None
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_id: str, *, user_id: str) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.user_id == user_id)
            .one_or_none()
        )
        if model is None:
            return None
        if not model.is_read:
            model.is_read = True
            model.read_at = ensure_app_naive_datetime(now_in_app_timezone())
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_many_as_read(self, notification_ids: Sequence[str], *, user_id: str) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, user_id: str) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.is_read.is_(False))
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: ensure_app_naive_datetime(
                        now_in_app_timezone()
                    ),
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return updated

    def mark_email_sent(self, notification_id: str) -> bool:
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .update({NotificationModel.email_sent: True}, synchronize_session=False)
        )
        self.session.commit()
        return bool(updated)

    def delete(self, notification_id: str, *, user_id: str) -> bool:
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(NotificationModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    def delete_all_for_user(self, user_id: str) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def delete_read_older_than(self, cutoff: datetime) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.is_read.is_(True))
            .filter(NotificationModel.created_at < ensure_app_naive_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = ensure_app_naive_datetime(
            notification.created_at
        ) or ensure_app_naive_datetime(now_in_app_timezone())
        model.user_id = notification.user_id
        model.event_id = notification.event_id
        model.type = NotificationType(notification.type).value
        model.title = notification.title
        model.message = notification.message
        model.details = notification.metadata or {}
        model.reminder_type = notification.reminder_type
        model.is_read = notification.is_read
        model.email_sent = notification.email_sent
        model.read_at = ensure_app_naive_datetime(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            event_id=model.event_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message,
            metadata=dict(model.details or {}),
            is_read=bool(model.is_read),
            email_sent=bool(model.email_sent),
            created_at=ensure_app_timezone(model.created_at),
            read_at=ensure_app_timezone(model.read_at),
        )


__all__ = ["NotificationRepository"]
