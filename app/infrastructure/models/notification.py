"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import expression

from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime

from ._ids import new_uuid

REMINDER_BUCKET_CONSTRAINT = "uq_notifications_reminder_bucket"
REMINDER_BUCKET_COLUMNS = ("user_id", "event_id", "type", "reminder_type")


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notifications"
    __table_args__ = (
        # NULL reminder_type values never collide, so only reminders are constrained.
        UniqueConstraint(*REMINDER_BUCKET_COLUMNS, name=REMINDER_BUCKET_CONSTRAINT),
        Index("ix_notifications_user_unread", "user_id", "is_read"),
    )

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_id = Column(
        String(36),
        ForeignKey("events.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    type = Column(String(20), nullable=False)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    details = Column("metadata", JSON, nullable=False, default=dict)
    reminder_type = Column(String(10), nullable=True)
    is_read = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    email_sent = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )
    read_at = Column(DateTime(), nullable=True)


__all__ = ["NotificationModel", "REMINDER_BUCKET_COLUMNS", "REMINDER_BUCKET_CONSTRAINT"]
