"""SQLAlchemy model for per-user notification preferences."""

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, func
from sqlalchemy.sql import expression

from app.infrastructure.database import Base

from ._ids import new_uuid


class NotificationPreferenceModel(Base):
    """Delivery switches and reminder lead times chosen by a user."""

    __tablename__ = "notification_preferences"

    id = Column(String(36), primary_key=True, default=new_uuid)
    user_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    email_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    reminders_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    confirmations_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    updates_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    reminder_hours = Column(JSON, nullable=False, default=lambda: [24, 1])
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


__all__ = ["NotificationPreferenceModel"]
