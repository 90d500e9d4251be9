"""SQLAlchemy model for event attendees."""

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from app.infrastructure.database import Base

from ._ids import new_uuid


class AttendeeModel(Base):
    """Join between a profile and an event the user plans to attend."""

    __tablename__ = "attendees"
    __table_args__ = (
        UniqueConstraint("user_id", "event_id", name="uq_attendees_user_event"),
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
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())

    profile = relationship("ProfileModel", lazy="joined")


__all__ = ["AttendeeModel"]
