"""SQLAlchemy model for the events table."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, String, Text, Time, func

from app.infrastructure.database import Base

from ._ids import new_uuid


class EventModel(Base):
    """Database representation of a scheduled event."""

    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=new_uuid)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=False)
    location_name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False, default="other")
    organizer_id = Column(
        String(36),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


__all__ = ["EventModel"]
