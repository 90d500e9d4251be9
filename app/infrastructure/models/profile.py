"""SQLAlchemy model for the profiles table."""

from sqlalchemy import Column, DateTime, String, func

from app.infrastructure.database import Base

from ._ids import new_uuid


class ProfileModel(Base):
    """Public profile attached to an identity provider account."""

    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=new_uuid)
    email = Column(String(255), nullable=False, unique=True, index=True)
    full_name = Column(String(255), nullable=True)
    avatar_url = Column(String(1024), nullable=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )


__all__ = ["ProfileModel"]
