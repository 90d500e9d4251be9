"""Domain entity representing a user profile."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Profile:
    """Public information about an account holder."""

    id: str
    email: str
    full_name: str | None = None
    avatar_url: str | None = None
    created_at: datetime | None = None


__all__ = ["Profile"]
