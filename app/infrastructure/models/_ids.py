"""Identifier helpers shared by the ORM models."""

from __future__ import annotations

import uuid


def new_uuid() -> str:
    """Return a new random UUID rendered as a string primary key."""

    return str(uuid.uuid4())


__all__ = ["new_uuid"]
