"""Persistence layer for user profiles."""

from __future__ import annotations

from sqlalchemy.orm import Session

from app.domain.entities import Profile
from app.infrastructure.models import ProfileModel
from app.utils import ensure_app_timezone


class ProfileRepository:
    """Provide lookups and creation for :class:`Profile` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, profile_id: str) -> Profile | None:
        model = self.session.get(ProfileModel, profile_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> Profile | None:
        model = (
            self.session.query(ProfileModel)
            .filter(ProfileModel.email == email)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def create(self, profile: Profile) -> Profile:
        model = ProfileModel(
            id=profile.id or None,
            email=profile.email,
            full_name=profile.full_name,
            avatar_url=profile.avatar_url,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            avatar_url=model.avatar_url,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["ProfileRepository"]
