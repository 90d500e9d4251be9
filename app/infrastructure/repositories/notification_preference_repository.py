"""Persistence layer for notification preferences."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.orm import Session

from app.domain.entities import NotificationPreference
from app.infrastructure.models import NotificationPreferenceModel

_UPDATABLE_FIELDS = frozenset(
    {
        "email_enabled",
        "reminders_enabled",
        "confirmations_enabled",
        "updates_enabled",
        "reminder_hours",
    }
)


class NotificationPreferenceRepository:
    """Read and upsert :class:`NotificationPreference` rows, one per user."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_for_user(self, user_id: str) -> NotificationPreference | None:
        model = self._get_model(user_id)
        return self._to_entity(model) if model else None

    def get_map_for_users(
        self, user_ids: Sequence[str]
    ) -> dict[str, NotificationPreference]:
        unique_ids = {user_id for user_id in user_ids if user_id}
        if not unique_ids:
            return {}
        query = self.session.query(NotificationPreferenceModel).filter(
            NotificationPreferenceModel.user_id.in_(unique_ids)
        )
        return {model.user_id: self._to_entity(model) for model in query.all()}

    def upsert(self, user_id: str, changes: dict[str, Any]) -> NotificationPreference:
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            msg = f"Unknown preference fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        model = self._get_model(user_id)
        if model is None:
            defaults = NotificationPreference.defaults_for(user_id)
            model = NotificationPreferenceModel(
                user_id=user_id,
                email_enabled=defaults.email_enabled,
                reminders_enabled=defaults.reminders_enabled,
                confirmations_enabled=defaults.confirmations_enabled,
                updates_enabled=defaults.updates_enabled,
                reminder_hours=list(defaults.reminder_hours),
            )
        for name, value in changes.items():
            if name == "reminder_hours":
                value = sorted({int(hours) for hours in value}, reverse=True)
            setattr(model, name, value)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, user_id: str) -> NotificationPreferenceModel | None:
        return (
            self.session.query(NotificationPreferenceModel)
            .filter(NotificationPreferenceModel.user_id == user_id)
            .one_or_none()
        )

    @staticmethod
    def _to_entity(model: NotificationPreferenceModel) -> NotificationPreference:
        return NotificationPreference(
            id=model.id,
            user_id=model.user_id,
            email_enabled=bool(model.email_enabled),
            reminders_enabled=bool(model.reminders_enabled),
            confirmations_enabled=bool(model.confirmations_enabled),
            updates_enabled=bool(model.updates_enabled),
            reminder_hours=[int(hours) for hours in (model.reminder_hours or [])],
        )


__all__ = ["NotificationPreferenceRepository"]
