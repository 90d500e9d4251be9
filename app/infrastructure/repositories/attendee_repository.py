"""Persistence layer for event attendees."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session, joinedload

from app.domain.entities import Attendee
from app.infrastructure.models import AttendeeModel


class AttendeeRepository:
    """Look up and register attendees of an event."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_event(self, event_id: str) -> Sequence[Attendee]:
        query = (
            self.session.query(AttendeeModel)
            .options(joinedload(AttendeeModel.profile))
            .filter(AttendeeModel.event_id == event_id)
            .order_by(AttendeeModel.created_at.asc(), AttendeeModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def add(self, *, user_id: str, event_id: str) -> Attendee:
        model = AttendeeModel(user_id=user_id, event_id=event_id)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: AttendeeModel) -> Attendee:
        profile = model.profile
        return Attendee(
            user_id=model.user_id,
            event_id=model.event_id,
            email=profile.email if profile else None,
            full_name=profile.full_name if profile else None,
        )


__all__ = ["AttendeeRepository"]
