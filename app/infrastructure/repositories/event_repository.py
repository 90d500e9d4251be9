"""Persistence layer for events."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from app.domain.entities import Event, EventSummary
from app.infrastructure.models import EventModel


class EventRepository:
    """Read and create :class:`Event` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, event_id: str) -> Event | None:
        model = self.session.get(EventModel, event_id)
        return self._to_entity(model) if model else None

    def list_between(self, start: date, end: date) -> Sequence[Event]:
        """Return events whose date falls within ``[start, end]``."""

        query = (
            self.session.query(EventModel)
            .filter(EventModel.date >= start)
            .filter(EventModel.date <= end)
            .order_by(EventModel.date.asc(), EventModel.time.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get_summaries(self, event_ids: Sequence[str]) -> dict[str, EventSummary]:
        unique_ids = {event_id for event_id in event_ids if event_id}
        if not unique_ids:
            return {}
        query = self.session.query(EventModel).filter(EventModel.id.in_(unique_ids))
        return {
            model.id: EventSummary(
                id=model.id,
                title=model.title,
                date=model.date.isoformat(),
                time=model.time.strftime("%H:%M:%S"),
                location_name=model.location_name,
            )
            for model in query.all()
        }

    def create(self, event: Event) -> Event:
        model = EventModel(
            id=event.id or None,
            title=event.title,
            description=event.description,
            date=event.date,
            time=event.time,
            location_name=event.location_name,
            category=event.category,
            organizer_id=event.organizer_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: EventModel) -> Event:
        return Event(
            id=model.id,
            title=model.title,
            description=model.description,
            date=model.date,
            time=model.time,
            location_name=model.location_name,
            category=model.category,
            organizer_id=model.organizer_id,
        )


__all__ = ["EventRepository"]
