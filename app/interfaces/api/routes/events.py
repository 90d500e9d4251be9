"""Service endpoints that notify event attendees about changes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    NotificationDispatcher,
    get_event_or_error,
    notify_event_cancelled,
    notify_event_updated,
    notify_rsvp,
)
from app.infrastructure.database import get_db
from app.infrastructure.notifications import dispatch_notification
from app.interfaces.api.dependencies import get_notification_dispatcher, require_service_key
from app.interfaces.api.schemas import (
    EventNotificationRequest,
    EventNotificationResult,
    RsvpNotificationRequest,
)

router = APIRouter(
    prefix="/events",
    tags=["events"],
    dependencies=[Depends(require_service_key)],
)


@router.post("/{event_id}/notifications", response_model=EventNotificationResult)
def notify_attendees(
    event_id: str,
    payload: EventNotificationRequest,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> EventNotificationResult:
    """Tell every attendee that the event changed or was cancelled."""

    try:
        event = get_event_or_error(db, event_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    if payload.type == "cancellation":
        notified = notify_event_cancelled(
            db, event=event, dispatcher=dispatcher, publish=dispatch_notification
        )
    else:
        changes = {name: change.model_dump() for name, change in payload.changes.items()}
        try:
            notified = notify_event_updated(
                db,
                event=event,
                changes=changes,
                dispatcher=dispatcher,
                publish=dispatch_notification,
            )
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
    return EventNotificationResult(success=True, notified=notified)


@router.post("/{event_id}/rsvp-notifications", response_model=EventNotificationResult)
def notify_rsvp_change(
    event_id: str,
    payload: RsvpNotificationRequest,
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> EventNotificationResult:
    """Confirm (or acknowledge the cancellation of) a user's RSVP."""

    try:
        event = get_event_or_error(db, event_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    result = notify_rsvp(
        db,
        event=event,
        user_id=payload.user_id,
        action=payload.action,
        dispatcher=dispatcher,
        publish=dispatch_notification,
    )
    return EventNotificationResult(success=True, notified=0 if result.skipped else 1)
