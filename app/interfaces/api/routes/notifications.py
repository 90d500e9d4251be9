"""Endpoints and websocket handler for notifications."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import (
    InboxItem,
    NotificationDispatcher,
    archive_old_notifications,
    count_unread,
    delete_all_notifications,
    delete_notification,
    get_or_create_preferences,
    list_notifications,
    mark_all_as_read,
    mark_as_read,
    mark_many_as_read,
    update_preferences,
)
from app.config import Settings
from app.domain.entities import Notification, NotificationPreference, NotificationType
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.email import EmailConfigurationError, EmailDeliveryError
from app.infrastructure.notifications import notification_manager, serialize_notification
from app.infrastructure.repositories import NotificationRepository
from app.interfaces.api.dependencies import (
    get_app_settings,
    get_current_user_id,
    get_notification_dispatcher,
    require_service_key,
    resolve_current_user_id,
)
from app.interfaces.api.schemas import (
    ArchiveResult,
    BulkUpdateResult,
    EmailDispatchRequest,
    EmailDispatchResult,
    EventSummaryRead,
    NotificationMarkReadRequest,
    NotificationPreferenceRead,
    NotificationPreferenceUpdate,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(
    notification: Notification, event: EventSummaryRead | None = None
) -> NotificationRead:
    return NotificationRead(
        id=notification.id or "",
        user_id=notification.user_id,
        event_id=notification.event_id,
        type=notification.type,
        title=notification.title,
        message=notification.message,
        metadata=notification.metadata or {},
        is_read=notification.is_read,
        email_sent=notification.email_sent,
        created_at=notification.created_at,
        read_at=notification.read_at,
        event=event,
    )


def _item_to_schema(item: InboxItem) -> NotificationRead:
    event = (
        EventSummaryRead(
            id=item.event.id,
            title=item.event.title,
            date=item.event.date,
            time=item.event.time,
            location_name=item.event.location_name,
        )
        if item.event
        else None
    )
    return _notification_to_schema(item.notification, event)


def _preference_to_schema(preference: NotificationPreference) -> NotificationPreferenceRead:
    return NotificationPreferenceRead(
        user_id=preference.user_id,
        email_enabled=preference.email_enabled,
        reminders_enabled=preference.reminders_enabled,
        confirmations_enabled=preference.confirmations_enabled,
        updates_enabled=preference.updates_enabled,
        reminder_hours=list(preference.reminder_hours),
    )


def _notification_to_payload(notification: Notification) -> dict[str, Any]:
    return serialize_notification(notification)


@router.get("/", response_model=list[NotificationRead])
def list_user_notifications(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    type: NotificationType | None = None,
    unread_only: bool = False,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> list[NotificationRead]:
    """Return the authenticated user's notifications, newest first."""

    items = list_notifications(
        db,
        user_id,
        limit=limit,
        offset=offset,
        notification_type=type,
        unread_only=unread_only,
    )
    return [_item_to_schema(item) for item in items]


@router.get("/unread-count", response_model=UnreadCountRead)
def unread_count(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> UnreadCountRead:
    return UnreadCountRead(count=count_unread(db, user_id))


@router.post("/read", response_model=BulkUpdateResult)
def mark_selected_as_read(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> BulkUpdateResult:
    return BulkUpdateResult(updated=mark_many_as_read(db, user_id, payload.unique_ids()))


@router.post("/read-all", response_model=BulkUpdateResult)
def mark_everything_as_read(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> BulkUpdateResult:
    return BulkUpdateResult(updated=mark_all_as_read(db, user_id))


@router.post("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> NotificationRead:
    try:
        notification = mark_as_read(db, user_id, notification_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    try:
        delete_notification(db, user_id, notification_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/", response_model=BulkUpdateResult)
def remove_all_notifications(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> BulkUpdateResult:
    return BulkUpdateResult(updated=delete_all_notifications(db, user_id))


@router.get("/preferences", response_model=NotificationPreferenceRead)
def read_preferences(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> NotificationPreferenceRead:
    return _preference_to_schema(get_or_create_preferences(db, user_id))


@router.put("/preferences", response_model=NotificationPreferenceRead)
def change_preferences(
    payload: NotificationPreferenceUpdate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> NotificationPreferenceRead:
    try:
        preference = update_preferences(db, user_id, payload.model_dump(exclude_none=True))
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _preference_to_schema(preference)


@router.post(
    "/send-email",
    response_model=EmailDispatchResult,
    dependencies=[Depends(require_service_key)],
)
def send_notification_email(
    payload: EmailDispatchRequest,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
):
    """Email one notification and mark it as sent."""

    try:
        dispatcher.dispatch(payload.to_email_request())
    except (EmailConfigurationError, EmailDeliveryError) as exc:
        logger.error(
            "Error sending email for notification %s: %s", payload.notification_id, exc
        )
        error = str(exc)
    except Exception:
        logger.exception(
            "Unexpected error sending email for notification %s", payload.notification_id
        )
        error = "Unexpected error while sending the email"
    else:
        return EmailDispatchResult(success=True, notification_id=payload.notification_id)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=EmailDispatchResult(
            success=False, notification_id=payload.notification_id, error=error
        ).model_dump(exclude_none=True),
    )


@router.post(
    "/archive",
    response_model=ArchiveResult,
    dependencies=[Depends(require_service_key)],
)
def archive_notifications(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """Delete read notifications past the retention period."""

    try:
        deleted = archive_old_notifications(
            db, retention_days=settings.notification_retention_days
        )
    except Exception as exc:
        logger.exception("Error archiving notifications")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ArchiveResult(
                success=False, deleted=0, error=str(exc) or "Unknown error"
            ).model_dump(exclude_none=True),
        )
    return ArchiveResult(success=True, deleted=deleted)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams notifications to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user_id = resolve_current_user_id(token)
        pending_notifications = NotificationRepository(session).list_unread_for_user(
            user_id
        )
    except HTTPException:
        await websocket.close(code=1008)
        return
    except Exception:  # pragma: no cover
        logger.exception("Could not open notification stream")
        await websocket.close(code=1011)
        return
    finally:
        session.close()

    await notification_manager.connect(user_id, websocket)
    try:
        if pending_notifications:
            await websocket.send_json(
                {"type": "init", "data": [_notification_to_payload(n) for n in pending_notifications]}
            )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    ack_session = SessionLocal()
                    try:
                        NotificationRepository(ack_session).mark_many_as_read(
                            [str(i) for i in ids], user_id=user_id
                        )
                    finally:
                        ack_session.close()
                continue
    except WebSocketDisconnect:
        notification_manager.disconnect(user_id, websocket)
    except Exception:  # pragma: no cover
        notification_manager.disconnect(user_id, websocket)
        raise
