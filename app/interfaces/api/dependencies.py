"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.application.use_cases.notifications import NotificationDispatcher
from app.application.use_cases.reminders import ReminderScheduler
from app.config import Settings, get_settings
from app.infrastructure.database import get_db
from app.infrastructure.email import EmailSender, EmailSettings
from app.infrastructure.identity import IdentityProviderClient, IdentityProviderSettings
from app.infrastructure.notifications import dispatch_notification
from app.infrastructure.security import decode_access_token, is_valid_service_key
from app.utils import now_in_app_timezone, resolve_timezone

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_app_settings() -> Settings:
    return get_settings()


def resolve_current_user_id(token: str) -> str:
    """Return the profile id carried by an identity provider access token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _unauthorized() from exc

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id:
        raise _unauthorized()
    return user_id


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Return the authenticated user's id from the bearer token."""

    if credentials is None:
        raise _unauthorized("Not authenticated")
    return resolve_current_user_id(credentials.credentials)


def require_service_key(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    """Guard timer-invoked endpoints with the configured service key."""

    token = credentials.credentials if credentials else None
    if not is_valid_service_key(token):
        raise _unauthorized()


def get_email_sender(settings: Settings = Depends(get_app_settings)) -> EmailSender:
    return EmailSender(EmailSettings.from_settings(settings))


def get_notification_dispatcher(
    db: Session = Depends(get_db),
    sender: EmailSender = Depends(get_email_sender),
    settings: Settings = Depends(get_app_settings),
) -> NotificationDispatcher:
    return NotificationDispatcher(db, sender, site_url=settings.site_url)


def get_reminder_scheduler(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ReminderScheduler:
    return ReminderScheduler(
        db,
        policy=settings.reminder_policy(),
        timezone=resolve_timezone(settings.app_timezone),
        clock=now_in_app_timezone,
        on_created=dispatch_notification,
    )


def get_identity_client(
    settings: Settings = Depends(get_app_settings),
) -> IdentityProviderClient:
    return IdentityProviderClient(IdentityProviderSettings.from_settings(settings))
