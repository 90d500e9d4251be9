"""Use case that emails a single notification and records the delivery."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from sqlalchemy.orm import Session

from app.infrastructure.email import EmailSender
from app.infrastructure.repositories import NotificationRepository
from app.utils import now_in_app_timezone

from .email_templates import EmailContent, EmailRequest, render_email

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Render, send and mark a notification email as sent.

    The dispatcher holds no state between calls. Sending the same notification
    twice concurrently is not guarded; callers invoke it at most once per id.
    """

    def __init__(
        self,
        session: Session,
        sender: EmailSender,
        *,
        site_url: str,
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        self._session = session
        self._sender = sender
        self._site_url = site_url
        self._clock = clock

    def render(self, request: EmailRequest) -> EmailContent:
        return render_email(request, site_url=self._site_url, year=self._clock().year)

    def dispatch(self, request: EmailRequest) -> EmailContent:
        """Send ``request`` and flag the notification as emailed.

        :raises EmailConfigurationError: before any network call when the
            transport has no credentials.
        :raises EmailDeliveryError: when the provider fails; the notification
            is left untouched.
        """

        self._sender.ensure_configured()
        content = self.render(request)
        self._sender.send(
            recipient=request.user_email,
            subject=content.subject,
            html=content.html,
            text=content.text,
        )

        if not NotificationRepository(self._session).mark_email_sent(
            request.notification_id
        ):
            logger.warning(
                "Email sent but notification %s no longer exists", request.notification_id
            )
        else:
            logger.info("Email sent successfully for notification %s", request.notification_id)
        return content


__all__ = ["NotificationDispatcher"]
