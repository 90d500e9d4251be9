"""Transactional email delivery via SendGrid."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import Settings

logger = logging.getLogger(__name__)


class EmailConfigurationError(RuntimeError):
    """Raised when the email transport is not configured."""


class EmailDeliveryError(RuntimeError):
    """Raised when the email provider rejects or fails a send request."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class EmailSettings:
    """Credentials and limits for the email transport."""

    api_key: str | None
    sender: str | None
    timeout_seconds: float = 15.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailSettings":
        return cls(
            api_key=settings.sendgrid_api_key,
            sender=settings.sendgrid_sender,
            timeout_seconds=settings.email_timeout_seconds,
        )


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                help_link = item.get("help")
                if message and help_link:
                    messages.append(f"{message} (help: {help_link})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        # Fall back to a JSON string for unrecognised payloads
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: int | None, details: str | None) -> str:
    if status_code and details:
        return f"SendGrid API request failed with status {status_code}: {details}"
    if status_code:
        return f"SendGrid API request failed with status {status_code}"
    if details:
        return f"SendGrid API request failed: {details}"
    return "SendGrid API request failed"


class EmailSender:
    """Send a single multipart (HTML and plain text) message."""

    def __init__(
        self,
        config: EmailSettings,
        *,
        client_factory: Callable[[str], Any] = SendGridAPIClient,
    ) -> None:
        self._config = config
        self._client_factory = client_factory

    def ensure_configured(self) -> None:
        if not self._config.api_key:
            raise EmailConfigurationError("SENDGRID_API_KEY is not configured")
        if not self._config.sender:
            raise EmailConfigurationError("SENDGRID_SENDER is not configured")

    def send(self, *, recipient: str, subject: str, html: str, text: str) -> None:
        """Deliver the message or raise.

        :raises EmailConfigurationError: credentials are missing; nothing is sent.
        :raises EmailDeliveryError: the provider failed or rejected the request.
        """

        self.ensure_configured()

        message = Mail(
            from_email=self._config.sender,
            to_emails=recipient,
            subject=subject,
            html_content=html,
            plain_text_content=text,
        )

        client = self._client_factory(self._config.api_key)
        http_client = getattr(client, "client", None)
        if http_client is not None:
            http_client.timeout = self._config.timeout_seconds

        try:
            response = client.send(message)
        except Exception as exc:
            status_code = getattr(exc, "status_code", None)
            details = _extract_sendgrid_error_details(getattr(exc, "body", None))
            description = _describe_failure(status_code, details or str(exc) or None)
            logger.error(description)
            raise EmailDeliveryError(description, status_code=status_code) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            details = _extract_sendgrid_error_details(getattr(response, "body", None))
            description = _describe_failure(status_code, details)
            logger.error(description)
            raise EmailDeliveryError(description, status_code=status_code)

        logger.info("Email '%s' accepted by SendGrid for %s", subject, recipient)


__all__ = [
    "EmailConfigurationError",
    "EmailDeliveryError",
    "EmailSender",
    "EmailSettings",
]
