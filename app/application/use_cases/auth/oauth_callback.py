"""Use case handling the OAuth redirect back from the identity provider."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

from app.infrastructure.identity import (
    AuthSession,
    IdentityProviderClient,
    IdentityProviderError,
)

logger = logging.getLogger(__name__)

SUCCESS_PATH = "/"
LOGIN_PATH = "/login"
MISSING_CODE_MESSAGE = "No authorization code provided"
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred during authentication"


@dataclass(frozen=True)
class CallbackOutcome:
    """Where to send the browser and, on success, the session to store."""

    redirect_path: str
    session: AuthSession | None = None

    @property
    def succeeded(self) -> bool:
        return self.session is not None


def login_error_path(message: str) -> str:
    return f"{LOGIN_PATH}?error={quote(message, safe='')}"


def handle_oauth_callback(
    client: IdentityProviderClient,
    *,
    code: str | None,
    error: str | None = None,
    error_description: str | None = None,
    code_verifier: str | None = None,
) -> CallbackOutcome:
    """Exchange ``code`` for a session or explain why the login failed.

    Never raises: every failure becomes a redirect to the login page with a
    user-readable message.
    """

    if error:
        logger.error("OAuth error: %s %s", error, error_description or "")
        return CallbackOutcome(redirect_path=login_error_path(error_description or error))

    if not code:
        return CallbackOutcome(redirect_path=login_error_path(MISSING_CODE_MESSAGE))

    try:
        session = client.exchange_code_for_session(code, code_verifier=code_verifier)
    except IdentityProviderError as exc:
        logger.error("Error exchanging code for session: %s", exc)
        return CallbackOutcome(redirect_path=login_error_path(str(exc)))
    except Exception:
        logger.exception("Unexpected error during OAuth callback")
        return CallbackOutcome(redirect_path=login_error_path(UNEXPECTED_ERROR_MESSAGE))

    return CallbackOutcome(redirect_path=SUCCESS_PATH, session=session)


__all__ = [
    "CallbackOutcome",
    "LOGIN_PATH",
    "MISSING_CODE_MESSAGE",
    "SUCCESS_PATH",
    "UNEXPECTED_ERROR_MESSAGE",
    "handle_oauth_callback",
    "login_error_path",
]
