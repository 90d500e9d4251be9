"""Client for the hosted identity provider's token endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)


class IdentityProviderConfigurationError(RuntimeError):
    """Raised when the identity provider URL or key is missing."""


class IdentityProviderError(RuntimeError):
    """Raised when the identity provider refuses an authorization code."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class IdentityProviderSettings:
    """Location, public key and request timeout for the identity provider."""

    base_url: str | None
    anon_key: str | None
    timeout_seconds: float = 15.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "IdentityProviderSettings":
        return cls(
            base_url=settings.identity_provider_url,
            anon_key=settings.identity_provider_anon_key,
            timeout_seconds=settings.identity_timeout_seconds,
        )


@dataclass(frozen=True)
class AuthSession:
    """Tokens issued after a successful code exchange."""

    access_token: str
    refresh_token: str | None
    expires_in: int | None
    user_id: str | None


def _error_message(payload: Any, fallback: str) -> str:
    if isinstance(payload, dict):
        for key in ("error_description", "msg", "message", "error"):
            value = payload.get(key)
            if value:
                return str(value)
    return fallback


class IdentityProviderClient:
    """Exchange OAuth authorization codes (PKCE flow) for sessions."""

    def __init__(
        self,
        config: IdentityProviderSettings,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    def exchange_code_for_session(
        self, code: str, *, code_verifier: str | None = None
    ) -> AuthSession:
        if not (self._config.base_url and self._config.anon_key):
            raise IdentityProviderConfigurationError(
                "IDENTITY_PROVIDER_URL and IDENTITY_PROVIDER_ANON_KEY must be configured"
            )

        url = f"{self._config.base_url.rstrip('/')}/auth/v1/token"
        body: dict[str, Any] = {"auth_code": code}
        if code_verifier:
            body["code_verifier"] = code_verifier

        try:
            with httpx.Client(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                response = client.post(
                    url,
                    params={"grant_type": "pkce"},
                    json=body,
                    headers={
                        "apikey": self._config.anon_key,
                        "Authorization": f"Bearer {self._config.anon_key}",
                    },
                )
        except httpx.TimeoutException as exc:
            raise IdentityProviderError("The identity provider did not respond in time") from exc
        except httpx.HTTPError as exc:
            raise IdentityProviderError(f"Could not reach the identity provider: {exc}") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            message = _error_message(payload, response.text or response.reason_phrase)
            logger.warning(
                "Identity provider rejected code exchange with status %s: %s",
                response.status_code,
                message,
            )
            raise IdentityProviderError(message, status_code=response.status_code)

        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise IdentityProviderError("The identity provider returned no session")

        user = payload.get("user") or {}
        return AuthSession(
            access_token=str(payload["access_token"]),
            refresh_token=payload.get("refresh_token"),
            expires_in=payload.get("expires_in"),
            user_id=user.get("id") if isinstance(user, dict) else None,
        )


__all__ = [
    "AuthSession",
    "IdentityProviderClient",
    "IdentityProviderConfigurationError",
    "IdentityProviderError",
    "IdentityProviderSettings",
]
