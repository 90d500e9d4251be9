"""Security helpers for validating identity provider tokens."""

from __future__ import annotations

import hmac

from jose import JWTError, jwt

from app.config import get_settings

settings = get_settings()

_ALGORITHMS = ["HS256"]


def decode_access_token(token: str) -> dict:
    """Decode an access token issued by the identity provider.

    :raises ValueError: the signature, expiry or audience is invalid.
    """

    if not settings.jwt_secret:
        raise ValueError("JWT_SECRET is not configured")
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=_ALGORITHMS,
            audience=settings.jwt_audience,
        )
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def create_access_token(data: dict) -> str:
    """Sign ``data`` the way the identity provider does. Used by tooling and tests."""

    claims = {"aud": settings.jwt_audience, **data}
    return jwt.encode(claims, settings.jwt_secret, algorithm=_ALGORITHMS[0])


def is_valid_service_key(candidate: str | None) -> bool:
    """Return ``True`` when ``candidate`` matches the configured service key."""

    expected = settings.service_role_key
    if not expected:
        return True
    if not candidate:
        return False
    return hmac.compare_digest(candidate.encode(), expected.encode())


__all__ = ["create_access_token", "decode_access_token", "is_valid_service_key"]
