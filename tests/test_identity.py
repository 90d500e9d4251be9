"""Tests for the identity provider code-exchange client."""

from __future__ import annotations

import json

import httpx
import pytest

from app.infrastructure.identity import (
    IdentityProviderClient,
    IdentityProviderConfigurationError,
    IdentityProviderError,
    IdentityProviderSettings,
)

CONFIG = IdentityProviderSettings(
    base_url="https://auth.example.com/", anon_key="anon-key", timeout_seconds=5
)


def test_exchange_posts_pkce_grant_and_returns_session() -> None:
    """The code and verifier are sent to the token endpoint with the public key."""

    captured: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["headers"] = request.headers
        captured["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "access_token": "access-123",
                "refresh_token": "refresh-456",
                "expires_in": 3600,
                "user": {"id": "user-1"},
            },
        )

    client = IdentityProviderClient(CONFIG, transport=httpx.MockTransport(handler))
    session = client.exchange_code_for_session("the-code", code_verifier="verifier")

    assert captured["url"] == "https://auth.example.com/auth/v1/token?grant_type=pkce"
    assert captured["headers"]["apikey"] == "anon-key"
    assert captured["body"] == {"auth_code": "the-code", "code_verifier": "verifier"}
    assert session.access_token == "access-123"
    assert session.refresh_token == "refresh-456"
    assert session.expires_in == 3600
    assert session.user_id == "user-1"


def test_exchange_error_uses_provider_description() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            400,
            json={"error": "invalid_grant", "error_description": "Code has expired"},
        )

    client = IdentityProviderClient(CONFIG, transport=httpx.MockTransport(handler))

    with pytest.raises(IdentityProviderError) as exc_info:
        client.exchange_code_for_session("stale-code")

    assert str(exc_info.value) == "Code has expired"
    assert exc_info.value.status_code == 400


def test_exchange_timeout_is_reported() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = IdentityProviderClient(CONFIG, transport=httpx.MockTransport(handler))

    with pytest.raises(IdentityProviderError, match="did not respond in time"):
        client.exchange_code_for_session("code")


def test_exchange_without_session_in_payload_fails() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"user": {"id": "user-1"}})

    client = IdentityProviderClient(CONFIG, transport=httpx.MockTransport(handler))

    with pytest.raises(IdentityProviderError, match="no session"):
        client.exchange_code_for_session("code")


def test_exchange_requires_configuration() -> None:
    client = IdentityProviderClient(IdentityProviderSettings(base_url=None, anon_key=None))

    with pytest.raises(IdentityProviderConfigurationError):
        client.exchange_code_for_session("code")
