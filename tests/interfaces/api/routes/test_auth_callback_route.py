"""Integration tests for the OAuth callback endpoint."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.infrastructure.identity import AuthSession, IdentityProviderError
from app.interfaces.api.dependencies import get_identity_client
from main import create_app


class StubIdentityClient:
    def __init__(self, *, session: AuthSession | None = None, error: Exception | None = None):
        self.session = session
        self.error = error
        self.verifiers: list[str | None] = []

    def exchange_code_for_session(self, code: str, *, code_verifier: str | None = None):
        self.verifiers.append(code_verifier)
        if self.error is not None:
            raise self.error
        return self.session


@pytest.fixture()
def identity():
    return StubIdentityClient(
        session=AuthSession(
            access_token="access-123",
            refresh_token="refresh-456",
            expires_in=3600,
            user_id="user-1",
        )
    )


@pytest.fixture()
def client(identity):
    app = create_app()
    app.dependency_overrides[get_identity_client] = lambda: identity
    with TestClient(app) as test_client:
        yield test_client


def test_oauth_error_redirects_to_login(client: TestClient, identity) -> None:
    response = client.get("/auth/callback?error=access_denied", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "http://testserver/login?error=access_denied"
    assert identity.verifiers == []


def test_missing_code_redirects_to_login(client: TestClient) -> None:
    response = client.get("/auth/callback", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"].endswith(
        "/login?error=No%20authorization%20code%20provided"
    )


def test_exchange_failure_redirects_with_message(client: TestClient, identity) -> None:
    identity.error = IdentityProviderError("Invalid code")

    response = client.get("/auth/callback?code=bad", follow_redirects=False)

    assert response.headers["location"].endswith("/login?error=Invalid%20code")
    assert "access-token" not in response.cookies


def test_unexpected_failure_uses_generic_message(client: TestClient, identity) -> None:
    identity.error = RuntimeError("socket closed")

    response = client.get("/auth/callback?code=abc", follow_redirects=False)

    assert response.headers["location"].endswith(
        "/login?error=An%20unexpected%20error%20occurred%20during%20authentication"
    )


def test_success_sets_session_cookies(client: TestClient, identity) -> None:
    """A successful exchange stores the session and redirects to the app root."""

    client.cookies.set("auth-code-verifier", "pkce-verifier")

    response = client.get("/auth/callback?code=abc", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "http://testserver/"
    assert identity.verifiers == ["pkce-verifier"]
    cookies = response.headers.get_list("set-cookie")
    assert any(c.startswith("access-token=access-123") for c in cookies)
    assert any(c.startswith("refresh-token=refresh-456") for c in cookies)
    assert any(c.startswith("auth-code-verifier=") and "Max-Age=0" in c for c in cookies)
