"""OAuth redirect endpoint."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse

from app.application.use_cases.auth import handle_oauth_callback
from app.config import Settings
from app.infrastructure.identity import IdentityProviderClient
from app.interfaces.api.dependencies import get_app_settings, get_identity_client

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger(__name__)

ACCESS_TOKEN_COOKIE = "access-token"
REFRESH_TOKEN_COOKIE = "refresh-token"


@router.get("/callback")
def oauth_callback(
    request: Request,
    code: str | None = None,
    error: str | None = None,
    error_description: str | None = None,
    client: IdentityProviderClient = Depends(get_identity_client),
    settings: Settings = Depends(get_app_settings),
) -> RedirectResponse:
    """Exchange the authorization code for a session and redirect the browser."""

    outcome = handle_oauth_callback(
        client,
        code=code,
        error=error,
        error_description=error_description,
        code_verifier=request.cookies.get(settings.auth_code_verifier_cookie),
    )

    origin = str(request.base_url).rstrip("/")
    response = RedirectResponse(url=f"{origin}{outcome.redirect_path}")
    if outcome.session is None:
        return response

    secure = request.url.scheme == "https"
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        outcome.session.access_token,
        max_age=outcome.session.expires_in,
        httponly=True,
        secure=secure,
        samesite="lax",
    )
    if outcome.session.refresh_token:
        response.set_cookie(
            REFRESH_TOKEN_COOKIE,
            outcome.session.refresh_token,
            httponly=True,
            secure=secure,
            samesite="lax",
        )
    response.delete_cookie(settings.auth_code_verifier_cookie)
    logger.info("User %s signed in", outcome.session.user_id)
    return response
