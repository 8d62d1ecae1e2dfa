"""Authentication router for the YouTube OAuth flow."""

import html
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, PlainTextResponse

from ytrelay.dependencies import get_auth_service, get_token_manager
from ytrelay.exceptions import AuthError
from ytrelay.schemas.auth import TokenStatus
from ytrelay.services.auth_service import AuthService
from ytrelay.services.token_manager import TokenManager

router = APIRouter()


@router.get("/auth", response_class=HTMLResponse)
async def auth(auth_service: Annotated[AuthService, Depends(get_auth_service)]):
    """
    Show the Google consent link.

    After granting access the browser is redirected to /oauth2callback,
    which stores the tokens.
    """
    url = html.escape(auth_service.build_consent_url())
    return HTMLResponse(
        "<p>Open this link in your browser to authorize the YouTube account:</p>"
        f'<a href="{url}" target="_blank">{url}</a>'
        "<p>After authorizing you will be redirected to /oauth2callback, "
        "which saves the tokens.</p>"
    )


@router.get("/oauth2callback", response_class=PlainTextResponse)
def oauth2callback(
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    code: Annotated[str | None, Query()] = None,
):
    """
    Handle the Google OAuth redirect.

    Exchanges the authorization code for tokens and persists them.
    """
    try:
        auth_service.exchange_code(code)
    except AuthError as e:
        return PlainTextResponse(e.message, status_code=e.status_code)

    return PlainTextResponse(
        f"Authorization complete. Tokens saved to "
        f"{auth_service.token_manager.store.path}. You can close this window."
    )


@router.get("/token-status", response_model=TokenStatus)
def token_status(manager: Annotated[TokenManager, Depends(get_token_manager)]):
    """Return the current access token, refreshing it if needed."""
    return TokenStatus(access_token=manager.get_valid_access_token())
