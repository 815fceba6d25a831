"""Register, login, logout and token endpoints. Logic lives in the auth service and guards."""

import logging
from typing import Annotated

from fastapi import Depends, Request, Response, status

from sessionauth.api.deps import (
    get_auth_service,
    get_session_store,
    get_settings_dep,
    get_token_auth,
)
from sessionauth.api.session import clear_session, get_session_payload
from sessionauth.core.config import Settings
from sessionauth.core.errors import AuthenticationError
from sessionauth.schemas.auth import PublicUser, RegisterRequest, SessionResponse, TokenResponse
from sessionauth.services.auth import AuthService
from sessionauth.services.token_auth import TokenAuthService
from sessionauth.stores.sessions import InMemorySessionStore

logger = logging.getLogger(__name__)


def register_user(
    body: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> PublicUser:
    """Create an account. 400 when passwords differ, 409 when the email is taken."""
    return auth_service.register_user(body)


def login_user(
    request: Request,
    sessions: Annotated[InMemorySessionStore, Depends(get_session_store)],
    settings: Annotated[Settings, Depends(get_settings_dep)],
) -> SessionResponse:
    """Return the session written by the local guard."""
    payload = get_session_payload(request, sessions)
    if payload is None:
        raise AuthenticationError("Incorrect username or password")
    return SessionResponse(user=payload, max_age=settings.SESSION_MAX_AGE_SEC)


def logout_user(
    request: Request,
    sessions: Annotated[InMemorySessionStore, Depends(get_session_store)],
) -> Response:
    """Destroy the server-side session; the old cookie no longer authenticates."""
    if request.user.is_authenticated:
        logger.info("User logged out", extra={"user_id": request.user.identity})
    clear_session(request, sessions)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def issue_token(
    request: Request,
    token_auth: Annotated[TokenAuthService, Depends(get_token_auth)],
) -> TokenResponse:
    """Exchange the current session for a signed access token."""
    user = token_auth.find_user(request.user.user.id)
    token = token_auth.sign_token({"sub": str(user.id), "role": user.role.value})
    return TokenResponse(access_token=token, token_type="bearer")
