"""Access-control predicates and the FastAPI dependencies that enforce them."""

import logging
from typing import Annotated

from fastapi import Depends, Request

from sessionauth.api.deps import get_auth_service, get_serializer, get_session_store
from sessionauth.api.session import set_session_payload
from sessionauth.core.errors import AuthorizationError
from sessionauth.schemas.auth import LoginRequest, PublicUser, Role
from sessionauth.services.auth import AuthService
from sessionauth.services.serializer import SessionSerializer
from sessionauth.stores.sessions import InMemorySessionStore

logger = logging.getLogger(__name__)

FORBIDDEN = "Forbidden resource"


def is_authenticated(request: Request) -> bool:
    """True iff the request carries a successfully deserialized session identity."""
    return request.user.is_authenticated


def is_admin(request: Request) -> bool:
    return is_authenticated(request) and request.user.role == Role.ADMIN


def logged_in_guard(request: Request) -> None:
    if not is_authenticated(request):
        raise AuthorizationError(FORBIDDEN)


def admin_guard(request: Request) -> None:
    if not is_admin(request):
        raise AuthorizationError(FORBIDDEN)


def local_guard(
    request: Request,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    serializer: Annotated[SessionSerializer, Depends(get_serializer)],
    sessions: Annotated[InMemorySessionStore, Depends(get_session_store)],
) -> PublicUser:
    """
    Check email/password and establish the session.

    Raises AuthenticationError on bad credentials; the session is left untouched.
    On success any previous session is destroyed before the new one is written.
    """
    user = auth_service.validate_user(body)
    set_session_payload(request, sessions, serializer.serialize(user))
    logger.info("User logged in", extra={"user_id": user.id})
    return user
