"""
Session boundary: read/write the serialized identity and restore it on every request.

SessionMiddleware (outermost) restores `request.session` from the signed cookie,
which holds only a session id. The {id, role} payload lives server-side in the
session store under that id. AuthenticationMiddleware then runs
SessionAuthBackend, which turns the stored payload back into a user and sets
`request.user` / `request.auth`.
"""

import logging

from pydantic import ValidationError as PayloadError
from starlette.authentication import AuthCredentials, AuthenticationBackend, BaseUser
from starlette.concurrency import run_in_threadpool
from starlette.requests import HTTPConnection

from sessionauth.core.errors import NotFoundError
from sessionauth.schemas.auth import PublicUser, Role, SessionPayload
from sessionauth.services.serializer import SessionSerializer
from sessionauth.stores.sessions import InMemorySessionStore

logger = logging.getLogger(__name__)

SESSION_ID_KEY = "sid"


def get_session_payload(conn: HTTPConnection, sessions: InMemorySessionStore) -> SessionPayload | None:
    session_id = conn.session.get(SESSION_ID_KEY)
    if session_id is None:
        return None
    raw = sessions.get(session_id)
    if raw is None:
        # Logged out or expired.
        conn.session.clear()
        return None
    try:
        return SessionPayload.model_validate(raw)
    except PayloadError:
        logger.warning("Discarding malformed session payload")
        clear_session(conn, sessions)
        return None


def set_session_payload(
    conn: HTTPConnection,
    sessions: InMemorySessionStore,
    payload: SessionPayload,
) -> None:
    """Start a new server-side session for payload; any previous one is destroyed."""
    clear_session(conn, sessions)
    conn.session[SESSION_ID_KEY] = sessions.create(payload.model_dump(mode="json"))


def clear_session(conn: HTTPConnection, sessions: InMemorySessionStore) -> None:
    session_id = conn.session.get(SESSION_ID_KEY)
    if session_id is not None:
        sessions.delete(session_id)
    conn.session.clear()


class SessionUser(BaseUser):
    """Starlette user wrapping the deserialized account."""

    def __init__(self, user: PublicUser) -> None:
        self.user = user

    @property
    def is_authenticated(self) -> bool:
        return True

    @property
    def display_name(self) -> str:
        return f"{self.user.first_name} {self.user.last_name}".strip() or self.user.email

    @property
    def identity(self) -> str:
        return str(self.user.id)

    @property
    def role(self) -> Role:
        return self.user.role


class SessionAuthBackend(AuthenticationBackend):
    """Restores the user from the session payload; a stale payload invalidates the session."""

    def __init__(self, serializer: SessionSerializer, sessions: InMemorySessionStore) -> None:
        self.serializer = serializer
        self.sessions = sessions

    async def authenticate(self, conn: HTTPConnection) -> tuple[AuthCredentials, BaseUser] | None:
        payload = get_session_payload(conn, self.sessions)
        if payload is None:
            return None
        try:
            user = await run_in_threadpool(self.serializer.deserialize, payload)
        except NotFoundError:
            logger.warning(
                "Invalidating stale session",
                extra={"user_id": payload.id},
            )
            clear_session(conn, self.sessions)
            return None
        return AuthCredentials(["authenticated", user.role.value]), SessionUser(user)
