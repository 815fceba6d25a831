"""Translate between an authenticated user and the payload kept in the session store."""

from sessionauth.schemas.auth import PublicUser, SessionPayload
from sessionauth.services.auth import AuthService


class SessionSerializer:
    """Only id and role go into the session; the full user is looked up per request."""

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    def serialize(self, user: PublicUser) -> SessionPayload:
        return SessionPayload(id=user.id, role=user.role)

    def deserialize(self, payload: SessionPayload) -> PublicUser:
        """Raises NotFoundError when the account behind the session no longer exists."""
        return self.auth_service.find_by_id(payload.id)
