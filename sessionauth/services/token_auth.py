"""
Token-based auth whose collaborators are supplied at construction time.

The secret and the user lookup are computed at startup (from settings and the
already-built auth service) and handed to the service as one options struct,
instead of being resolved by an injection container.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any, Protocol

import jwt

from sessionauth.core.errors import AuthenticationError
from sessionauth.schemas.auth import PublicUser

if TYPE_CHECKING:
    from sessionauth.core.config import Settings


class UserLookup(Protocol):
    def find_by_id(self, user_id: int) -> PublicUser: ...


@dataclass(frozen=True)
class TokenAuthOptions:
    secret: str
    user_service: UserLookup
    algorithm: str = "HS256"
    expire_minutes: int = 60


def token_auth_options_from_settings(settings: Settings, user_service: UserLookup) -> TokenAuthOptions:
    """Build options from AUTH_SECRET_VALUE and the given user service."""
    return TokenAuthOptions(
        secret=settings.AUTH_SECRET_VALUE.get_secret_value(),
        user_service=user_service,
        algorithm=settings.JWT_ALGORITHM,
        expire_minutes=settings.JWT_EXPIRE_MINUTES,
    )


class TokenAuthService:
    def __init__(
        self,
        secret: str,
        user_service: UserLookup,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
    ) -> None:
        self._secret = secret
        self.user_service = user_service
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def find_user(self, user_id: int) -> PublicUser:
        return self.user_service.find_by_id(user_id)

    def sign_token(self, payload: dict[str, Any]) -> str:
        """Sign payload with the configured secret, adding iat and exp."""
        now = datetime.now(UTC)
        claims = {**payload, "iat": now, "exp": now + timedelta(minutes=self.expire_minutes)}
        return jwt.encode(claims, self._secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> dict[str, Any]:
        """Return the decoded claims. Raises AuthenticationError on an invalid or expired token."""
        try:
            return jwt.decode(token, self._secret, algorithms=[self.algorithm])
        except jwt.PyJWTError as e:
            raise AuthenticationError("Invalid or expired token") from e


def create_token_auth_service(options: TokenAuthOptions) -> TokenAuthService:
    if not options.secret:
        raise ValueError("Token auth requires a non-empty secret")
    return TokenAuthService(
        secret=options.secret,
        user_service=options.user_service,
        algorithm=options.algorithm,
        expire_minutes=options.expire_minutes,
    )
