"""Credential validation and account creation against a credential store."""

import logging
import secrets

from sessionauth.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from sessionauth.core.security import BCRYPT_ROUNDS, hash_password, verify_password
from sessionauth.schemas.auth import LoginRequest, PublicUser, RegisterRequest, Role
from sessionauth.stores.base import CredentialStore, NewUser, UserRecord

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Incorrect username or password"


def to_public_user(record: UserRecord) -> PublicUser:
    """Project a stored record onto its password-free form."""
    return PublicUser(
        id=record.id,
        first_name=record.first_name,
        last_name=record.last_name,
        email=record.email,
        role=Role(record.role),
    )


class AuthService:
    """
    Sole authority for credential checks and registration.

    Methods are synchronous and hash with bcrypt; HTTP handlers calling them
    are plain `def` endpoints so FastAPI runs them in its worker thread pool.
    """

    def __init__(self, store: CredentialStore, bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        self.store = store
        self.bcrypt_rounds = bcrypt_rounds
        # Unknown emails are checked against this so both failure paths pay one bcrypt.
        self._dummy_hash = hash_password(secrets.token_urlsafe(16), rounds=bcrypt_rounds)

    def register_user(self, body: RegisterRequest) -> PublicUser:
        """
        Create an account and return it without the password.

        Raises ValidationError when the confirmation does not match and
        ConflictError when the email is already registered. Nothing is
        stored on either failure.
        """
        if body.password != body.confirmation_password:
            raise ValidationError("Password and Confirmation Password must match")
        # Pre-check skips the expensive hash for an obvious duplicate; insert re-checks atomically.
        if self.store.find_by_email(body.email) is not None:
            raise ConflictError("User email must be unique")
        record = self.store.insert(
            NewUser(
                first_name=body.first_name,
                last_name=body.last_name,
                email=body.email,
                password_hash=hash_password(body.password, rounds=self.bcrypt_rounds),
                role=body.role.value,
            )
        )
        logger.info("User registered", extra={"user_id": record.id, "role": record.role})
        return to_public_user(record)

    def validate_user(self, credentials: LoginRequest) -> PublicUser:
        """Return the matching user without the password, or raise AuthenticationError."""
        record = self.store.find_by_email(credentials.email)
        stored_hash = record.password_hash if record is not None else self._dummy_hash
        password_ok = verify_password(credentials.password, stored_hash)
        if record is None or not password_ok:
            logger.warning("Failed login", extra={"email": credentials.email})
            raise AuthenticationError(INVALID_CREDENTIALS)
        return to_public_user(record)

    def find_by_id(self, user_id: int) -> PublicUser:
        record = self.store.find_by_id(user_id)
        if record is None:
            raise NotFoundError(f"No user found with id {user_id}")
        return to_public_user(record)
