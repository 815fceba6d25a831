"""SQLAlchemy-backed credential store; the persistent substitute for the in-memory list."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from sessionauth.core.errors import ConflictError
from sessionauth.models.user import User
from sessionauth.stores.base import NewUser, UserRecord


def _row_to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        password_hash=user.password_hash,
        role=user.role,
    )


class SqlCredentialStore:
    """
    Credential store over the `users` table.

    Email uniqueness is enforced by the unique index; a violation on insert
    surfaces as ConflictError, so concurrent writers are serialized by the
    database rather than by a process lock.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> UserRecord | None:
        with self._session_factory() as db:
            user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
            return _row_to_record(user) if user is not None else None

    def find_by_id(self, user_id: int) -> UserRecord | None:
        with self._session_factory() as db:
            user = db.get(User, user_id)
            return _row_to_record(user) if user is not None else None

    def insert(self, new_user: NewUser) -> UserRecord:
        with self._session_factory() as db:
            user = User(
                first_name=new_user.first_name,
                last_name=new_user.last_name,
                email=new_user.email,
                password_hash=new_user.password_hash,
                role=new_user.role,
            )
            db.add(user)
            try:
                db.commit()
            except IntegrityError as e:
                db.rollback()
                raise ConflictError("User email must be unique") from e
            db.refresh(user)
            return _row_to_record(user)

    def count(self) -> int:
        with self._session_factory() as db:
            return db.execute(select(func.count()).select_from(User)).scalar_one()
