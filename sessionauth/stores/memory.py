"""In-memory credential store, held for the process lifetime."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from threading import Lock

from sessionauth.core.errors import ConflictError
from sessionauth.stores.base import NewUser, UserRecord

logger = logging.getLogger(__name__)

# Demo accounts. Joe's password is Passw0rd!, Jen's is P4ssword! (bcrypt, cost 12).
DEMO_USERS = (
    NewUser(
        first_name="Joe",
        last_name="Foo",
        email="joefoo@test.com",
        password_hash="$2b$12$s50omJrK/N3yCM6ynZYmNeen9WERDIVTncywePc75.Ul8.9PUk0LK",
        role="admin",
    ),
    NewUser(
        first_name="Jen",
        last_name="Bar",
        email="jenbar@test.com",
        password_hash="$2b$12$FHUV7sHexgNoBbP8HsD4Su/CeiWbuX/JCo8l2nlY1yCo2LcR3SjmC",
        role="user",
    ),
)


class InMemoryCredentialStore:
    """
    List-backed store shared by every request.

    One lock serializes all reads and writes, so concurrent registrations
    cannot both claim an email or the same id.
    """

    def __init__(self, seed: Iterable[NewUser] = ()) -> None:
        self._lock = Lock()
        self._users: list[UserRecord] = []
        self._next_id = 1
        for new_user in seed:
            self.insert(new_user)

    def find_by_email(self, email: str) -> UserRecord | None:
        with self._lock:
            return next((u for u in self._users if u.email == email), None)

    def find_by_id(self, user_id: int) -> UserRecord | None:
        with self._lock:
            return next((u for u in self._users if u.id == user_id), None)

    def insert(self, new_user: NewUser) -> UserRecord:
        with self._lock:
            if any(u.email == new_user.email for u in self._users):
                raise ConflictError("User email must be unique")
            record = UserRecord(
                id=self._next_id,
                first_name=new_user.first_name,
                last_name=new_user.last_name,
                email=new_user.email,
                password_hash=new_user.password_hash,
                role=new_user.role,
            )
            self._next_id += 1
            self._users.append(record)
        logger.debug("Inserted user id=%s", record.id)
        return record

    def count(self) -> int:
        with self._lock:
            return len(self._users)
