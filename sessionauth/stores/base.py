"""Credential store capability: the storage seam behind the auth service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class NewUser:
    """Fields of an account about to be inserted (password already hashed)."""

    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: str


@dataclass(frozen=True)
class UserRecord:
    """A stored account. id is assigned by the store and never reused."""

    id: int
    first_name: str
    last_name: str
    email: str
    password_hash: str
    role: str


class CredentialStore(Protocol):
    def find_by_email(self, email: str) -> UserRecord | None: ...

    def find_by_id(self, user_id: int) -> UserRecord | None: ...

    def insert(self, new_user: NewUser) -> UserRecord:
        """Store new_user under the next id. Raises ConflictError if the email is taken."""
        ...

    def count(self) -> int: ...
