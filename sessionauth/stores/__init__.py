"""Credential stores and the factory that picks one from settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sessionauth.core.database import build_engine, build_session_factory
from sessionauth.stores.base import CredentialStore, NewUser, UserRecord
from sessionauth.stores.memory import DEMO_USERS, InMemoryCredentialStore
from sessionauth.stores.sessions import InMemorySessionStore
from sessionauth.stores.sql import SqlCredentialStore

if TYPE_CHECKING:
    from sessionauth.core.config import Settings

logger = logging.getLogger(__name__)


def build_credential_store(settings: Settings) -> CredentialStore:
    """SQL store when DATABASE_URL is set, otherwise the in-memory store (optionally seeded)."""
    if settings.DATABASE_URL:
        engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
        logger.info("Using SQL credential store (dialect=%s)", engine.dialect.name)
        return SqlCredentialStore(build_session_factory(engine))
    seed = DEMO_USERS if settings.SEED_DEMO_USERS else ()
    logger.info("Using in-memory credential store (seeded_users=%s)", len(seed))
    return InMemoryCredentialStore(seed=seed)


__all__ = [
    "DEMO_USERS",
    "CredentialStore",
    "InMemoryCredentialStore",
    "InMemorySessionStore",
    "NewUser",
    "SqlCredentialStore",
    "UserRecord",
    "build_credential_store",
]
