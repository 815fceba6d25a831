"""
Server-side session store: session id -> serialized identity, with a TTL.

The session cookie only carries the id. Deleting the entry ends the session
for every copy of the cookie.

Usage:
    sessions = InMemorySessionStore(ttl=60)
    sid = sessions.create({"id": 1, "role": "user"})
    sessions.get(sid)      # returns dict or None
    sessions.delete(sid)
"""

import secrets
import time
from threading import Lock

_DEFAULT_TTL = 60


class InMemorySessionStore:
    def __init__(self, ttl: int = _DEFAULT_TTL) -> None:
        self.ttl = ttl
        self._lock = Lock()
        self._entries: dict[str, tuple[dict, float]] = {}

    def get(self, session_id: str) -> dict | None:
        """Return the payload for session_id if it exists and hasn't expired."""
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                return None
            payload, stored_at = entry
            if time.time() - stored_at > self.ttl:
                del self._entries[session_id]
                return None
            return dict(payload)

    def create(self, payload: dict) -> str:
        """Store payload under a fresh random id and return the id."""
        session_id = secrets.token_urlsafe(32)
        with self._lock:
            self._entries[session_id] = (dict(payload), time.time())
        return session_id

    def delete(self, session_id: str) -> None:
        with self._lock:
            self._entries.pop(session_id, None)

    def purge_expired(self) -> int:
        """Drop expired entries; returns how many were removed."""
        cutoff = time.time() - self.ttl
        with self._lock:
            expired = [sid for sid, (_, stored_at) in self._entries.items() if stored_at < cutoff]
            for sid in expired:
                del self._entries[sid]
        return len(expired)

    def count(self) -> int:
        with self._lock:
            return len(self._entries)
