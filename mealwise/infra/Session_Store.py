"""Server-side login sessions keyed by an opaque cookie value."""
from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Session:
    session_id: str
    user_id: str
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)


class InMemorySessionStore:
    def __init__(self, ttl_seconds: int = 7 * 24 * 3600) -> None:
        self.ttl_seconds = ttl_seconds
        self._data: Dict[str, Session] = {}

    def create(self, user_id: str) -> Session:
        self._gc()
        session = Session(session_id=secrets.token_urlsafe(32), user_id=user_id)
        self._data[session.session_id] = session
        return session

    def get(self, session_id: Optional[str]) -> Optional[Session]:
        """Return the live session and refresh its expiry, or None."""
        if not session_id:
            return None
        self._gc()
        session = self._data.get(session_id)
        if session is not None:
            session.updated_at = time.time()
        return session

    def delete(self, session_id: Optional[str]) -> None:
        if session_id:
            self._data.pop(session_id, None)

    def _gc(self) -> None:
        now = time.time()
        expired = [k for k, v in self._data.items() if now - v.updated_at > self.ttl_seconds]
        for k in expired:
            self._data.pop(k, None)
