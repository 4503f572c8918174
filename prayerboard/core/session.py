"""
Session state for the two shared passwords.

A `SessionState` is created on a successful site login and handed to route
handlers through dependencies; admin mode is a flag on that object. Logging
out drops the session from the store.
"""

import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from prayerboard.config import settings


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SessionState:
    token: str
    created_at: datetime
    expires_at: datetime
    is_authenticated: bool = True
    is_admin: bool = False

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def clear(self) -> None:
        self.is_authenticated = False
        self.is_admin = False


@dataclass
class SessionStore:
    ttl: timedelta = field(default_factory=lambda: timedelta(hours=settings.session_ttl_hours))
    clock: Callable[[], datetime] = _utcnow
    _sessions: Dict[str, SessionState] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock)

    def create(self) -> SessionState:
        now = self.clock()
        session = SessionState(
            token=secrets.token_urlsafe(32),
            created_at=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get(self, token: Optional[str]) -> Optional[SessionState]:
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.is_expired(self.clock()):
                del self._sessions[token]
                return None
            return session

    def clear(self, token: str) -> bool:
        with self._lock:
            session = self._sessions.pop(token, None)
        if session is None:
            return False
        session.clear()
        return True

    def purge_expired(self) -> int:
        now = self.clock()
        with self._lock:
            expired = [t for t, s in self._sessions.items() if s.is_expired(now)]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


session_store = SessionStore()


def get_session_store() -> SessionStore:
    return session_store
