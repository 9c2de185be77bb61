"""
Server-side session repository.

A JWT only carries the session id; the token is honoured while the session
exists in the store and has not expired. Logging out removes the session.
"""

import threading
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional


@dataclass
class AuthSession:
    session_id: str
    user_id: str
    user_type: str
    user_name: str
    login_time: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at


class InMemorySessionStore:
    """Per-process session store, kept on ``app.state.session_store``."""

    def __init__(self, ttl_hours: int = 8):
        self.ttl = timedelta(hours=ttl_hours)
        self._sessions: Dict[str, AuthSession] = {}
        self._lock = threading.Lock()

    def create(self, user_id: str, user_type: str, user_name: str,
               now: Optional[datetime] = None) -> AuthSession:
        now = now or datetime.now(timezone.utc)
        session = AuthSession(
            session_id=uuid.uuid4().hex,
            user_id=user_id,
            user_type=user_type,
            user_name=user_name,
            login_time=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            self._prune(now)
            self._sessions[session.session_id] = session
        return session

    def _prune(self, now: datetime) -> None:
        # Caller holds the lock
        for sid in [sid for sid, s in self._sessions.items() if s.is_expired(now)]:
            del self._sessions[sid]

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str, now: Optional[datetime] = None) -> Optional[AuthSession]:
        """Return a live session; expired ones are dropped on read."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if session.is_expired(now):
                del self._sessions[session_id]
                return None
            return session

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def delete_for_user(self, user_id: str) -> int:
        """Drop every session of a user (deactivation, PIN rotation)."""
        with self._lock:
            stale = [sid for sid, s in self._sessions.items() if s.user_id == user_id]
            for sid in stale:
                del self._sessions[sid]
        return len(stale)
