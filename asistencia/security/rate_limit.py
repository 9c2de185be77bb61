"""
Login attempt limiter.

Failures are counted per login identifier (worker id, or ``admin`` for the
PIN-only admin login). Reaching the limit locks the identifier out; a
successful login clears its counter.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional


@dataclass
class _Attempts:
    count: int = 0
    last_attempt: Optional[datetime] = None
    locked_until: Optional[datetime] = None


class InMemoryRateLimiter:
    """Per-process limiter, kept on ``app.state.rate_limiter``."""

    def __init__(self, max_attempts: int = 5, lockout_minutes: int = 15):
        self.max_attempts = max_attempts
        self.lockout = timedelta(minutes=lockout_minutes)
        self._attempts: Dict[str, _Attempts] = {}
        self._lock = threading.Lock()

    def retry_after(self, key: str, now: Optional[datetime] = None) -> int:
        """Seconds left in the lockout for ``key``, 0 when not locked."""
        now = now or datetime.now(timezone.utc)
        with self._lock:
            entry = self._attempts.get(key)
            if entry is None or entry.locked_until is None:
                return 0
            if now >= entry.locked_until:
                # Lockout over: start counting again
                del self._attempts[key]
                return 0
            return max(1, int((entry.locked_until - now).total_seconds()))

    def is_locked(self, key: str, now: Optional[datetime] = None) -> bool:
        return self.retry_after(key, now) > 0

    def record_failure(self, key: str, now: Optional[datetime] = None) -> int:
        """Count a failed attempt; returns attempts left before lockout."""
        now = now or datetime.now(timezone.utc)
        with self._lock:
            entry = self._attempts.setdefault(key, _Attempts())
            # Failures older than the lockout window no longer count
            if entry.last_attempt is not None and now - entry.last_attempt > self.lockout:
                entry.count = 0
            entry.count += 1
            entry.last_attempt = now
            if entry.count >= self.max_attempts:
                entry.locked_until = now + self.lockout
                return 0
            return self.max_attempts - entry.count

    def reset(self, key: str) -> None:
        with self._lock:
            self._attempts.pop(key, None)
