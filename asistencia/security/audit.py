"""
Bounded audit trail of security-relevant actions.
"""

import logging
import threading
from collections import deque
from datetime import datetime, timezone
from typing import List, Optional

from asistencia.fastapi.schemas.admin import AuditLogEntry

logger = logging.getLogger(__name__)


class AuditLog:
    """Keeps the newest ``max_entries`` events, kept on ``app.state.audit_log``."""

    def __init__(self, max_entries: int = 1000):
        self._entries = deque(maxlen=max_entries)
        self._lock = threading.Lock()

    def log(self, action: str, details: str, user_id: Optional[str] = None,
            success: bool = True) -> AuditLogEntry:
        entry = AuditLogEntry(
            timestamp=datetime.now(timezone.utc),
            action=action,
            details=details,
            user_id=user_id,
            success=success,
        )
        with self._lock:
            self._entries.append(entry)
        logger.info("[AUDIT] %s: %s", action, details)
        return entry

    def entries(self, limit: Optional[int] = None) -> List[AuditLogEntry]:
        """Newest first."""
        with self._lock:
            items = list(reversed(self._entries))
        if limit is not None:
            items = items[:limit]
        return items

    def __len__(self) -> int:
        return len(self._entries)
