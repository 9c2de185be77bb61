"""
PendingSync CRUD operations.
"""

import json
from datetime import datetime
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session

from asistencia.fastapi.models.sync_queue import PendingSync
from asistencia.fastapi.schemas.sync import SyncRecord


class PendingSyncCRUD:
    """Queue of records whose mirror append failed."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def enqueue(self, record, error: Optional[str] = None) -> PendingSync:
        """
        Queue a record for a later retry.

        A record already queued is not duplicated; its attempt count grows.
        """
        payload = SyncRecord.model_validate(record)
        entry = self.db.query(PendingSync).filter(PendingSync.record_id == payload.id).first()
        if entry:
            entry.attempts += 1
            entry.last_error = (error or "")[:500] or None
            entry.last_attempt_at = datetime.utcnow()
        else:
            entry = PendingSync(
                record_id=payload.id,
                payload=payload.model_dump_json(by_alias=True),
                last_error=(error or "")[:500] or None,
            )
            self.db.add(entry)

        self.db.commit()
        self.db.refresh(entry)
        return entry

    def get_pending(self) -> List[PendingSync]:
        return self.db.query(PendingSync).order_by(PendingSync.created_at).all()

    def mark_synced(self, entry: PendingSync) -> None:
        self.db.delete(entry)
        self.db.commit()

    def mark_failed(self, entry: PendingSync, error: str) -> None:
        entry.attempts += 1
        entry.last_error = error[:500]
        entry.last_attempt_at = datetime.utcnow()
        self.db.commit()

    def count(self) -> int:
        return self.db.query(PendingSync).count()

    def last_attempt(self) -> Optional[datetime]:
        return self.db.query(func.max(PendingSync.last_attempt_at)).scalar()


def payload_of(entry: PendingSync) -> SyncRecord:
    """Decode a queue entry back into the record the mirror expects."""
    return SyncRecord.model_validate(json.loads(entry.payload))
