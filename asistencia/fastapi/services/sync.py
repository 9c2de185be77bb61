"""
Glue between saved records and the Sheets mirror.

Saving a record never depends on the mirror: a failed append puts the
record in the pending-sync queue and the caller gets a warning instead of
an error.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from asistencia.fastapi.crud.sync_queue import PendingSyncCRUD, payload_of
from asistencia.fastapi.schemas.sync import RetryResult

logger = logging.getLogger(__name__)

SYNC_WARNING = "Registro guardado localmente. Se sincronizará con Google Sheets más tarde."
MIRROR_DISABLED = "Google Sheets no está habilitado"


def mirror_record(db: Session, mirror, record) -> Tuple[bool, Optional[str]]:
    """
    Try to append a saved record to the mirror.

    Args:
        db: Database session (for the pending queue)
        mirror: A ``SheetsMirror`` or None when the mirror is disabled
        record: The saved AttendanceRecord

    Returns:
        (synced, warning) where warning is set when the record was queued
    """
    if mirror is None:
        PendingSyncCRUD(db).enqueue(record, MIRROR_DISABLED)
        return False, SYNC_WARNING

    try:
        mirror.sync_record(record)
        return True, None
    except Exception as e:
        logger.warning("Mirror append failed for record %s, queued: %s", record.id, e)
        PendingSyncCRUD(db).enqueue(record, str(e))
        return False, SYNC_WARNING


def retry_pending(db: Session, mirror) -> RetryResult:
    """
    Re-send every queued record.

    Successes leave the queue; failures stay with one more attempt counted.
    """
    queue = PendingSyncCRUD(db)
    entries = queue.get_pending()

    if mirror is None:
        logger.info("Retry skipped: %s", MIRROR_DISABLED)
        return RetryResult(ok=False, count=len(entries), synced=0, remaining=len(entries))

    synced = 0
    for entry in entries:
        try:
            mirror.sync_record(payload_of(entry))
        except Exception as e:
            logger.warning("Retry failed for record %s: %s", entry.record_id, e)
            queue.mark_failed(entry, str(e))
            continue
        queue.mark_synced(entry)
        synced += 1

    remaining = len(entries) - synced
    logger.info("Pending sync retry: %d synced, %d remaining", synced, remaining)
    return RetryResult(ok=remaining == 0, count=len(entries), synced=synced, remaining=remaining)
