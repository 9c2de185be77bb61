"""
Google Sheets sync endpoints.

``/api/sync`` and ``/api/sync-all`` keep the plain ``{"ok": ...}`` contract
the front end already speaks. The admin routes drive the pending queue.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from asistencia.fastapi.crud.attendance import AttendanceCRUD
from asistencia.fastapi.crud.sync_queue import PendingSyncCRUD
from asistencia.fastapi.dependencies.database import get_sync_db
from asistencia.fastapi.models.admin import Admin
from asistencia.fastapi.schemas.sync import RetryResult, SyncRecord, SyncResult, SyncStatusResponse
from asistencia.fastapi.services.sync import retry_pending
from asistencia.security.dependencies import RequireActiveAdmin, get_sheets_mirror

logger = logging.getLogger(__name__)

router = APIRouter(tags=["sync"])
admin_router = APIRouter(tags=["admin-sync"])


def _failed(error: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"ok": False, "error": error})


@router.post("/api/sync", response_model=SyncResult, summary="Sync One Record")
async def sync_one(record: SyncRecord, mirror=Depends(get_sheets_mirror)):
    """
    Append one record to the DETALLE and SUNAFIL tabs.

    **Errors:**
    - **500**: ``{"ok": false, "error": "SYNC_FAILED"}``
    """
    if mirror is None:
        return _failed("SYNC_FAILED")

    try:
        mirror.sync_record(record)
    except Exception as e:
        logger.error("sync error: %s", e)
        return _failed("SYNC_FAILED")

    return SyncResult(ok=True)


@router.post("/api/sync-all", response_model=SyncResult, summary="Sync Many Records")
async def sync_all(records: List[SyncRecord], mirror=Depends(get_sheets_mirror)):
    """
    Append records one by one; individual failures are counted, not fatal.

    **Errors:**
    - **500**: ``{"ok": false, "error": "SYNC_ALL_FAILED"}`` when the batch
      cannot run at all
    """
    if mirror is None:
        return _failed("SYNC_ALL_FAILED")

    try:
        ok, fail = mirror.sync_records(records)
    except Exception as e:
        logger.error("sync-all error: %s", e)
        return _failed("SYNC_ALL_FAILED")

    logger.info("sync-all: %d ok, %d failed", ok, fail)
    return SyncResult(ok=True, synced=ok, failed=fail)


@admin_router.post("/retry", response_model=RetryResult, summary="Retry Pending Syncs")
async def retry(
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    mirror=Depends(get_sheets_mirror)
):
    """
    Re-send queued records to Google Sheets.

    **Permissions:** Requires active admin authentication
    """
    return retry_pending(db, mirror)


@admin_router.get("/status", response_model=SyncStatusResponse, summary="Sync Status")
async def sync_status(
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    **Permissions:** Requires active admin authentication
    """
    queue = PendingSyncCRUD(db)
    return SyncStatusResponse(
        total_records=AttendanceCRUD(db).count_records(),
        failed_syncs=queue.count(),
        last_sync_attempt=queue.last_attempt(),
    )
