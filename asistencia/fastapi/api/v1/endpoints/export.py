"""
Backup export and import endpoints.
"""

from typing import Any, Dict, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Response, status, Query
from sqlalchemy.orm import Session

from asistencia.fastapi.core.utils import local_today
from asistencia.fastapi.crud.attendance import AttendanceCRUD, get_records
from asistencia.fastapi.dependencies.database import get_sync_db
from asistencia.fastapi.models.admin import Admin
from asistencia.fastapi.models.attendance import AttendanceEventType
from asistencia.fastapi.schemas.attendance import ImportResult
from asistencia.fastapi.services.exports import (
    export_records_csv, export_records_json, merge_imported_records, parse_import_payload
)
from asistencia.security.audit import AuditLog
from asistencia.security.dependencies import RequireActiveAdmin, get_audit_log


router = APIRouter(tags=["export"])


def _filtered(db, date, start_date, end_date, worker_id, event_type):
    return get_records(
        db, date=date, start_date=start_date, end_date=end_date,
        worker_id=worker_id, event_type=event_type
    )


@router.get("/json", summary="Export Records (JSON)")
async def export_json(
    date: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    worker_id: Optional[str] = Query(None),
    event_type: Optional[AttendanceEventType] = Query(None),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    Download a backup file of the matching records.

    **Permissions:** Requires active admin authentication
    """
    records = _filtered(db, date, start_date, end_date, worker_id, event_type)
    filename = f"asistencia_backup_{local_today()}.json"
    return Response(
        content=export_records_json(records),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/csv", summary="Export Records (CSV)")
async def export_csv(
    date: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None),
    end_date: Optional[str] = Query(None),
    worker_id: Optional[str] = Query(None),
    event_type: Optional[AttendanceEventType] = Query(None),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    Download the matching records as CSV (Fecha, Trabajador, Evento, Hora).

    **Permissions:** Requires active admin authentication
    """
    records = _filtered(db, date, start_date, end_date, worker_id, event_type)
    filename = f"asistencia_{local_today()}.csv"
    return Response(
        content=export_records_csv(records),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/import", response_model=ImportResult, summary="Import Backup")
async def import_backup(
    payload: Dict[str, Any] = Body(..., description="Contents of a JSON backup file"),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Merge a backup file into the stored records.

    Records whose id already exists are skipped, so importing the same
    file twice changes nothing.

    **Permissions:** Requires active admin authentication

    **Errors:**
    - **400**: Body is not a backup document
    """
    try:
        valid, invalid = parse_import_payload(payload)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    crud = AttendanceCRUD(db)
    try:
        fresh, duplicates = merge_imported_records(crud.get_record_ids(), valid)
        imported = crud.bulk_insert(fresh)
    except Exception as e:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al importar: {str(e)}"
        )

    audit.log(
        "RECORDS_IMPORTED",
        f"{imported} registros importados, {duplicates} duplicados, {invalid} inválidos",
        user_id=current_admin.id
    )

    return ImportResult(
        success=True,
        imported=imported,
        duplicates=duplicates,
        invalid=invalid,
        total_records=crud.count_records(),
    )
