"""
Attendance endpoints: worker punches and admin record management.
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from asistencia.fastapi.core.utils import local_today
from asistencia.fastapi.crud.attendance import (
    AttendanceCRUD, create_manual_record, delete_record, get_record, get_records, update_record
)
from asistencia.fastapi.dependencies.database import get_sync_db
from asistencia.fastapi.models.admin import Admin
from asistencia.fastapi.models.attendance import AttendanceEventType
from asistencia.fastapi.models.worker import Worker
from asistencia.fastapi.schemas.attendance import (
    AttendanceRecordCreate,
    AttendanceRecordListResponse,
    AttendanceRecordRead,
    AttendanceRecordUpdate,
    PunchRequest,
    PunchResponse,
    WorkerStatusResponse,
)
from asistencia.fastapi.services.event_flow import EVENT_ORDER, button_states, next_valid_events_for
from asistencia.fastapi.services.sync import mirror_record
from asistencia.security.audit import AuditLog
from asistencia.security.dependencies import (
    RequireActiveAdmin, RequireWorker, get_audit_log, get_sheets_mirror
)


router = APIRouter(tags=["attendance"])
admin_router = APIRouter(tags=["admin-attendance"])

EVENT_LABELS = {
    AttendanceEventType.ENTRADA: "Entrada",
    AttendanceEventType.REFRIGERIO: "Inicio de refrigerio",
    AttendanceEventType.TERMINO_REFRIGERIO: "Término de refrigerio",
    AttendanceEventType.SALIDA: "Salida",
}

RECENT_RECORDS = 5


@router.get("/me/status", response_model=WorkerStatusResponse, summary="Punch Screen Status")
async def my_status(
    db: Session = Depends(get_sync_db),
    current_worker: Worker = RequireWorker
):
    """
    State of the punch screen for the authenticated worker.

    **Permissions:** Requires worker session

    **Returns:**
    - Last event today and which buttons are enabled
    - The five most recent records of the worker
    """
    today = local_today()
    crud = AttendanceCRUD(db)
    last_record = crud.get_last_record_today(current_worker.id, today)
    allowed = next_valid_events_for(last_record, today)

    return WorkerStatusResponse(
        worker_id=current_worker.id,
        worker_name=current_worker.name,
        date=today,
        last_event=last_record.event_type if last_record else None,
        next_valid_events=[event for event in EVENT_ORDER if event in allowed],
        button_states=button_states(last_record, today),
        recent_records=[
            AttendanceRecordRead.model_validate(r)
            for r in crud.get_records(worker_id=current_worker.id, limit=RECENT_RECORDS)
        ],
    )


@router.post("/punch", response_model=PunchResponse, status_code=status.HTTP_201_CREATED,
             summary="Punch")
async def punch(
    punch_data: PunchRequest,
    db: Session = Depends(get_sync_db),
    current_worker: Worker = RequireWorker,
    mirror=Depends(get_sheets_mirror)
):
    """
    Record an attendance event for the authenticated worker at the current time.

    **Permissions:** Requires worker session

    **Process:**
    1. Checks the event against the worker's last event today
    2. Saves the record with the worker's current name and document
    3. Appends it to Google Sheets; on failure the record is queued

    **Errors:**
    - **400**: Event not allowed at this point of the day
    """
    try:
        record = AttendanceCRUD(db).create_punch(current_worker, punch_data.event_type)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"No se pudo registrar la asistencia: {str(e)}"
        )

    synced, warning = mirror_record(db, mirror, record)

    return PunchResponse(
        success=True,
        message=f"{EVENT_LABELS[record.event_type]} registrada",
        record=AttendanceRecordRead.model_validate(record),
        synced=synced,
        warning=warning,
    )


@admin_router.get("/records", response_model=AttendanceRecordListResponse, summary="List Records")
async def list_records(
    date: Optional[str] = Query(None, description="Exact day (YYYY-MM-DD)"),
    start_date: Optional[str] = Query(None, description="First day (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(None, description="Last day (YYYY-MM-DD)"),
    worker_id: Optional[str] = Query(None),
    event_type: Optional[AttendanceEventType] = Query(None),
    limit: int = Query(500, ge=1, le=10000),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    Records matching the filters, newest first.

    **Permissions:** Requires active admin authentication
    """
    records = get_records(
        db, date=date, start_date=start_date, end_date=end_date,
        worker_id=worker_id, event_type=event_type, limit=limit
    )
    return AttendanceRecordListResponse(
        records=[AttendanceRecordRead.model_validate(r) for r in records],
        total=len(records)
    )


@admin_router.post("/records", response_model=PunchResponse, status_code=status.HTTP_201_CREATED,
                   summary="Create Manual Record")
async def create_record(
    record_data: AttendanceRecordCreate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    audit: AuditLog = Depends(get_audit_log),
    mirror=Depends(get_sheets_mirror)
):
    """
    Add a record on behalf of a worker (forgotten punch, corrections).

    **Permissions:** Requires active admin authentication

    **Errors:**
    - **404**: Worker not found
    - **422**: Unparseable timestamp
    """
    record = create_manual_record(db, record_data)
    audit.log(
        "RECORD_CREATED",
        f"Registro {record.event_type.value} de {record.worker_name} en {record.timestamp}",
        user_id=current_admin.id
    )

    synced, warning = mirror_record(db, mirror, record)

    return PunchResponse(
        success=True,
        message="Registro agregado",
        record=AttendanceRecordRead.model_validate(record),
        synced=synced,
        warning=warning,
    )


@admin_router.put("/records/{record_id}", response_model=AttendanceRecordRead, summary="Edit Record")
async def edit_record(
    record_id: str,
    record_update: AttendanceRecordUpdate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Change the event type and/or timestamp; the date follows the timestamp.

    **Permissions:** Requires active admin authentication

    **Errors:**
    - **404**: Record not found
    """
    before = get_record(db, record_id)
    if not before:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro no encontrado")
    old = f"{before.event_type.value} {before.timestamp}"

    record = update_record(db, record_id, record_update)
    audit.log(
        "RECORD_UPDATED",
        f"Registro {record_id}: {old} -> {record.event_type.value} {record.timestamp}",
        user_id=current_admin.id
    )
    return record


@admin_router.delete("/records/{record_id}", summary="Delete Record")
async def remove_record(
    record_id: str,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    audit: AuditLog = Depends(get_audit_log)
):
    """
    **Permissions:** Requires active admin authentication
    """
    if not delete_record(db, record_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Registro no encontrado")

    audit.log("RECORD_DELETED", f"Registro {record_id} eliminado", user_id=current_admin.id)
    return {"success": True, "message": "Registro eliminado"}
