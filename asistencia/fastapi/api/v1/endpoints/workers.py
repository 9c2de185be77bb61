"""
Worker management endpoints.

The roster is public (it feeds the login screen); everything else is
admin-only.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from asistencia.fastapi.dependencies.database import get_sync_db
from asistencia.fastapi.models.admin import Admin
from asistencia.fastapi.schemas.worker import (
    WorkerCreate, WorkerCreateResponse, WorkerListResponse, WorkerPinUpdate,
    WorkerRead, WorkerRosterEntry, WorkerUpdate
)
from asistencia.fastapi.crud.worker import (
    create_worker, delete_worker, get_worker, get_workers, set_worker_pin, update_worker
)
from asistencia.security.audit import AuditLog
from asistencia.security.dependencies import RequireActiveAdmin, get_audit_log, get_session_store
from asistencia.security.sessions import InMemorySessionStore


router = APIRouter(tags=["workers"])


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Trabajador no encontrado"
    )


@router.get("/roster", response_model=List[WorkerRosterEntry], summary="Login Roster (Public)")
async def roster(db: Session = Depends(get_sync_db)):
    """
    Active workers for the login screen.

    **Returns:** id, name, position and photo only.
    """
    return get_workers(db, limit=1000, include_inactive=False)


@router.get("", response_model=WorkerListResponse, summary="List Workers")
async def list_workers(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    include_inactive: bool = Query(True),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    **Permissions:** Requires active admin authentication
    """
    workers = get_workers(db, skip=skip, limit=limit, include_inactive=include_inactive)
    return WorkerListResponse(
        workers=[WorkerRead.model_validate(w) for w in workers],
        total=len(workers)
    )


@router.post("", response_model=WorkerCreateResponse, status_code=status.HTTP_201_CREATED,
             summary="Create Worker")
async def create_worker_endpoint(
    worker_data: WorkerCreate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Register a worker.

    **Permissions:** Requires active admin authentication

    **Errors:**
    - **400**: Document already registered
    - **422**: PIN is not 4-6 digits
    """
    worker = create_worker(db, worker_data)
    audit.log("WORKER_CREATED", f"Trabajador {worker.name} ({worker.document}) creado",
              user_id=current_admin.id)
    return WorkerCreateResponse(worker=WorkerRead.model_validate(worker))


@router.get("/{worker_id}", response_model=WorkerRead, summary="Get Worker")
async def get_worker_endpoint(
    worker_id: str,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    **Permissions:** Requires active admin authentication
    """
    worker = get_worker(db, worker_id)
    if not worker:
        raise _not_found()
    return worker


@router.put("/{worker_id}", response_model=WorkerRead, summary="Update Worker")
async def update_worker_endpoint(
    worker_id: str,
    worker_update: WorkerUpdate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    sessions: InMemorySessionStore = Depends(get_session_store),
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Update profile fields. Deactivating a worker ends their sessions.

    **Permissions:** Requires active admin authentication

    **Errors:**
    - **400**: Document belongs to another worker
    - **404**: Worker not found
    """
    worker = update_worker(db, worker_id, worker_update)
    if not worker:
        raise _not_found()

    if not worker.is_active:
        sessions.delete_for_user(worker.id)

    audit.log("WORKER_UPDATED", f"Trabajador {worker.name} actualizado", user_id=current_admin.id)
    return worker


@router.put("/{worker_id}/pin", response_model=WorkerRead, summary="Rotate Worker PIN")
async def rotate_pin(
    worker_id: str,
    pin_update: WorkerPinUpdate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    sessions: InMemorySessionStore = Depends(get_session_store),
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Set a new PIN; open sessions of the worker are closed.

    **Permissions:** Requires active admin authentication
    """
    worker = set_worker_pin(db, worker_id, pin_update.pin)
    if not worker:
        raise _not_found()

    sessions.delete_for_user(worker.id)
    audit.log("WORKER_PIN_CHANGED", f"PIN de {worker.name} cambiado", user_id=current_admin.id)
    return worker


@router.delete("/{worker_id}", summary="Delete Worker")
async def delete_worker_endpoint(
    worker_id: str,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    sessions: InMemorySessionStore = Depends(get_session_store),
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Delete a worker. Their attendance records are kept.

    **Permissions:** Requires active admin authentication
    """
    worker = get_worker(db, worker_id)
    if not worker:
        raise _not_found()

    name = worker.name
    delete_worker(db, worker_id)
    sessions.delete_for_user(worker_id)
    audit.log("WORKER_DELETED", f"Trabajador {name} eliminado", user_id=current_admin.id)

    return {"success": True, "message": f"Trabajador {name} eliminado"}
