"""
Admin management endpoints: admin accounts and the audit trail.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session

from asistencia.fastapi.crud.admin import create_admin, get_admins, update_admin
from asistencia.fastapi.dependencies.database import get_sync_db
from asistencia.fastapi.models.admin import Admin
from asistencia.fastapi.schemas.admin import AdminCreate, AdminRead, AdminUpdate, AuditLogEntry
from asistencia.security.audit import AuditLog
from asistencia.security.dependencies import RequireActiveAdmin, get_audit_log, get_session_store
from asistencia.security.sessions import InMemorySessionStore


router = APIRouter(tags=["admin"])


@router.get("/me", response_model=AdminRead, summary="Current Admin")
async def get_me(current_admin: Admin = RequireActiveAdmin):
    """
    **Permissions:** Requires active admin authentication
    """
    return current_admin


@router.get("/admins", response_model=List[AdminRead], summary="List Admins")
async def list_admins(
    include_inactive: bool = Query(False),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    **Permissions:** Requires active admin authentication
    """
    return get_admins(db, include_inactive=include_inactive)


@router.post("/admins", response_model=AdminRead, status_code=status.HTTP_201_CREATED,
             summary="Create Admin")
async def create_admin_endpoint(
    admin_data: AdminCreate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Create an admin or accountant (``contador``) account.

    **Permissions:** Requires active admin authentication

    **Errors:**
    - **400**: PIN already used by another active admin
    """
    admin = create_admin(db, admin_data)
    audit.log("ADMIN_CREATED", f"Administrador {admin.name} ({admin.role.value}) creado",
              user_id=current_admin.id)
    return admin


@router.put("/admins/{admin_id}", response_model=AdminRead, summary="Update Admin")
async def update_admin_endpoint(
    admin_id: str,
    admin_update: AdminUpdate,
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin,
    sessions: InMemorySessionStore = Depends(get_session_store),
    audit: AuditLog = Depends(get_audit_log)
):
    """
    **Permissions:** Requires active admin authentication

    **Errors:**
    - **400**: Deactivating yourself, or PIN in use
    - **404**: Admin not found
    """
    if admin_id == current_admin.id and admin_update.is_active is False:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No puede desactivar su propia cuenta"
        )

    admin = update_admin(db, admin_id, admin_update)
    if not admin:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Administrador no encontrado")

    if not admin.is_active or admin_update.pin is not None:
        sessions.delete_for_user(admin.id)

    audit.log("ADMIN_UPDATED", f"Administrador {admin.name} actualizado", user_id=current_admin.id)
    return admin


@router.get("/audit-logs", response_model=List[AuditLogEntry], summary="Audit Logs")
async def audit_logs(
    limit: int = Query(100, ge=1, le=1000),
    current_admin: Admin = RequireActiveAdmin,
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Most recent audit events, newest first.

    **Permissions:** Requires active admin authentication
    """
    return audit.entries(limit)
