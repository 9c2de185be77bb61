"""
Authentication dependencies for FastAPI.

This module provides dependency functions for protecting FastAPI routes
and extracting the authenticated worker or admin. The session store, rate
limiter and audit log live on ``app.state`` so tests can swap them.
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from asistencia.fastapi.dependencies.database import get_sync_db
from asistencia.fastapi.models.admin import Admin
from asistencia.fastapi.models.worker import Worker
from asistencia.fastapi.crud.admin import get_admin
from asistencia.fastapi.crud.worker import get_worker
from asistencia.security.audit import AuditLog
from asistencia.security.auth import verify_access_token, ADMIN_ROLE, WORKER_ROLE
from asistencia.security.rate_limit import InMemoryRateLimiter
from asistencia.security.sessions import AuthSession, InMemorySessionStore


# HTTP Bearer token scheme
security = HTTPBearer(auto_error=False)


def get_session_store(request: Request) -> InMemorySessionStore:
    return request.app.state.session_store


def get_rate_limiter(request: Request) -> InMemoryRateLimiter:
    return request.app.state.rate_limiter


def get_audit_log(request: Request) -> AuditLog:
    return request.app.state.audit_log


def get_sheets_mirror(request: Request):
    """Configured Sheets mirror, or None when disabled."""
    return getattr(request.app.state, "sheets_mirror", None)


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Sesión inválida o expirada",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_session(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    sessions: InMemorySessionStore = Depends(get_session_store)
) -> AuthSession:
    """
    Resolve the bearer token to a live session.

    Raises:
        HTTPException: 401 if the token is missing, invalid, or its session
            was closed or expired
    """
    if credentials is None:
        raise _unauthorized()

    payload = verify_access_token(credentials.credentials)
    session = sessions.get(payload["sid"])
    if session is None or session.user_id != payload["sub"]:
        raise _unauthorized()

    return session


async def get_current_admin(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_sync_db)
) -> Admin:
    """
    Get current authenticated admin.

    Raises:
        HTTPException: 403 for worker sessions or deactivated admins
    """
    if session.user_type != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Se requiere acceso de administrador"
        )

    admin = get_admin(db, session.user_id)
    if admin is None:
        raise _unauthorized()

    if not admin.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cuenta de administrador desactivada"
        )

    return admin


async def get_current_worker(
    session: AuthSession = Depends(get_current_session),
    db: Session = Depends(get_sync_db)
) -> Worker:
    """
    Get current authenticated worker.

    Raises:
        HTTPException: 403 for admin sessions or deactivated workers
    """
    if session.user_type != WORKER_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Se requiere sesión de trabajador"
        )

    worker = get_worker(db, session.user_id)
    if worker is None:
        raise _unauthorized()

    if not worker.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Trabajador desactivado"
        )

    return worker


# Convenience dependencies for different permission levels
RequireSession = Depends(get_current_session)
RequireActiveAdmin = Depends(get_current_admin)
RequireWorker = Depends(get_current_worker)
