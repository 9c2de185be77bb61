"""
PIN authentication endpoints for workers and admins.

Both logins answer every failure with the same "PIN incorrecto" message,
so a caller cannot tell an unknown worker from a wrong PIN. Repeated
failures lock the login identifier out for a while.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from asistencia.fastapi.crud.admin import find_admin_by_pin
from asistencia.fastapi.crud.worker import get_worker
from asistencia.fastapi.dependencies.database import get_sync_db
from asistencia.fastapi.schemas.auth import (
    AdminLogin,
    AuthSessionRead,
    LogoutResponse,
    TokenResponse,
    WorkerLogin,
)
from asistencia.security.audit import AuditLog
from asistencia.security.auth import ADMIN_ROLE, WORKER_ROLE, create_session_token
from asistencia.security.dependencies import (
    RequireSession,
    get_audit_log,
    get_rate_limiter,
    get_session_store,
)
from asistencia.security.password import verify_pin
from asistencia.security.rate_limit import InMemoryRateLimiter
from asistencia.security.sessions import AuthSession, InMemorySessionStore


router = APIRouter(tags=["authentication"])

INVALID_PIN = "PIN incorrecto"
ADMIN_LIMIT_KEY = "admin"


def _check_lockout(limiter: InMemoryRateLimiter, key: str):
    retry_after = limiter.retry_after(key)
    if retry_after:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Demasiados intentos fallidos. Intente de nuevo en {retry_after} segundos",
            headers={"Retry-After": str(retry_after)},
        )


def _reject(limiter: InMemoryRateLimiter, audit: AuditLog, key: str, action: str):
    limiter.record_failure(key)
    audit.log(action, f"Intento fallido para {key}", user_id=key, success=False)
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=INVALID_PIN,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _token_response(session: AuthSession) -> TokenResponse:
    expires_in = int((session.expires_at - session.login_time).total_seconds())
    return TokenResponse(
        access_token=create_session_token(session),
        expires_in=expires_in,
        session=AuthSessionRead.model_validate(session),
    )


@router.post("/worker/login", response_model=TokenResponse, summary="Worker Login")
async def worker_login(
    login: WorkerLogin,
    db: Session = Depends(get_sync_db),
    sessions: InMemorySessionStore = Depends(get_session_store),
    limiter: InMemoryRateLimiter = Depends(get_rate_limiter),
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Authenticate a worker with the PIN and return a session token.

    **Returns:**
    - **access_token**: JWT bound to an 8-hour session
    - **session**: Session information

    **Errors:**
    - **401**: Unknown/inactive worker or wrong PIN ("PIN incorrecto")
    - **429**: Too many failed attempts for this worker
    """
    _check_lockout(limiter, login.worker_id)

    worker = get_worker(db, login.worker_id)
    if worker is None or not worker.is_active or not verify_pin(login.pin, worker.pin_hash):
        _reject(limiter, audit, login.worker_id, "WORKER_LOGIN_FAILED")

    limiter.reset(login.worker_id)
    session = sessions.create(worker.id, WORKER_ROLE, worker.name)
    audit.log("WORKER_LOGIN", f"Trabajador {worker.name} inició sesión", user_id=worker.id)

    return _token_response(session)


@router.post("/admin/login", response_model=TokenResponse, summary="Admin Login")
async def admin_login(
    login: AdminLogin,
    db: Session = Depends(get_sync_db),
    sessions: InMemorySessionStore = Depends(get_session_store),
    limiter: InMemoryRateLimiter = Depends(get_rate_limiter),
    audit: AuditLog = Depends(get_audit_log)
):
    """
    Authenticate an admin by PIN alone.

    **Errors:**
    - **401**: No active admin has this PIN ("PIN incorrecto")
    - **429**: Too many failed admin attempts
    """
    _check_lockout(limiter, ADMIN_LIMIT_KEY)

    admin = find_admin_by_pin(db, login.pin)
    if admin is None:
        _reject(limiter, audit, ADMIN_LIMIT_KEY, "ADMIN_LOGIN_FAILED")

    limiter.reset(ADMIN_LIMIT_KEY)
    session = sessions.create(admin.id, ADMIN_ROLE, admin.name)
    audit.log("ADMIN_LOGIN", f"Administrador {admin.name} inició sesión", user_id=admin.id)

    return _token_response(session)


@router.post("/logout", response_model=LogoutResponse, summary="Logout")
async def logout(
    session: AuthSession = RequireSession,
    sessions: InMemorySessionStore = Depends(get_session_store),
    audit: AuditLog = Depends(get_audit_log)
):
    """Close the current session; its token stops working immediately."""
    sessions.delete(session.session_id)
    audit.log("LOGOUT", f"{session.user_name} cerró sesión", user_id=session.user_id)
    return LogoutResponse()


@router.get("/session", response_model=AuthSessionRead, summary="Current Session")
async def current_session(session: AuthSession = RequireSession):
    """
    Return the current session.

    **Errors:**
    - **401**: Missing, closed or expired session
    """
    return AuthSessionRead.model_validate(session)
