"""
JWT authentication utilities for the FastAPI application.

Tokens carry the session id (``sid``), the principal id (``sub``) and its
role. They are only half of the check: the session must also still be in
the session store.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fastapi import HTTPException, status

from asistencia.fastapi.core.init_settings import global_settings
from asistencia.security.sessions import AuthSession

WORKER_ROLE = "worker"
ADMIN_ROLE = "admin"


def create_access_token(data: Dict[str, Any], expires_at: Optional[datetime] = None) -> str:
    """
    Create a JWT access token.

    Args:
        data: Token payload (sub, sid, role, ...)
        expires_at: Absolute expiry; defaults to the session TTL from now

    Returns:
        Encoded JWT token as string
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_at is None:
        expires_at = now + timedelta(minutes=global_settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({
        "exp": expires_at,
        "iat": now
    })

    return jwt.encode(
        to_encode,
        global_settings.JWT_SECRET_KEY,
        algorithm=global_settings.JWT_ALGORITHM
    )


def create_session_token(session: AuthSession) -> str:
    """Token bound to a stored session."""
    token_data = {
        "sub": session.user_id,
        "sid": session.session_id,
        "role": session.user_type,
        "name": session.user_name,
    }
    return create_access_token(token_data, session.expires_at)


def verify_access_token(token: str) -> Dict[str, Any]:
    """
    Verify and decode a JWT access token.

    Raises:
        HTTPException: 401 if the token is invalid, expired or lacks claims
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Sesión inválida o expirada",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(
            token,
            global_settings.JWT_SECRET_KEY,
            algorithms=[global_settings.JWT_ALGORITHM]
        )
    except JWTError:
        raise credentials_exception

    if payload.get("sub") is None or payload.get("sid") is None:
        raise credentials_exception

    return payload
