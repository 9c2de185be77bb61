"""
Authentication schemas: PIN logins and session tokens.
"""

from datetime import datetime
from typing import Literal
from pydantic import BaseModel, ConfigDict, Field


class WorkerLogin(BaseModel):
    """Schema for worker login requests."""

    worker_id: str = Field(..., min_length=1, description="Worker picked on the login screen")
    pin: str = Field(..., min_length=1, max_length=12, description="Worker PIN", examples=["1234"])


class AdminLogin(BaseModel):
    """Schema for admin login requests (PIN only)."""

    pin: str = Field(..., min_length=1, max_length=12, description="Admin PIN", examples=["999888"])


class AuthSessionRead(BaseModel):
    """Authenticated session as seen by the client."""

    session_id: str = Field(..., description="Session identifier")
    user_id: str = Field(..., description="Worker or admin id")
    user_type: Literal["worker", "admin"] = Field(..., description="Principal type")
    user_name: str = Field(..., description="Display name")
    login_time: datetime = Field(..., description="When the session was issued")
    expires_at: datetime = Field(..., description="Session expiry (8 hours after login)")

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Login response with bearer token and session."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")
    session: AuthSessionRead = Field(..., description="Session information")


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Sesión cerrada"
