"""
Admin schemas for request/response validation.

This module defines Pydantic models for admin account operations.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from asistencia.fastapi.models.admin import AdminRole
from asistencia.fastapi.schemas.worker import PIN_PATTERN


class AdminBase(BaseModel):
    """Base admin schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=150,
        description="Admin display name",
        examples=["Administrador Principal", "Contador SUNAFIL"]
    )

    role: AdminRole = Field(
        default=AdminRole.ADMIN,
        description="admin or contador"
    )


class AdminCreate(AdminBase):
    """Schema for creating a new admin account."""

    pin: str = Field(
        ...,
        pattern=PIN_PATTERN,
        description="Numeric PIN, 4 to 6 digits",
        examples=["999888"]
    )

    is_active: bool = Field(
        default=True,
        description="Whether the admin account should be active"
    )


class AdminRead(AdminBase):
    """Schema for reading admin account information."""

    id: str = Field(..., description="Unique identifier for the admin")
    is_active: bool = Field(..., description="Whether the admin account is active")
    created_at: datetime = Field(..., description="When the admin account was created")
    updated_at: datetime = Field(..., description="When the admin account was last updated")

    model_config = ConfigDict(from_attributes=True)


class AdminUpdate(BaseModel):
    """Schema for updating admin account information."""

    name: Optional[str] = Field(None, min_length=1, max_length=150, description="New name (optional)")
    pin: Optional[str] = Field(None, pattern=PIN_PATTERN, description="New PIN (optional)")
    role: Optional[AdminRole] = Field(None, description="New role (optional)")
    is_active: Optional[bool] = Field(None, description="Update active status (optional)")


class AuditLogEntry(BaseModel):
    """One audit event."""

    timestamp: datetime
    action: str
    details: str
    user_id: Optional[str] = None
    success: bool = True
