"""
Pydantic schemas for Worker model validation and serialization.

This module defines the data validation schemas for worker management
operations including creation, updates, PIN rotation and responses.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from asistencia.fastapi.core.utils import normalize_document

PIN_PATTERN = r"^\d{4,6}$"


class WorkerBase(BaseModel):
    """Base Worker schema with common fields."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=150,
        description="Worker full name",
        examples=["Juan Carlos Pérez"]
    )

    document: str = Field(
        ...,
        min_length=1,
        max_length=20,
        description="National ID number (DNI)",
        examples=["12345678"]
    )

    position: str = Field(
        default="",
        max_length=100,
        description="Job title",
        examples=["Técnico Senior"]
    )

    photo: Optional[str] = Field(
        None,
        description="Photo URI or data URL (optional)",
        examples=["/assets/workers/worker1.jpg"]
    )

    @field_validator('document', mode='before')
    @classmethod
    def strip_document(cls, v):
        """Remove whitespace from the document number."""
        if isinstance(v, str):
            return normalize_document(v)
        return v


class WorkerCreate(WorkerBase):
    """Schema for creating a new worker."""

    pin: str = Field(
        ...,
        pattern=PIN_PATTERN,
        description="Numeric PIN, 4 to 6 digits",
        examples=["1234"]
    )

    is_active: bool = Field(
        default=True,
        description="Whether the worker may log in"
    )


class WorkerUpdate(BaseModel):
    """Schema for updating worker profile fields (the PIN has its own endpoint)."""

    name: Optional[str] = Field(None, min_length=1, max_length=150, description="New name")
    document: Optional[str] = Field(None, min_length=1, max_length=20, description="New document")
    position: Optional[str] = Field(None, max_length=100, description="New job title")
    photo: Optional[str] = Field(None, description="New photo URI or data URL")
    is_active: Optional[bool] = Field(None, description="New active status")

    @field_validator('document', mode='before')
    @classmethod
    def strip_document(cls, v):
        """Remove whitespace from the document number."""
        if isinstance(v, str):
            return normalize_document(v)
        return v


class WorkerPinUpdate(BaseModel):
    """Schema for rotating a worker's PIN."""

    pin: str = Field(..., pattern=PIN_PATTERN, description="New numeric PIN, 4 to 6 digits")


class WorkerRead(BaseModel):
    """Schema for reading worker information (excludes the PIN hash)."""

    id: str = Field(..., description="Worker unique identifier")
    name: str = Field(..., description="Worker name")
    document: str = Field(..., description="National ID number")
    position: str = Field(..., description="Job title")
    photo: str = Field(..., description="Photo URI or data URL")
    is_active: bool = Field(..., description="Whether the worker is active")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


class WorkerRosterEntry(BaseModel):
    """Public worker card shown on the login screen."""

    id: str
    name: str
    position: str
    photo: str

    model_config = ConfigDict(from_attributes=True)


class WorkerCreateResponse(BaseModel):
    """Schema for worker creation response."""

    success: bool = Field(default=True, description="Whether the operation was successful")
    message: str = Field(default="Trabajador creado correctamente", description="Response message")
    worker: WorkerRead = Field(..., description="Created worker")


class WorkerListResponse(BaseModel):
    """Schema for listing workers."""

    workers: list[WorkerRead] = Field(..., description="Workers")
    total: int = Field(..., description="Number of workers returned")
