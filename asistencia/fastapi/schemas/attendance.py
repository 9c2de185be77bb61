"""
Pydantic schemas for attendance records.

This module defines the request/response schemas for punches, admin
record management and the camelCase export format.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from asistencia.fastapi.core.utils import parse_timestamp
from asistencia.fastapi.models.attendance import AttendanceEventType


def _require_parseable(value: Optional[str]) -> Optional[str]:
    if value is not None and parse_timestamp(value) is None:
        raise ValueError("timestamp must be an ISO-8601 date-time")
    return value


class AttendanceRecordRead(BaseModel):
    """Schema for reading an attendance record."""

    id: str = Field(..., description="Record identifier")
    worker_id: str = Field(..., description="Worker identifier")
    worker_name: str = Field(..., description="Worker name at punch time")
    worker_document: str = Field(..., description="Worker document at punch time")
    event_type: AttendanceEventType = Field(..., description="Event type")
    timestamp: str = Field(..., description="ISO-8601 instant")
    date: str = Field(..., description="Calendar day (YYYY-MM-DD)")
    location: str = Field(..., description="Where the event was recorded")
    notes: Optional[str] = Field(None, description="Optional notes")

    model_config = ConfigDict(from_attributes=True)


class PunchRequest(BaseModel):
    """Schema for a worker punch."""

    event_type: AttendanceEventType = Field(
        ...,
        description="Event to record",
        examples=["ENTRADA", "REFRIGERIO", "TERMINO_REFRIGERIO", "SALIDA"]
    )


class AttendanceRecordCreate(BaseModel):
    """Schema for an admin manual entry."""

    worker_id: str = Field(..., description="Worker the record belongs to")
    event_type: AttendanceEventType = Field(..., description="Event type")
    timestamp: str = Field(
        ...,
        description="ISO-8601 instant of the event",
        examples=["2024-01-15T08:00:00-05:00"]
    )
    location: Optional[str] = Field(None, max_length=150, description="Location (defaults to main office)")
    notes: Optional[str] = Field(None, max_length=500, description="Optional notes")

    @field_validator("timestamp")
    @classmethod
    def timestamp_must_parse(cls, v):
        """Reject timestamps that cannot be parsed."""
        return _require_parseable(v)


class AttendanceRecordUpdate(BaseModel):
    """Admin edit: only the event type and the timestamp may change."""

    event_type: Optional[AttendanceEventType] = Field(None, description="New event type")
    timestamp: Optional[str] = Field(None, description="New ISO-8601 instant")

    @field_validator("timestamp")
    @classmethod
    def timestamp_must_parse(cls, v):
        """Reject timestamps that cannot be parsed."""
        return _require_parseable(v)


class PunchResponse(BaseModel):
    """Response schema for punches and manual entries."""

    success: bool = Field(..., description="Whether the record was saved")
    message: str = Field(..., description="Operation result message")
    record: AttendanceRecordRead = Field(..., description="Saved record")
    synced: bool = Field(..., description="Whether the Sheets mirror accepted it")
    warning: Optional[str] = Field(None, description="Set when the mirror failed and the record was queued")


class WorkerStatusResponse(BaseModel):
    """Schema for a worker's punch screen state."""

    worker_id: str
    worker_name: str
    date: str = Field(..., description="Today (YYYY-MM-DD)")
    last_event: Optional[AttendanceEventType] = Field(None, description="Last event of today")
    next_valid_events: List[AttendanceEventType]
    button_states: Dict[str, bool]
    recent_records: List[AttendanceRecordRead]


class AttendanceRecordListResponse(BaseModel):
    """Schema for listing records."""

    records: List[AttendanceRecordRead]
    total: int


class AttendanceRecordExport(BaseModel):
    """
    Record in the backup file format (camelCase keys).

    Accepts snake_case names too so API payloads validate the same way.
    """

    id: str
    worker_id: str
    worker_name: str = ""
    worker_document: str = ""
    event_type: AttendanceEventType
    timestamp: str
    date: Optional[str] = None
    location: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ImportResult(BaseModel):
    """Outcome of importing a backup file."""

    success: bool
    imported: int = Field(..., description="New records saved")
    duplicates: int = Field(..., description="Records skipped because their id already exists")
    invalid: int = Field(..., description="Records missing required fields")
    total_records: int = Field(..., description="Records stored after the import")

