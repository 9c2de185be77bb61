"""
Schemas for the Google Sheets sync glue endpoints.

The sync payload keeps the camelCase shape the front end posts.
"""

from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from asistencia.fastapi.models.attendance import AttendanceEventType


class SyncRecord(BaseModel):
    """Record as forwarded to the spreadsheet mirror."""

    id: str = Field(..., description="Record identifier")
    worker_name: str = Field(default="", description="Worker name")
    event_type: AttendanceEventType = Field(..., description="Event type")
    timestamp: Union[int, float, str] = Field(
        ...,
        description="Epoch milliseconds or ISO-8601 instant",
        examples=[1705323600000, "2024-01-15T08:00:00-05:00"]
    )
    location: str = Field(default="", description="Where the event was recorded")
    notes: Optional[str] = Field(None, description="Optional notes")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SyncResult(BaseModel):
    """Glue endpoint response."""

    ok: bool
    error: Optional[str] = None
    synced: Optional[int] = None
    failed: Optional[int] = None


class GoogleHealth(BaseModel):
    """Credential presence check for the Sheets mirror."""

    enabled: bool
    email_ok: bool
    key_len: int
    has_escaped_newlines: bool


class RetryResult(BaseModel):
    """Outcome of re-sending the pending queue."""

    ok: bool
    count: int = Field(..., description="Entries that were in the queue")
    synced: int
    remaining: int


class SyncStatusResponse(BaseModel):
    """Mirror sync status for the admin dashboard."""

    total_records: int
    failed_syncs: int
    last_sync_attempt: Optional[datetime] = None
