"""
AttendanceRecord model for worker punch events.

Each row is one punch (entry, break start, break end or exit). The worker's
name and document are copied into the record at punch time so that the
history keeps the identity the worker had when the event happened.
"""

from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum

from asistencia.fastapi.dependencies.database import Base


class AttendanceEventType(str, Enum):
    """Enum for attendance event types."""
    ENTRADA = "ENTRADA"
    REFRIGERIO = "REFRIGERIO"
    TERMINO_REFRIGERIO = "TERMINO_REFRIGERIO"
    SALIDA = "SALIDA"


class AttendanceRecord(Base):
    """
    Attendance record model.

    Attributes:
        id: Record identifier (epoch milliseconds + random suffix)
        worker_id: Identifier of the worker who punched
        worker_name: Worker name at punch time
        worker_document: Worker national ID at punch time
        event_type: ENTRADA, REFRIGERIO, TERMINO_REFRIGERIO or SALIDA
        timestamp: ISO-8601 instant of the event, the ordering key
        date: Calendar day of ``timestamp`` (YYYY-MM-DD), used for grouping
        location: Where the punch happened
        notes: Optional notes (admin manual entries)
        created_at: Row insertion timestamp
    """

    __tablename__ = "attendance_records"

    id = Column(
        String(64),
        primary_key=True,
        index=True,
        doc="Record identifier"
    )

    # Denormalized worker snapshot
    worker_id = Column(
        String(64),
        nullable=False,
        index=True,
        doc="Worker identifier"
    )

    worker_name = Column(
        String(150),
        nullable=False,
        default="",
        doc="Worker name at punch time"
    )

    worker_document = Column(
        String(20),
        nullable=False,
        default="",
        doc="Worker document at punch time"
    )

    # Event details
    event_type = Column(
        SQLEnum(AttendanceEventType),
        nullable=False,
        index=True,
        doc="Type of attendance event"
    )

    timestamp = Column(
        String(40),
        nullable=False,
        index=True,
        doc="ISO-8601 instant of the event"
    )

    date = Column(
        String(10),
        nullable=False,
        index=True,
        doc="Calendar day of the event (YYYY-MM-DD)"
    )

    location = Column(
        String(150),
        nullable=False,
        default="Oficina Principal",
        doc="Where the event was recorded"
    )

    notes = Column(
        String(500),
        nullable=True,
        doc="Optional notes about the record"
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        doc="Row creation timestamp"
    )

    def __repr__(self) -> str:
        """String representation of AttendanceRecord."""
        return (
            f"<AttendanceRecord(id={self.id}, worker_id={self.worker_id}, "
            f"type={self.event_type}, time={self.timestamp})>"
        )
