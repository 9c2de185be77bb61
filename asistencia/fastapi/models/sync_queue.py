"""
PendingSync model: records whose Google Sheets mirror append failed.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text

from asistencia.fastapi.dependencies.database import Base


class PendingSync(Base):
    """
    Queue entry for a record waiting to be mirrored.

    The payload is the JSON that will be sent to the mirror, so a retry does
    not depend on the record still existing locally.
    """

    __tablename__ = "pending_sync"

    id = Column(Integer, primary_key=True, autoincrement=True)

    record_id = Column(
        String(64),
        nullable=False,
        index=True,
        doc="Attendance record id"
    )

    payload = Column(
        Text,
        nullable=False,
        doc="JSON payload sent to the mirror"
    )

    attempts = Column(Integer, nullable=False, default=1)

    last_error = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    last_attempt_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<PendingSync(record_id={self.record_id}, attempts={self.attempts})>"
