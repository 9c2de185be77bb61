"""
AttendanceRecord CRUD operations.

This module provides database operations for attendance records: worker
punches (validated against the daily event flow), admin manual entries,
edits, deletes, filtered listings and backup imports.
"""

from typing import Iterable, List, Optional, Set
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from asistencia.fastapi.core.init_settings import global_settings
from asistencia.fastapi.core.utils import (
    current_timestamp,
    date_from_timestamp,
    generate_record_id,
    local_today,
    to_epoch_ms,
)
from asistencia.fastapi.models.attendance import AttendanceRecord, AttendanceEventType
from asistencia.fastapi.models.worker import Worker
from asistencia.fastapi.schemas.attendance import (
    AttendanceRecordCreate,
    AttendanceRecordExport,
    AttendanceRecordUpdate,
)
from asistencia.fastapi.services.event_flow import last_record_for_worker, next_valid_events_for


def _sort_key(record: AttendanceRecord) -> float:
    ms = to_epoch_ms(record.timestamp)
    return ms if ms is not None else 0.0


def sort_newest_first(records: Iterable[AttendanceRecord]) -> List[AttendanceRecord]:
    """Order by instant, not by string, so mixed UTC offsets sort correctly."""
    return sorted(records, key=_sort_key, reverse=True)


class AttendanceCRUD:
    """CRUD operations for AttendanceRecord model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def _build_record(self, worker: Worker, event_type: AttendanceEventType, timestamp: str,
                      location: Optional[str] = None, notes: Optional[str] = None) -> AttendanceRecord:
        return AttendanceRecord(
            id=generate_record_id(),
            worker_id=worker.id,
            worker_name=worker.name,
            worker_document=worker.document,
            event_type=event_type,
            timestamp=timestamp,
            date=date_from_timestamp(timestamp),
            location=location or global_settings.DEFAULT_LOCATION,
            notes=notes,
        )

    def get_record(self, record_id: str) -> Optional[AttendanceRecord]:
        """Get record by ID."""
        return self.db.query(AttendanceRecord).filter(AttendanceRecord.id == record_id).first()

    def get_worker_day_records(self, worker_id: str, date: str) -> List[AttendanceRecord]:
        """All records of a worker on one calendar day."""
        return (self.db.query(AttendanceRecord)
                .filter(AttendanceRecord.worker_id == worker_id)
                .filter(AttendanceRecord.date == date)
                .order_by(AttendanceRecord.created_at)
                .all())

    def get_last_record_today(self, worker_id: str, today: Optional[str] = None) -> Optional[AttendanceRecord]:
        """Latest record of the worker today, by instant."""
        today = today or local_today()
        return last_record_for_worker(self.get_worker_day_records(worker_id, today), worker_id, today)

    def create_punch(self, worker: Worker, event_type: AttendanceEventType,
                     timestamp: Optional[str] = None) -> AttendanceRecord:
        """
        Record a worker punch at the current time.

        Args:
            worker: The authenticated worker
            event_type: Requested event
            timestamp: Override for the punch instant (defaults to now)

        Returns:
            Created AttendanceRecord instance

        Raises:
            HTTPException: 400 if the event is not allowed after the
                worker's last event today
        """
        timestamp = timestamp or current_timestamp()
        today = date_from_timestamp(timestamp)

        last_record = self.get_last_record_today(worker.id, today)
        allowed = next_valid_events_for(last_record, today)
        if event_type not in allowed:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Evento {event_type.value} no permitido en este momento"
            )

        db_record = self._build_record(worker, event_type, timestamp)
        self.db.add(db_record)
        self.db.commit()
        self.db.refresh(db_record)

        return db_record

    def create_manual_record(self, record_data: AttendanceRecordCreate) -> AttendanceRecord:
        """
        Create a record on behalf of a worker (admin manual entry).

        Raises:
            HTTPException: 404 if the worker does not exist
        """
        worker = self.db.query(Worker).filter(Worker.id == record_data.worker_id).first()
        if not worker:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Trabajador no encontrado"
            )

        db_record = self._build_record(
            worker,
            record_data.event_type,
            record_data.timestamp,
            location=record_data.location,
            notes=record_data.notes,
        )
        self.db.add(db_record)
        self.db.commit()
        self.db.refresh(db_record)

        return db_record

    def update_record(self, record_id: str, record_update: AttendanceRecordUpdate) -> Optional[AttendanceRecord]:
        """
        Change a record's event type and/or timestamp.

        The calendar date is recomputed from the new timestamp.
        """
        db_record = self.get_record(record_id)
        if not db_record:
            return None

        update_data = record_update.model_dump(exclude_unset=True, exclude_none=True)

        if "event_type" in update_data:
            db_record.event_type = update_data["event_type"]

        if "timestamp" in update_data:
            db_record.timestamp = update_data["timestamp"]
            db_record.date = date_from_timestamp(update_data["timestamp"])

        self.db.commit()
        self.db.refresh(db_record)

        return db_record

    def delete_record(self, record_id: str) -> bool:
        """Delete record by ID."""
        db_record = self.get_record(record_id)
        if not db_record:
            return False

        self.db.delete(db_record)
        self.db.commit()

        return True

    def get_records(self, date: Optional[str] = None,
                    start_date: Optional[str] = None,
                    end_date: Optional[str] = None,
                    worker_id: Optional[str] = None,
                    event_type: Optional[AttendanceEventType] = None,
                    limit: Optional[int] = None) -> List[AttendanceRecord]:
        """
        Get records with optional filters, newest first.

        Args:
            date: Exact calendar day (YYYY-MM-DD)
            start_date: First day of a range (inclusive)
            end_date: Last day of a range (inclusive)
            worker_id: Only this worker's records
            event_type: Only this event type
            limit: Maximum number of records to return

        Returns:
            List of AttendanceRecord instances
        """
        query = self.db.query(AttendanceRecord)

        if date:
            query = query.filter(AttendanceRecord.date == date)

        if start_date:
            query = query.filter(AttendanceRecord.date >= start_date)

        if end_date:
            query = query.filter(AttendanceRecord.date <= end_date)

        if worker_id:
            query = query.filter(AttendanceRecord.worker_id == worker_id)

        if event_type:
            query = query.filter(AttendanceRecord.event_type == event_type)

        records = sort_newest_first(query.all())
        if limit is not None:
            records = records[:limit]
        return records

    def get_record_ids(self) -> Set[str]:
        return {row[0] for row in self.db.query(AttendanceRecord.id).all()}

    def count_records(self) -> int:
        return self.db.query(AttendanceRecord).count()

    def bulk_insert(self, records: Iterable[AttendanceRecordExport]) -> int:
        """Insert imported records as-is (ids and snapshots preserved)."""
        count = 0
        for record in records:
            self.db.add(AttendanceRecord(
                id=record.id,
                worker_id=record.worker_id,
                worker_name=record.worker_name,
                worker_document=record.worker_document,
                event_type=record.event_type,
                timestamp=record.timestamp,
                date=record.date or date_from_timestamp(record.timestamp),
                location=record.location or global_settings.DEFAULT_LOCATION,
                notes=record.notes,
            ))
            count += 1
        self.db.commit()
        return count


# Convenience functions
def get_record(db: Session, record_id: str) -> Optional[AttendanceRecord]:
    """Get record by ID."""
    return AttendanceCRUD(db).get_record(record_id)


def create_manual_record(db: Session, record_data: AttendanceRecordCreate) -> AttendanceRecord:
    """Create an admin manual entry."""
    return AttendanceCRUD(db).create_manual_record(record_data)


def update_record(db: Session, record_id: str, record_data: AttendanceRecordUpdate) -> Optional[AttendanceRecord]:
    """Edit a record."""
    return AttendanceCRUD(db).update_record(record_id, record_data)


def delete_record(db: Session, record_id: str) -> bool:
    """Delete a record."""
    return AttendanceCRUD(db).delete_record(record_id)


def get_records(db: Session, **filters) -> List[AttendanceRecord]:
    """Filtered record listing."""
    return AttendanceCRUD(db).get_records(**filters)
