"""
Worker CRUD operations.

This module provides database operations for workers including creation,
retrieval, profile updates, PIN rotation and deletion.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from asistencia.fastapi.models.worker import Worker, DEFAULT_PHOTO
from asistencia.fastapi.schemas.worker import WorkerCreate, WorkerUpdate
from asistencia.security.password import hash_pin


class WorkerCRUD:
    """CRUD operations for Worker model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def _check_document_free(self, document: str, worker_id: Optional[str] = None):
        existing = self.get_worker_by_document(document)
        if existing and existing.id != worker_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Ya existe un trabajador con ese documento"
            )

    def create_worker(self, worker_data: WorkerCreate) -> Worker:
        """
        Create a new worker.

        Args:
            worker_data: Worker creation data with plaintext PIN

        Returns:
            Created Worker instance

        Raises:
            HTTPException: If the document is already registered
        """
        self._check_document_free(worker_data.document)

        db_worker = Worker(
            name=worker_data.name.strip(),
            document=worker_data.document,
            position=worker_data.position.strip(),
            photo=worker_data.photo or DEFAULT_PHOTO,
            pin_hash=hash_pin(worker_data.pin),
            is_active=worker_data.is_active
        )

        self.db.add(db_worker)
        self.db.commit()
        self.db.refresh(db_worker)

        return db_worker

    def get_worker(self, worker_id: str) -> Optional[Worker]:
        """Get worker by ID."""
        return self.db.query(Worker).filter(Worker.id == worker_id).first()

    def get_worker_by_document(self, document: str) -> Optional[Worker]:
        """Get worker by national ID."""
        return self.db.query(Worker).filter(Worker.document == document).first()

    def get_workers(self, skip: int = 0, limit: int = 100, include_inactive: bool = True) -> List[Worker]:
        """
        Get list of workers ordered by name.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            include_inactive: Whether to include inactive workers

        Returns:
            List of Worker instances
        """
        query = self.db.query(Worker)

        if not include_inactive:
            query = query.filter(Worker.is_active == True)

        return query.order_by(Worker.name).offset(skip).limit(limit).all()

    def update_worker(self, worker_id: str, worker_update: WorkerUpdate) -> Optional[Worker]:
        """
        Update worker profile fields.

        Returns:
            Updated Worker instance or None if not found

        Raises:
            HTTPException: If the new document belongs to another worker
        """
        db_worker = self.get_worker(worker_id)
        if not db_worker:
            return None

        update_data = worker_update.model_dump(exclude_unset=True, exclude_none=True)

        if "document" in update_data:
            self._check_document_free(update_data["document"], worker_id)

        for field, value in update_data.items():
            setattr(db_worker, field, value)

        self.db.commit()
        self.db.refresh(db_worker)

        return db_worker

    def set_pin(self, worker_id: str, pin: str) -> Optional[Worker]:
        """Replace a worker's PIN hash."""
        db_worker = self.get_worker(worker_id)
        if not db_worker:
            return None

        db_worker.pin_hash = hash_pin(pin)
        self.db.commit()
        self.db.refresh(db_worker)

        return db_worker

    def delete_worker(self, worker_id: str) -> bool:
        """
        Delete worker by ID.

        Attendance records keep their denormalized worker snapshot.
        """
        db_worker = self.get_worker(worker_id)
        if not db_worker:
            return False

        self.db.delete(db_worker)
        self.db.commit()

        return True

    def count_workers(self, include_inactive: bool = False) -> int:
        query = self.db.query(Worker)
        if not include_inactive:
            query = query.filter(Worker.is_active == True)
        return query.count()


# Convenience functions
def create_worker(db: Session, worker_data: WorkerCreate) -> Worker:
    """Create a new worker."""
    return WorkerCRUD(db).create_worker(worker_data)


def get_worker(db: Session, worker_id: str) -> Optional[Worker]:
    """Get worker by ID."""
    return WorkerCRUD(db).get_worker(worker_id)


def get_workers(db: Session, skip: int = 0, limit: int = 100, include_inactive: bool = True) -> List[Worker]:
    """Get list of workers."""
    return WorkerCRUD(db).get_workers(skip=skip, limit=limit, include_inactive=include_inactive)


def update_worker(db: Session, worker_id: str, worker_data: WorkerUpdate) -> Optional[Worker]:
    """Update worker by ID."""
    return WorkerCRUD(db).update_worker(worker_id, worker_data)


def set_worker_pin(db: Session, worker_id: str, pin: str) -> Optional[Worker]:
    """Rotate a worker's PIN."""
    return WorkerCRUD(db).set_pin(worker_id, pin)


def delete_worker(db: Session, worker_id: str) -> bool:
    """Delete worker by ID."""
    return WorkerCRUD(db).delete_worker(worker_id)


def get_worker_count(db: Session, include_inactive: bool = False) -> int:
    """Get total count of workers."""
    return WorkerCRUD(db).count_workers(include_inactive=include_inactive)
