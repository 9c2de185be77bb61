"""
Worker model for employees who punch the time clock.
"""

from datetime import datetime
from uuid import uuid4
from sqlalchemy import Column, String, DateTime, Boolean, Text

from asistencia.fastapi.dependencies.database import Base

DEFAULT_PHOTO = "/assets/workers/default-avatar.png"


def _new_worker_id() -> str:
    return uuid4().hex


class Worker(Base):
    """
    Worker model.

    Attributes:
        id: Unique identifier
        name: Full name
        document: National ID (DNI), unique among workers
        position: Job title
        photo: Photo URI or data URL
        pin_hash: Hash of the worker's 4-6 digit PIN
        is_active: Whether the worker may log in
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "workers"

    id = Column(
        String(64),
        primary_key=True,
        default=_new_worker_id,
        index=True,
        doc="Unique worker identifier"
    )

    name = Column(
        String(150),
        nullable=False,
        doc="Worker full name"
    )

    document = Column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
        doc="National ID number"
    )

    position = Column(
        String(100),
        nullable=False,
        default="",
        doc="Job title"
    )

    photo = Column(
        Text,
        nullable=False,
        default=DEFAULT_PHOTO,
        doc="Photo URI or data blob"
    )

    pin_hash = Column(
        String(255),
        nullable=False,
        doc="Hashed PIN"
    )

    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        doc="Whether the worker account is active"
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        doc="Creation timestamp"
    )

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        doc="Last update timestamp"
    )

    def __repr__(self) -> str:
        """String representation of Worker."""
        return f"<Worker(id={self.id}, name='{self.name}', document='{self.document}', active={self.is_active})>"
