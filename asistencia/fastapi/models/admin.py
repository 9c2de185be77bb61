"""
Admin model for the authentication system.

Admins log in with a PIN only. PINs are stored hashed, the same way as
worker PINs.
"""

import uuid
from datetime import datetime
from enum import Enum
from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum

from asistencia.fastapi.dependencies.database import Base


class AdminRole(str, Enum):
    """Admin roles."""
    ADMIN = "admin"
    CONTADOR = "contador"


class Admin(Base):
    """
    Admin user model for authentication and authorization.

    ``contador`` admins are the accountants who pull SUNAFIL reports; they
    share the admin endpoints.
    """

    __tablename__ = "admins"

    # Primary key
    id = Column(
        String(64),
        primary_key=True,
        default=lambda: uuid.uuid4().hex,
        comment="Unique identifier for the admin"
    )

    name = Column(
        String(150),
        nullable=False,
        comment="Display name"
    )

    pin_hash = Column(
        String(255),
        nullable=False,
        comment="Hashed PIN"
    )

    role = Column(
        SQLEnum(AdminRole),
        nullable=False,
        default=AdminRole.ADMIN,
        comment="admin or contador"
    )

    # Status field
    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the admin account is active"
    )

    # Timestamps
    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
        comment="When the admin account was created"
    )

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
        comment="When the admin account was last updated"
    )

    def __repr__(self) -> str:
        """String representation of the Admin model."""
        return f"<Admin(id={self.id}, name='{self.name}', role={self.role}, is_active={self.is_active})>"

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"Admin: {self.name}"
