"""
Admin CRUD operations.

Admins have no username: login finds the admin whose PIN matches, so two
active admins must not share a PIN.
"""

from typing import List, Optional
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from asistencia.fastapi.models.admin import Admin
from asistencia.fastapi.schemas.admin import AdminCreate, AdminUpdate
from asistencia.security.password import hash_pin, verify_pin


class AdminCRUD:
    """CRUD operations for Admin model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def _check_pin_free(self, pin: str, admin_id: Optional[str] = None):
        existing = self.find_admin_by_pin(pin)
        if existing and existing.id != admin_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="PIN ya asignado a otro administrador"
            )

    def create_admin(self, admin_data: AdminCreate) -> Admin:
        """
        Create a new admin.

        Raises:
            HTTPException: If another active admin already uses the PIN
        """
        self._check_pin_free(admin_data.pin)

        db_admin = Admin(
            name=admin_data.name,
            pin_hash=hash_pin(admin_data.pin),
            role=admin_data.role,
            is_active=admin_data.is_active
        )

        self.db.add(db_admin)
        self.db.commit()
        self.db.refresh(db_admin)

        return db_admin

    def get_admin(self, admin_id: str) -> Optional[Admin]:
        """Get admin by ID."""
        return self.db.query(Admin).filter(Admin.id == admin_id).first()

    def get_admins(self, skip: int = 0, limit: int = 100, include_inactive: bool = False) -> List[Admin]:
        """Get list of admins with pagination."""
        query = self.db.query(Admin)

        if not include_inactive:
            query = query.filter(Admin.is_active == True)

        return query.offset(skip).limit(limit).all()

    def find_admin_by_pin(self, pin: str) -> Optional[Admin]:
        """
        Find the active admin whose PIN matches.

        Each active admin's hash is checked in turn.
        """
        for admin in self.get_admins(limit=1000):
            if verify_pin(pin, admin.pin_hash):
                return admin
        return None

    def update_admin(self, admin_id: str, admin_update: AdminUpdate) -> Optional[Admin]:
        """Update admin information; a new PIN is hashed."""
        db_admin = self.get_admin(admin_id)
        if not db_admin:
            return None

        update_data = admin_update.model_dump(exclude_unset=True, exclude_none=True)

        if "pin" in update_data:
            pin = update_data.pop("pin")
            self._check_pin_free(pin, admin_id)
            update_data["pin_hash"] = hash_pin(pin)

        for field, value in update_data.items():
            setattr(db_admin, field, value)

        self.db.commit()
        self.db.refresh(db_admin)

        return db_admin

    def count_admins(self, include_inactive: bool = False) -> int:
        query = self.db.query(Admin)

        if not include_inactive:
            query = query.filter(Admin.is_active == True)

        return query.count()


# Convenience functions
def create_admin(db: Session, admin_data: AdminCreate) -> Admin:
    """Create a new admin."""
    return AdminCRUD(db).create_admin(admin_data)


def get_admin(db: Session, admin_id: str) -> Optional[Admin]:
    """Get admin by ID."""
    return AdminCRUD(db).get_admin(admin_id)


def get_admins(db: Session, skip: int = 0, limit: int = 100, include_inactive: bool = False) -> List[Admin]:
    """Get list of admins."""
    return AdminCRUD(db).get_admins(skip=skip, limit=limit, include_inactive=include_inactive)


def find_admin_by_pin(db: Session, pin: str) -> Optional[Admin]:
    """Find the active admin with this PIN."""
    return AdminCRUD(db).find_admin_by_pin(pin)


def update_admin(db: Session, admin_id: str, admin_data: AdminUpdate) -> Optional[Admin]:
    """Update admin by ID."""
    return AdminCRUD(db).update_admin(admin_id, admin_data)


def get_admin_count(db: Session, include_inactive: bool = False) -> int:
    """Get total count of admins."""
    return AdminCRUD(db).count_admins(include_inactive=include_inactive)
