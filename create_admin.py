"""
Create an admin account from the command line.

Usage:
    python create_admin.py "Contador SUNAFIL" 123456 [contador]

Without arguments the initial admin from settings is created, if no admin
exists yet.
"""

import sys
import os

# Add the project root to the Python path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from asistencia.fastapi.dependencies.database import SessionLocal, init_db
from asistencia.fastapi.core.lifespan import ensure_initial_admin
from asistencia.fastapi.crud.admin import create_admin
from asistencia.fastapi.models.admin import AdminRole
from asistencia.fastapi.schemas.admin import AdminCreate


def main(argv):
    init_db()
    db = SessionLocal()

    try:
        if len(argv) < 3:
            admin = ensure_initial_admin(db)
            if admin is None:
                print("Admins already exist, nothing to do")
                return 0
        else:
            role = AdminRole(argv[3]) if len(argv) > 3 else AdminRole.ADMIN
            admin = create_admin(db, AdminCreate(name=argv[1], pin=argv[2], role=role))

        print("Successfully created admin:")
        print(f"   ID: {admin.id}")
        print(f"   Name: {admin.name}")
        print(f"   Role: {admin.role.value}")
        print("\nLogin: POST http://localhost:8000/api/v1/auth/admin/login {\"pin\": ...}")
        return 0

    except Exception as e:
        print(f"Error creating admin: {e}")
        return 1

    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main(sys.argv))
