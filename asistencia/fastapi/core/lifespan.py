import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from asistencia.fastapi.core.init_settings import global_settings
from asistencia.fastapi.dependencies.database import init_db, SessionLocal
from asistencia.fastapi.crud.admin import create_admin, get_admin_count
from asistencia.fastapi.schemas.admin import AdminCreate
from asistencia.fastapi.services.sheets import build_sheets_mirror

logger = logging.getLogger(__name__)


def ensure_initial_admin(db, settings=global_settings):
    """Create the first admin from settings when no admin exists."""
    admin_count = get_admin_count(db, include_inactive=True)
    if admin_count:
        logger.info("Found %d existing admin(s)", admin_count)
        return None

    admin = create_admin(db, AdminCreate(
        name=settings.INITIAL_ADMIN_NAME,
        pin=settings.INITIAL_ADMIN_PIN,
        is_active=True
    ))
    logger.info("Created initial admin: %s", admin.name)
    logger.warning("Please change the initial admin PIN after first login!")
    return admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize the database
    init_db()

    db = SessionLocal()
    try:
        ensure_initial_admin(db)
    except Exception as e:
        logger.error("Error creating initial admin: %s", e)
    finally:
        db.close()

    # Sheets mirror; startup continues without it
    if getattr(app.state, "sheets_mirror", None) is None:
        try:
            app.state.sheets_mirror = build_sheets_mirror(global_settings)
        except Exception as e:
            logger.error("Google Sheets mirror unavailable: %s", e)
            app.state.sheets_mirror = None

    yield
