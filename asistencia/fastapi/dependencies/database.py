"""
Database engine, session factory and declarative base.

Endpoints receive a session through the ``get_sync_db`` dependency; tests
override that dependency with their own in-memory engine.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from asistencia.fastapi.core.init_settings import global_settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # SQLite connections are shared across FastAPI's threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(global_settings.DB_URL, **_engine_kwargs(global_settings.DB_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db():
    """Create all tables registered on ``Base.metadata``."""
    # Import models so they are registered before create_all
    from asistencia.fastapi import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_sync_db():
    """Yield a database session and close it after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
