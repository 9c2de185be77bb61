from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from asistencia.fastapi import models  # noqa: F401
from asistencia.fastapi.crud.admin import create_admin
from asistencia.fastapi.crud.worker import create_worker
from asistencia.fastapi.dependencies.database import Base, get_sync_db
from asistencia.fastapi.core.utils import date_from_timestamp
from asistencia.fastapi.main import create_app
from asistencia.fastapi.schemas.admin import AdminCreate
from asistencia.fastapi.schemas.sync import SyncRecord
from asistencia.fastapi.schemas.worker import WorkerCreate
from asistencia.fastapi.services.sheets import SheetsSyncError

ADMIN_PIN = "999888"
WORKER_PIN = "1234"


def make_record(worker_id, event_type, timestamp, record_id=None, name="Juan Pérez", document="12345678"):
    """Plain record object for the pure report functions."""
    return SimpleNamespace(
        id=record_id or f"{worker_id}-{event_type}-{timestamp}",
        worker_id=worker_id,
        worker_name=name,
        worker_document=document,
        event_type=event_type,
        timestamp=timestamp,
        date=date_from_timestamp(timestamp),
        location="Oficina Principal",
        notes=None,
    )


class FakeMirror:
    """Stands in for SheetsMirror; records what it was asked to append."""

    def __init__(self, fail=False):
        self.fail = fail
        self.synced = []

    def sync_record(self, record):
        if self.fail:
            raise SheetsSyncError("Sheets API unavailable")
        self.synced.append(SyncRecord.model_validate(record))

    def sync_records(self, records):
        ok = fail = 0
        for record in records:
            try:
                self.sync_record(record)
                ok += 1
            except SheetsSyncError:
                fail += 1
        return ok, fail


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def mirror():
    return FakeMirror()


@pytest.fixture
def app(engine, mirror):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app = create_app(sheets_mirror=mirror)
    app.dependency_overrides[get_sync_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    # No context manager: the lifespan (real database, real mirror) stays off
    return TestClient(app)


@pytest.fixture
def admin(db):
    return create_admin(db, AdminCreate(name="Administrador Principal", pin=ADMIN_PIN))


@pytest.fixture
def worker(db):
    return create_worker(db, WorkerCreate(
        name="Juan Carlos Pérez",
        document="12345678",
        position="Técnico Senior",
        pin=WORKER_PIN,
    ))


@pytest.fixture
def admin_headers(client, admin):
    response = client.post("/api/v1/auth/admin/login", json={"pin": ADMIN_PIN})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def worker_headers(client, worker):
    response = client.post("/api/v1/auth/worker/login", json={"worker_id": worker.id, "pin": WORKER_PIN})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
