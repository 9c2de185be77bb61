from fastapi import FastAPI
from asistencia.fastapi.api.v1.endpoints import (
    admin, attendance, auth, base, export, reports, sync, workers
)

def setup_routers(app: FastAPI):
    # Main routes and Google credentials check
    app.include_router(base.router, prefix="", tags=["main"])

    # Sheets sync glue (unversioned paths used by the front end)
    app.include_router(sync.router, prefix="", tags=["sync"])

    # Authentication routes (worker and admin PIN logins)
    app.include_router(auth.router, prefix="/api/v1/auth", tags=["authentication"])

    # Worker management routes
    app.include_router(workers.router, prefix="/api/v1/workers", tags=["workers"])

    # Attendance routes
    app.include_router(attendance.router, prefix="/api/v1/attendance", tags=["attendance"])
    app.include_router(attendance.admin_router, prefix="/api/v1/attendance", tags=["admin-attendance"])

    # Reports and backups
    app.include_router(reports.router, prefix="/api/v1/reports", tags=["reports"])
    app.include_router(export.router, prefix="/api/v1/export", tags=["export"])

    # Pending sync queue
    app.include_router(sync.admin_router, prefix="/api/v1/sync", tags=["admin-sync"])

    # Admin accounts and audit trail
    app.include_router(admin.router, prefix="/api/v1/admin", tags=["admin"])
