"""
Report endpoints for admins and accountants.

Reports are computed on the fly from a snapshot of the records loaded for
the request; nothing derived is stored.
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status, Query
from sqlalchemy.orm import Session

from asistencia.fastapi.core.utils import format_date, local_today
from asistencia.fastapi.crud.attendance import get_records
from asistencia.fastapi.crud.worker import get_worker_count, get_workers
from asistencia.fastapi.dependencies.database import get_sync_db
from asistencia.fastapi.models.admin import Admin
from asistencia.fastapi.schemas.report import (
    DailyReportResponse, DashboardResponse, SunafilReportResponse
)
from asistencia.fastapi.services.exports import XLSX_MEDIA_TYPE, sunafil_report_xlsx
from asistencia.fastapi.services.reports import daily_report, sunafil_report
from asistencia.fastapi.services.stats import monthly_stats, record_statistics, today_stats
from asistencia.security.dependencies import RequireActiveAdmin


router = APIRouter(tags=["reports"])

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _check_range(start_date: str, end_date: str):
    if start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="La fecha inicial no puede ser posterior a la final"
        )


@router.get("/daily", response_model=DailyReportResponse, summary="Daily Report")
async def get_daily_report(
    date: Optional[str] = Query(None, pattern=DATE_PATTERN, description="Day (defaults to today)"),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    One row per registered worker for the day, with punch times and hours.

    **Permissions:** Requires active admin authentication
    """
    date = date or local_today()
    records = get_records(db, date=date)
    workers = get_workers(db, limit=10000)
    return DailyReportResponse(
        date=date,
        date_label=format_date(date),
        rows=daily_report(records, date, workers)
    )


def _sunafil_rows(db: Session, start_date: str, end_date: str):
    _check_range(start_date, end_date)
    records = get_records(db, start_date=start_date, end_date=end_date)
    return sunafil_report(records, start_date, end_date)


@router.get("/sunafil", response_model=SunafilReportResponse, summary="SUNAFIL Report")
async def get_sunafil_report(
    start_date: str = Query(..., pattern=DATE_PATTERN),
    end_date: str = Query(..., pattern=DATE_PATTERN),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    Worked days and regular/overtime hours per worker over a period.

    **Permissions:** Requires active admin authentication

    **Errors:**
    - **400**: start_date after end_date
    """
    rows = _sunafil_rows(db, start_date, end_date)
    return SunafilReportResponse(start_date=start_date, end_date=end_date, rows=rows)


@router.get("/sunafil.xlsx", summary="SUNAFIL Report (Excel)")
async def download_sunafil_report(
    start_date: str = Query(..., pattern=DATE_PATTERN),
    end_date: str = Query(..., pattern=DATE_PATTERN),
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    Same data as ``/sunafil`` as an Excel download.

    **Permissions:** Requires active admin authentication
    """
    rows = _sunafil_rows(db, start_date, end_date)
    try:
        content = sunafil_report_xlsx(rows)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"No se pudo generar el archivo Excel: {str(e)}"
        )

    filename = f"reporte_sunafil_{start_date}_{end_date}.xlsx"
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/dashboard", response_model=DashboardResponse, summary="Dashboard Stats")
async def dashboard(
    db: Session = Depends(get_sync_db),
    current_admin: Admin = RequireActiveAdmin
):
    """
    Today's presence, absences and late arrivals plus monthly totals.

    **Permissions:** Requires active admin authentication
    """
    today = local_today()
    records = get_records(db)
    return DashboardResponse(
        date=today,
        active_workers=get_worker_count(db),
        today=today_stats(records, today),
        monthly=monthly_stats(records, today),
        records=record_statistics(records, today),
    )
