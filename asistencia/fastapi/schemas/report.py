"""
Pydantic schemas for derived attendance reports.

None of these are stored; they are computed on demand from the record
collection.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class DailyReport(BaseModel):
    """One row per worker for a given date."""

    worker_id: str = Field(..., description="Worker identifier")
    worker_name: str = Field(default="", description="Worker name")
    worker_document: str = Field(default="", description="Worker document")
    date: str = Field(..., description="Report date (YYYY-MM-DD)")
    entrada: Optional[str] = Field(None, description="Entry time (HH:MM:SS)")
    refrigerio: Optional[str] = Field(None, description="Break start time")
    termino_refrigerio: Optional[str] = Field(None, description="Break end time")
    salida: Optional[str] = Field(None, description="Exit time")
    horas_trabajadas: float = Field(..., description="Gross hours, entry to exit")
    horas_netas: float = Field(..., description="Hours net of the break")


class SunafilReport(BaseModel):
    """Periodic hours summary for one worker, SUNAFIL format."""

    empresa: str = Field(..., description="Company name")
    ruc: str = Field(..., description="Company tax id")
    periodo: str = Field(..., description="Period label, e.g. '2024-01-01 al 2024-01-31'")
    worker_id: str = Field(..., description="Worker identifier")
    trabajador: str = Field(..., description="Worker name")
    documento: str = Field(..., description="Worker document")
    dias_trabajados: int = Field(..., description="Days with an entry or exit event")
    horas_totales: float = Field(..., description="Sum of daily net hours")
    horas_regulares: float = Field(..., description="Hours up to 8 per worked day")
    horas_extras: float = Field(..., description="Hours beyond the regular cap")


class TodayStats(BaseModel):
    """Quick stats for the current day."""

    presentes: int = Field(..., description="Workers with an entry today")
    ausentes: int = Field(..., description="Workers ever seen minus present ones")
    tardanzas: int = Field(..., description="Entries at or after the late hour")


class MonthlyStats(BaseModel):
    """Quick stats for the current month."""

    total_registros: int = Field(..., description="Events recorded this month")
    promedio_horas: float = Field(..., description="Average gross hours per worked day")


class RecordStatistics(BaseModel):
    """Record counters for the admin dashboard."""

    total: int
    today: int
    this_month: int
    by_event_type: Dict[str, int]


class DashboardResponse(BaseModel):
    """Everything the admin dashboard shows at a glance."""

    date: str
    active_workers: int = Field(..., description="Workers allowed to punch")
    today: TodayStats
    monthly: MonthlyStats
    records: RecordStatistics


class DailyReportResponse(BaseModel):
    date: str
    date_label: str = Field(..., description="Spanish long date, e.g. 'lunes, 15 de enero de 2024'")
    rows: List[DailyReport]


class SunafilReportResponse(BaseModel):
    start_date: str
    end_date: str
    rows: List[SunafilReport]
