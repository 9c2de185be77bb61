"""
Dashboard stat aggregators.

Glance-view rollups only: absences are estimated from every worker that
ever punched, not from the live roster.
"""

from typing import Iterable, Optional

from asistencia.fastapi.core.init_settings import global_settings
from asistencia.fastapi.core.utils import local_today, to_local
from asistencia.fastapi.models.attendance import AttendanceEventType
from asistencia.fastapi.schemas.report import MonthlyStats, RecordStatistics, TodayStats
from asistencia.fastapi.services.event_flow import EVENT_ORDER
from asistencia.fastapi.services.hours import gross_hours
from asistencia.fastapi.services.reports import first_events, group_by_worker_and_day


def _is_event(record, event: AttendanceEventType) -> bool:
    return record.event_type == event


def today_stats(records: Iterable, today: Optional[str] = None,
                late_hour: Optional[int] = None) -> TodayStats:
    """
    Present, absent and late counts for ``today``.

    Args:
        records: Attendance records
        today: Day (YYYY-MM-DD), defaults to the local date
        late_hour: Local hour from which an entry is late, defaults to settings
    """
    today = today or local_today()
    late_hour = global_settings.LATE_ARRIVAL_HOUR if late_hour is None else late_hour
    records = [r for r in records or [] if r is not None]

    entries_today = [
        r for r in records
        if r.date == today and _is_event(r, AttendanceEventType.ENTRADA)
    ]

    present = {r.worker_id for r in entries_today}
    everyone = {r.worker_id for r in records}

    late = 0
    for record in entries_today:
        local = to_local(record.timestamp)
        if local is not None and local.hour >= late_hour:
            late += 1

    return TodayStats(
        presentes=len(present),
        ausentes=max(0, len(everyone) - len(present)),
        tardanzas=late,
    )


def monthly_stats(records: Iterable, today: Optional[str] = None) -> MonthlyStats:
    """
    Event count and average worked hours for the month containing ``today``.

    The average covers worker-days where both the entry and the exit exist.
    """
    month = (today or local_today())[:7]
    month_records = [r for r in records or [] if r is not None and (r.date or "").startswith(month)]

    spans = []
    for days in group_by_worker_and_day(month_records).values():
        for day_records in days.values():
            events = first_events(day_records)
            entrada = events.get(AttendanceEventType.ENTRADA)
            salida = events.get(AttendanceEventType.SALIDA)
            if entrada is not None and salida is not None:
                spans.append(gross_hours(entrada.timestamp, salida.timestamp))

    return MonthlyStats(
        total_registros=len(month_records),
        promedio_horas=sum(spans) / len(spans) if spans else 0.0,
    )


def record_statistics(records: Iterable, today: Optional[str] = None) -> RecordStatistics:
    """Total, today, this-month and per-event-type record counts."""
    today = today or local_today()
    month = today[:7]
    records = [r for r in records or [] if r is not None]

    return RecordStatistics(
        total=len(records),
        today=sum(1 for r in records if r.date == today),
        this_month=sum(1 for r in records if (r.date or "").startswith(month)),
        by_event_type={
            event.value: sum(1 for r in records if _is_event(r, event))
            for event in EVENT_ORDER
        },
    )
