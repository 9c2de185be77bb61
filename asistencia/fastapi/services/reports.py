"""
Daily and periodic (SUNAFIL) report generators.

Both generators take an in-memory snapshot of records and return derived
rows. They never raise on bad data; a malformed record simply contributes
nothing.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from asistencia.fastapi.core.init_settings import global_settings
from asistencia.fastapi.core.utils import format_time
from asistencia.fastapi.models.attendance import AttendanceEventType
from asistencia.fastapi.schemas.report import DailyReport, SunafilReport
from asistencia.fastapi.services.hours import gross_hours, net_hours

logger = logging.getLogger(__name__)

# Fixed business rule: hours beyond this per worked day are overtime.
REGULAR_HOURS_PER_DAY = 8


def first_events(records: Iterable) -> Dict[AttendanceEventType, object]:
    """
    First record of each event type, in input order.

    When a day has several records of the same type only the first one
    found is used.
    """
    found: Dict[AttendanceEventType, object] = {}
    for record in records:
        if record is None:
            continue
        try:
            event = AttendanceEventType(record.event_type)
        except ValueError:
            continue
        found.setdefault(event, record)
    return found


def _timestamp(record) -> Optional[str]:
    return record.timestamp if record is not None else None


def _day_net_hours(events: Dict[AttendanceEventType, object]) -> float:
    return net_hours(
        _timestamp(events.get(AttendanceEventType.ENTRADA)),
        _timestamp(events.get(AttendanceEventType.SALIDA)),
        _timestamp(events.get(AttendanceEventType.REFRIGERIO)),
        _timestamp(events.get(AttendanceEventType.TERMINO_REFRIGERIO)),
    )


def daily_report(records: Iterable, date: str, workers: Iterable) -> List[DailyReport]:
    """
    Build one row per worker for ``date``.

    Args:
        records: Attendance records (any objects with record attributes)
        date: Day to report (YYYY-MM-DD), matched exactly
        workers: Roster; objects with ``id``, ``name`` and ``document``

    Returns:
        Rows in roster order
    """
    if not date or records is None or workers is None:
        return []

    day_records = [r for r in records if r is not None and r.date == date]

    rows = []
    for worker in workers:
        events = first_events(r for r in day_records if r.worker_id == worker.id)

        entrada = events.get(AttendanceEventType.ENTRADA)
        refrigerio = events.get(AttendanceEventType.REFRIGERIO)
        termino = events.get(AttendanceEventType.TERMINO_REFRIGERIO)
        salida = events.get(AttendanceEventType.SALIDA)

        rows.append(DailyReport(
            worker_id=worker.id,
            worker_name=worker.name or "",
            worker_document=worker.document or "",
            date=date,
            entrada=format_time(entrada.timestamp) if entrada else None,
            refrigerio=format_time(refrigerio.timestamp) if refrigerio else None,
            termino_refrigerio=format_time(termino.timestamp) if termino else None,
            salida=format_time(salida.timestamp) if salida else None,
            horas_trabajadas=gross_hours(_timestamp(entrada), _timestamp(salida)),
            horas_netas=_day_net_hours(events),
        ))

    return rows


def group_by_worker_and_day(records: Iterable) -> "OrderedDict[str, OrderedDict[str, list]]":
    """Group records as ``{worker_id: {date: [records]}}`` keeping input order."""
    grouped: "OrderedDict[str, OrderedDict[str, list]]" = OrderedDict()
    for record in records:
        if record is None or not record.worker_id or not record.date:
            continue
        grouped.setdefault(record.worker_id, OrderedDict()).setdefault(record.date, []).append(record)
    return grouped


def sunafil_report(records: Iterable, start_date: str, end_date: str,
                   company: Optional[str] = None,
                   ruc: Optional[str] = None) -> List[SunafilReport]:
    """
    Aggregate net hours per worker over an inclusive date range.

    A day counts as worked when it has an ENTRADA or a SALIDA; days with
    only break events are ignored. Regular hours are capped at 8 per
    worked day and the remainder is overtime. Workers with no records in
    the range produce no row.

    Args:
        records: Attendance records
        start_date: First day (YYYY-MM-DD), compared as a string
        end_date: Last day (YYYY-MM-DD), compared as a string
        company: Company name for the header columns
        ruc: Company RUC for the header columns

    Returns:
        One row per worker, in order of first appearance
    """
    if not start_date or not end_date or records is None:
        return []

    company = company if company is not None else global_settings.COMPANY_NAME
    ruc = ruc if ruc is not None else global_settings.COMPANY_RUC
    periodo = f"{start_date} al {end_date}"

    in_range = [
        r for r in records
        if r is not None and r.date and start_date <= r.date <= end_date
    ]

    rows = []
    for worker_id, days in group_by_worker_and_day(in_range).items():
        total_hours = 0.0
        worked_days = set()

        for day, day_records in days.items():
            events = first_events(day_records)
            if AttendanceEventType.ENTRADA in events or AttendanceEventType.SALIDA in events:
                worked_days.add(day)
                total_hours += _day_net_hours(events)

        first_record = next(iter(days.values()))[0]
        regular_hours = min(total_hours, len(worked_days) * REGULAR_HOURS_PER_DAY)
        extra_hours = max(0.0, total_hours - regular_hours)

        rows.append(SunafilReport(
            empresa=company,
            ruc=ruc,
            periodo=periodo,
            worker_id=worker_id,
            trabajador=first_record.worker_name or "",
            documento=first_record.worker_document or "",
            dias_trabajados=len(worked_days),
            horas_totales=total_hours,
            horas_regulares=regular_hours,
            horas_extras=extra_hours,
        ))

    logger.debug("SUNAFIL report %s: %d rows", periodo, len(rows))
    return rows
