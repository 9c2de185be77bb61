"""
Attendance event state machine.

Given the worker's last event of the day, decide which punch buttons are
enabled. Only the most recent event is consulted; the day's history is not
replayed, so an edited or out-of-order record can leave the buttons out of
step with the full history.
"""

from typing import Dict, FrozenSet, Iterable, Optional

from asistencia.fastapi.models.attendance import AttendanceEventType
from asistencia.fastapi.core.utils import local_today, to_epoch_ms

ENTRADA = AttendanceEventType.ENTRADA
REFRIGERIO = AttendanceEventType.REFRIGERIO
TERMINO_REFRIGERIO = AttendanceEventType.TERMINO_REFRIGERIO
SALIDA = AttendanceEventType.SALIDA

EVENT_ORDER = (ENTRADA, REFRIGERIO, TERMINO_REFRIGERIO, SALIDA)

_START_OF_DAY = frozenset({ENTRADA})

EVENT_FLOW: Dict[Optional[AttendanceEventType], FrozenSet[AttendanceEventType]] = {
    None: _START_OF_DAY,
    ENTRADA: frozenset({REFRIGERIO, SALIDA}),
    REFRIGERIO: frozenset({TERMINO_REFRIGERIO}),
    TERMINO_REFRIGERIO: frozenset({SALIDA}),
    SALIDA: frozenset({ENTRADA}),
}


def _coerce_event(value) -> Optional[AttendanceEventType]:
    if value is None:
        return None
    try:
        return AttendanceEventType(value)
    except ValueError:
        return None


def next_valid_events(last_event) -> FrozenSet[AttendanceEventType]:
    """
    Valid next events after ``last_event`` on the same day.

    Args:
        last_event: Last event type of today, or None

    Returns:
        Frozen set of allowed event types. Unknown values behave like None.
    """
    return EVENT_FLOW.get(_coerce_event(last_event), _START_OF_DAY)


def next_valid_events_for(last_record, today: Optional[str] = None) -> FrozenSet[AttendanceEventType]:
    """
    Valid next events given the worker's last record.

    A last record dated on any other day than ``today`` resets the machine:
    the day boundary, not the elapsed time, starts a new shift.
    """
    if last_record is None:
        return _START_OF_DAY

    today = today or local_today()
    if getattr(last_record, "date", None) != today:
        return _START_OF_DAY

    return next_valid_events(getattr(last_record, "event_type", None))


def button_states(last_record, today: Optional[str] = None) -> Dict[str, bool]:
    """Enabled flag for each of the four punch buttons."""
    allowed = next_valid_events_for(last_record, today)
    return {event.value: event in allowed for event in EVENT_ORDER}


def last_record_for_worker(records: Iterable, worker_id: str, date: str):
    """
    Most recent record (by timestamp) of a worker on a given date.

    Records with unparseable timestamps sort before every valid one. On equal
    timestamps the record that comes later in ``records`` wins.
    """
    candidates = [
        r for r in records or []
        if r is not None and r.worker_id == worker_id and r.date == date
    ]
    if not candidates:
        return None

    return max(reversed(candidates), key=lambda r: to_epoch_ms(r.timestamp) or float("-inf"))


def last_event_for_worker(records: Iterable, worker_id: str, date: str) -> Optional[AttendanceEventType]:
    """Event type of the worker's most recent record on ``date``, or None."""
    if not worker_id or not date:
        return None

    last = last_record_for_worker(records, worker_id, date)
    return _coerce_event(last.event_type) if last is not None else None
