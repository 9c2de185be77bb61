"""
Utility functions for identifiers, timestamps and Peru-locale formatting.

Formatting helpers never raise: a value that cannot be parsed is rendered
as a placeholder so that reports always have something to show.
"""

import logging
import random
import string
import time
from datetime import date, datetime, timezone
from typing import Any, Optional, Union

import pytz

from asistencia.fastapi.core.init_settings import global_settings

logger = logging.getLogger(__name__)

TIME_PLACEHOLDER = "--:--:--"
DATE_PLACEHOLDER = "--/--/----"

_WEEKDAYS = ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"]
_MONTHS = [
    "enero", "febrero", "marzo", "abril", "mayo", "junio",
    "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
]

TimestampLike = Union[str, int, float, datetime, None]


def local_tz():
    """Timezone used for display and for the calendar day of new records."""
    return pytz.timezone(global_settings.TIMEZONE)


def local_now() -> datetime:
    """Current time as an aware datetime in the configured timezone."""
    return datetime.now(local_tz())


def local_today() -> str:
    """Today's date (YYYY-MM-DD) in the configured timezone."""
    return local_now().strftime("%Y-%m-%d")


def current_timestamp() -> str:
    """ISO-8601 timestamp with offset, millisecond precision."""
    return local_now().isoformat(timespec="milliseconds")


def generate_record_id() -> str:
    """
    Build an attendance record id.

    Milliseconds since epoch followed by a 9-character base36 suffix.
    Uniqueness is probabilistic, not cryptographic.

    Examples:
        "1705323600000k3j9x0a1b"
    """
    alphabet = string.digits + string.ascii_lowercase
    suffix = "".join(random.choice(alphabet) for _ in range(9))
    return f"{int(time.time() * 1000)}{suffix}"


def parse_timestamp(value: TimestampLike) -> Optional[datetime]:
    """
    Parse an ISO-8601 string, epoch milliseconds or datetime.

    Naive values are read as local time in the configured timezone.

    Returns:
        Aware datetime, or None if the value cannot be parsed
    """
    if value is None or value == "":
        return None

    try:
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        elif isinstance(value, str):
            text = value.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
        else:
            return None
    except (ValueError, TypeError, OverflowError, OSError):
        return None

    if parsed.tzinfo is None:
        parsed = local_tz().localize(parsed)
    return parsed


def to_epoch_ms(value: TimestampLike) -> Optional[float]:
    """Milliseconds since epoch, or None if unparseable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.timestamp() * 1000.0


def to_local(value: TimestampLike) -> Optional[datetime]:
    """Convert a timestamp to the configured timezone."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return parsed.astimezone(local_tz())


def date_from_timestamp(value: TimestampLike) -> Optional[str]:
    """
    Calendar day (YYYY-MM-DD) of a timestamp in the configured timezone.

    This is the value stored in a record's ``date`` field and it must be
    recomputed whenever the timestamp changes.
    """
    local = to_local(value)
    if local is None:
        return None
    return local.strftime("%Y-%m-%d")


def format_time(value: TimestampLike) -> str:
    """Format a timestamp as HH:MM:SS in local time."""
    local = to_local(value)
    if local is None:
        logger.debug("Cannot format time from %r", value)
        return TIME_PLACEHOLDER
    return local.strftime("%H:%M:%S")


def format_date(value: Any) -> str:
    """
    Format a YYYY-MM-DD string (or date) as a Spanish long date.

    Examples:
        "2024-01-15" -> "lunes, 15 de enero de 2024"
    """
    try:
        if isinstance(value, datetime):
            day = value.date()
        elif isinstance(value, date):
            day = value
        elif isinstance(value, str) and value:
            day = date.fromisoformat(value[:10])
        else:
            return DATE_PLACEHOLDER
    except ValueError:
        return DATE_PLACEHOLDER

    return f"{_WEEKDAYS[day.weekday()]}, {day.day} de {_MONTHS[day.month - 1]} de {day.year}"


def format_sheet_date(value: TimestampLike) -> str:
    """Format a timestamp as dd/mm/yyyy in local time."""
    local = to_local(value)
    if local is None:
        return DATE_PLACEHOLDER
    return local.strftime("%d/%m/%Y")


def format_iso_utc(value: TimestampLike) -> str:
    """ISO-8601 in UTC with millisecond precision and a trailing Z."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return ""
    utc = parsed.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def normalize_document(document: str) -> str:
    """
    Normalize a national ID number by removing all whitespace.

    Examples:
        " 1234 5678 " -> "12345678"
    """
    if not document:
        return ""
    return "".join(document.split())
