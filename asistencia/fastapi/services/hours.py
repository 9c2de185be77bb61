"""
Working-hours calculator.

Durations are plain subtraction of epoch milliseconds divided by 3.6e6.
Missing or unparseable timestamps count as zero; nothing here raises.
"""

from asistencia.fastapi.core.utils import to_epoch_ms

MS_PER_HOUR = 3.6e6


def gross_hours(entry_ts=None, exit_ts=None) -> float:
    """
    Hours between entry and exit.

    Returns:
        Hours as float, 0.0 if either stamp is missing or invalid, and never
        negative (exit before entry collapses to 0).
    """
    entry_ms = to_epoch_ms(entry_ts)
    exit_ms = to_epoch_ms(exit_ts)
    if entry_ms is None or exit_ms is None:
        return 0.0

    return max(0.0, (exit_ms - entry_ms) / MS_PER_HOUR)


def break_hours(break_start_ts=None, break_end_ts=None) -> float:
    """Break length in hours, 0.0 when incomplete, invalid or negative."""
    start_ms = to_epoch_ms(break_start_ts)
    end_ms = to_epoch_ms(break_end_ts)
    if start_ms is None or end_ms is None:
        return 0.0

    return max(0.0, (end_ms - start_ms) / MS_PER_HOUR)


def net_hours(entry_ts=None, exit_ts=None, break_start_ts=None, break_end_ts=None) -> float:
    """
    Gross hours minus the break span.

    When either break stamp is missing or invalid the result equals gross
    hours. The result is floored at 0.
    """
    gross = gross_hours(entry_ts, exit_ts)
    return max(0.0, gross - break_hours(break_start_ts, break_end_ts))
