"""
Time helper functions.

Functions:
    clock_to_timestamp: Convert an "HH:MM" form entry to an absolute time
    format_hours: Elapsed hours label with one decimal
    format_datetime_label: Day/month/year hour:minute label

Example:
    >>> clock_to_timestamp("01:30", start)
    datetime.datetime(2026, 10, 19, 9, 30)
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from partograf.errors import MissingRequiredField, RangeViolation


_CLOCK_PATTERN = re.compile(r'^\s*(\d{1,2})[:.](\d{2})\s*$')


def clock_to_timestamp(
    value: str,
    start_time: datetime,
    field: str = 'timestamp'
) -> datetime:
    """
    Convert the "HH:MM" time entered on the labor progress form.

    The entered hours and minutes are counted from the episode start time,
    which is how the examination time is placed on the partograph.

    Args:
        value: Time string such as "02:30" (a "." separator is accepted).
        start_time: Timeline anchor.
        field: Field name reported on failure.

    Returns:
        ``start_time`` plus the entered hours and minutes.

    Raises:
        MissingRequiredField: If ``value`` is empty.
        RangeViolation: If ``value`` is not a valid HH:MM time.
    """
    if value is None or not str(value).strip():
        raise MissingRequiredField(field)

    match = _CLOCK_PATTERN.match(str(value))
    if match is None:
        raise RangeViolation(field, value)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise RangeViolation(field, value, '00:00', '23:59')

    return start_time + timedelta(hours=hours, minutes=minutes)


def format_hours(start_time: datetime, timestamp: datetime) -> str:
    """
    Elapsed hours since the start time, one decimal.

    Example:
        >>> format_hours(start, start + timedelta(minutes=90))
        '1.5'
    """
    hours = (timestamp - start_time).total_seconds() / 3600
    return f"{hours:.1f}"


def format_datetime_label(timestamp: datetime) -> str:
    """Label used in the history tables, e.g. '19/10/2026 08:30'."""
    return timestamp.strftime('%d/%m/%Y %H:%M')


__all__ = [
    'clock_to_timestamp',
    'format_hours',
    'format_datetime_label',
]
