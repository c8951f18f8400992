"""
Utility functions for Partograf.

Usage:
    from partograf.utils import clock_to_timestamp, format_hours
"""

from partograf.utils.time_utils import (
    clock_to_timestamp,
    format_hours,
    format_datetime_label,
)

__all__ = [
    'clock_to_timestamp',
    'format_hours',
    'format_datetime_label',
]
