"""
Partograph reference lines.

Example:
    >>> from partograf.rules import alert_line, action_line
    >>> alert_line(3.0), action_line(3.0)
    (5.0, 1.0)
"""

from .reference_lines import (
    alert_line,
    action_line,
    calculate_reference_lines,
    ReferenceLines,
    ReferencePoint,
)

__all__ = [
    "alert_line",
    "action_line",
    "calculate_reference_lines",
    "ReferenceLines",
    "ReferencePoint",
]
