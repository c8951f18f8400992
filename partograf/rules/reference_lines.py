"""
Partograph Alert and Action Lines.

Implements the WHO-style reference lines drawn over the cervical dilation
chart.

Definition:
    - Alert line: expected dilation rising at 1 cm/hour from a 2 cm baseline,
      measured from the first labor-progress examination.
    - Action line: the alert line shifted down by 4 cm. Dilation falling
      below it calls for intervention.

Both lines are pure functions of the hours elapsed since the origin
examination. The origin is the FIRST RECORDED examination (insertion order),
not the earliest timestamp: a backfilled earlier examination does not move
the origin.

References:
    - WHO partograph, alert and action lines
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Sequence

from partograf.config import THRESHOLDS
from partograf.timeline.anchor import minutes_from_start

# Configure module logger
logger = logging.getLogger(__name__)


def alert_line(hours: float) -> float:
    """
    Expected dilation (cm) on the alert line after ``hours`` of labor.

    Example:
        >>> alert_line(3.0)
        5.0
    """
    baseline = THRESHOLDS.ALERT_LINE_BASELINE_CM
    return max(baseline, baseline + hours * THRESHOLDS.DILATION_RATE_CM_PER_HOUR)


def action_line(hours: float) -> float:
    """
    Dilation (cm) on the action line after ``hours`` of labor.

    Never lower than the alert-line floor minus the action offset.
    """
    offset = THRESHOLDS.ACTION_LINE_OFFSET_CM
    floor = THRESHOLDS.ALERT_LINE_BASELINE_CM - offset
    return max(floor, alert_line(hours) - offset)


@dataclass(frozen=True)
class ReferencePoint:
    """
    Reference-line values at one recorded examination.

    Attributes:
        offset_minutes: Minutes from the episode start time (floored).
        elapsed_hours: Hours since the origin examination.
        dilation: Recorded dilation (cm).
        alert: Alert-line value (cm).
        action: Action-line value (cm).
    """

    offset_minutes: int
    elapsed_hours: float
    dilation: float
    alert: float
    action: float

    @property
    def past_action_line(self) -> bool:
        return self.dilation < self.action


@dataclass
class ReferenceLines:
    """Alert/action line series computed for the labor-progress entries."""

    points: List[ReferencePoint] = field(default_factory=list)

    @property
    def offsets(self) -> List[int]:
        return [p.offset_minutes for p in self.points]

    @property
    def alert(self) -> List[float]:
        return [p.alert for p in self.points]

    @property
    def action(self) -> List[float]:
        return [p.action for p in self.points]

    def __len__(self) -> int:
        return len(self.points)

    def __repr__(self) -> str:
        return f"ReferenceLines({len(self.points)} points)"


def calculate_reference_lines(
    labor_entries: Sequence,
    start_time: datetime
) -> ReferenceLines:
    """
    Evaluate the alert and action lines at every recorded examination.

    Args:
        labor_entries: LaborProgress entries in insertion order. The first
            one is the origin of both lines.
        start_time: Timeline anchor, used for the chart x positions.

    Returns:
        ReferenceLines with one point per entry, ordered by timestamp.
        Empty if there are no entries.

    Example:
        >>> lines = calculate_reference_lines(episode.labor.entries, start)
        >>> lines.alert
        [2.0, 3.0, 4.0, 5.0]
    """
    if len(labor_entries) == 0:
        return ReferenceLines()

    origin = labor_entries[0]
    origin_minutes = minutes_from_start(origin.timestamp, start_time)

    points = []
    for entry in sorted(labor_entries, key=lambda e: e.timestamp):
        offset = minutes_from_start(entry.timestamp, start_time)
        hours = (offset - origin_minutes) / 60
        points.append(ReferencePoint(
            offset_minutes=offset,
            elapsed_hours=hours,
            dilation=entry.dilation,
            alert=alert_line(hours),
            action=action_line(hours)
        ))

    logger.debug(f"Reference lines computed for {len(points)} examinations")
    return ReferenceLines(points=points)


__all__ = [
    'alert_line',
    'action_line',
    'ReferencePoint',
    'ReferenceLines',
    'calculate_reference_lines',
]
