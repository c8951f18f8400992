"""
Timeline Anchor Resolver.

All relative-time displays of an episode share one zero point: the earliest
timestamp over every observation stream. The anchor is never stored; it is
recomputed on every query, so it moves back whenever an earlier observation
is backfilled, and falls back to "now" once every stream is empty.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

logger = logging.getLogger(__name__)


def resolve_start_time(
    streams: Iterable[Sequence],
    now: Optional[Callable[[], datetime]] = None
) -> datetime:
    """
    Compute the shared start time of an episode.

    Args:
        streams: Observation lists; every entry has a ``timestamp``.
        now: Clock used when all streams are empty (default: datetime.now).

    Returns:
        Minimum timestamp across all entries, or the current time if there
        are none.

    Example:
        >>> resolve_start_time([fetal_entries, labor_entries])
        datetime.datetime(2026, 10, 19, 8, 0)
    """
    timestamps = [entry.timestamp for stream in streams for entry in stream]
    if not timestamps:
        clock = now or datetime.now
        logger.debug("All streams empty, anchoring timeline at current time")
        return clock()
    return min(timestamps)


def minutes_from_start(timestamp: datetime, start_time: datetime) -> int:
    """
    Whole minutes elapsed since the start time, floored.

    Negative for timestamps before the start time.
    """
    return math.floor((timestamp - start_time).total_seconds() / 60)


__all__ = [
    'resolve_start_time',
    'minutes_from_start',
]
