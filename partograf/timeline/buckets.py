"""
Fixed-Grid Bucketizer.

Projects an irregularly-sampled observation stream onto the fixed display
grid of the partograph (0-960 minutes, one bucket every 30 minutes).

Algorithm:
    1. Build ``horizon / step + 1`` empty buckets at 0, step, ..., horizon
    2. For every entry, take the whole minutes elapsed since the start time
    3. Round to the nearest multiple of ``step`` (halves round up)
    4. Entries landing outside [0, horizon] are left off the grid
    5. Entries are applied in timestamp order; the last one in a bucket wins

The projection is lossy: two entries less than ``step / 2`` apart can share a
bucket and only the later one is shown. Ordering by timestamp rather than by
insertion means a backfilled reading never hides a newer one in the same
bucket, unlike a display that shows the most recently entered value.
Entries dropped from the grid stay in the store and in the tabular history.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, List, Optional, Sequence

import numpy as np

from partograf.config import GRID

# Configure module logger
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bucket:
    """
    One slot of the display grid.

    Attributes:
        offset_minutes: Position on the grid in minutes from the start time.
        value: Charted value of the entry in this slot, or None if empty.
        entry: The entry shown in this slot, or None if empty.
    """

    offset_minutes: int
    value: Optional[Any] = None
    entry: Optional[Any] = None

    @property
    def is_empty(self) -> bool:
        return self.entry is None


def bucket_offsets(
    step: int = GRID.STEP_MINUTES,
    horizon: int = GRID.HORIZON_MINUTES
) -> np.ndarray:
    """
    Offsets of every bucket on the grid.

    Example:
        >>> bucket_offsets(30, 90)
        array([ 0, 30, 60, 90])
    """
    if step <= 0:
        raise ValueError(f"Bucket step must be positive, got {step}")
    return np.arange(0, horizon + 1, step, dtype=int)


def assign_offsets(
    timestamps: Sequence[datetime],
    start_time: datetime,
    step: int = GRID.STEP_MINUTES
) -> np.ndarray:
    """
    Grid offset (in minutes) assigned to each timestamp.

    Elapsed minutes are floored first, then rounded to the nearest multiple
    of ``step`` with halves rounding up, also for negative offsets.

    Args:
        timestamps: Absolute observation times.
        start_time: Timeline anchor.
        step: Bucket width in minutes.

    Returns:
        Integer array of assigned offsets, same length as ``timestamps``.
    """
    if len(timestamps) == 0:
        return np.array([], dtype=int)
    elapsed_seconds = np.array(
        [(t - start_time).total_seconds() for t in timestamps], dtype=float
    )
    minutes = np.floor(elapsed_seconds / 60.0)
    return (np.floor(minutes / step + 0.5) * step).astype(int)


def bucketize(
    entries: Sequence,
    start_time: datetime,
    step: int = GRID.STEP_MINUTES,
    horizon: int = GRID.HORIZON_MINUTES,
    value: Optional[Callable[[Any], Any]] = None
) -> List[Bucket]:
    """
    Project entries onto the fixed relative-time grid.

    Args:
        entries: Observation entries with a ``timestamp`` attribute, in any
            order.
        start_time: Timeline anchor (see ``resolve_start_time``).
        step: Bucket width in minutes (default: 30).
        horizon: Last grid offset in minutes (default: 960).
        value: Extracts the charted value from an entry (default: the entry).

    Returns:
        ``horizon // step + 1`` buckets ordered by offset.

    Example:
        >>> grid = bucketize(fetal, start, value=lambda r: r.heart_rate)
        >>> [b.value for b in grid[:3]]
        [140, None, 145]
    """
    offsets = bucket_offsets(step, horizon)
    slots: List[Optional[Any]] = [None] * len(offsets)

    ordered = sorted(entries, key=lambda e: e.timestamp)
    assigned = assign_offsets([e.timestamp for e in ordered], start_time, step)

    dropped = 0
    for entry, offset in zip(ordered, assigned):
        if offset < 0 or offset > horizon:
            dropped += 1
            continue
        slots[int(offset) // step] = entry

    if dropped:
        logger.debug(f"{dropped} entries fall outside the 0-{horizon} min grid")

    extract = value or (lambda e: e)
    return [
        Bucket(
            offset_minutes=int(offset),
            value=extract(entry) if entry is not None else None,
            entry=entry
        )
        for offset, entry in zip(offsets, slots)
    ]


__all__ = [
    'Bucket',
    'bucket_offsets',
    'assign_offsets',
    'bucketize',
]
