"""
Relative time axis of an episode.

Modules:
    anchor: Shared start time (earliest observation)
    buckets: Projection onto the fixed 0-960 minute grid
    history: Non-bucketed history tables (pandas)
"""

from .anchor import resolve_start_time, minutes_from_start
from .buckets import Bucket, bucketize, bucket_offsets, assign_offsets
from .history import history_frame

__all__ = [
    "resolve_start_time",
    "minutes_from_start",
    "Bucket",
    "bucketize",
    "bucket_offsets",
    "assign_offsets",
    "history_frame",
]
