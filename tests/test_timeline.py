"""
Unit Tests for the Timeline Module (anchor, bucketizer, history).
"""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path

import numpy as np
import pandas as pd
import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from partograf.data.models import FetalReading, LaborProgress, MoldingDegree
from partograf.timeline.anchor import minutes_from_start, resolve_start_time
from partograf.timeline.buckets import Bucket, assign_offsets, bucket_offsets, bucketize
from partograf.timeline.history import history_frame


T0 = datetime(2026, 10, 19, 8, 0)


def fhr(minutes: float, heart_rate: float = 140) -> FetalReading:
    """FHR reading ``minutes`` after T0."""
    return FetalReading(timestamp=T0 + timedelta(minutes=minutes), heart_rate=heart_rate)


def labor(minutes: float, dilation: float = 4) -> LaborProgress:
    return LaborProgress(timestamp=T0 + timedelta(minutes=minutes), dilation=dilation, station=2)


# =============================================================================
# Anchor
# =============================================================================

class TestResolveStartTime:
    """Tests for the shared start time."""

    def test_minimum_across_streams(self):
        streams = [[fhr(30), fhr(90)], [], [labor(-45), labor(10)]]

        assert resolve_start_time(streams) == T0 - timedelta(minutes=45)

    def test_unsorted_stream(self):
        streams = [[fhr(60), fhr(5), fhr(30)]]

        assert resolve_start_time(streams) == T0 + timedelta(minutes=5)

    def test_all_empty_uses_now(self):
        before = datetime.now()
        start = resolve_start_time([[], [], []])

        assert start >= before

    def test_all_empty_uses_injected_clock(self):
        assert resolve_start_time([], now=lambda: T0) == T0

    def test_backfilled_entry_moves_anchor(self):
        stream = [fhr(30)]
        assert resolve_start_time([stream]) == T0 + timedelta(minutes=30)

        stream.append(fhr(-30))
        assert resolve_start_time([stream]) == T0 - timedelta(minutes=30)

    def test_minutes_from_start_floors(self):
        assert minutes_from_start(T0 + timedelta(seconds=119), T0) == 1
        assert minutes_from_start(T0 - timedelta(seconds=30), T0) == -1


# =============================================================================
# Bucketizer
# =============================================================================

class TestBucketize:
    """Tests for the fixed-grid projection."""

    def test_grid_shape(self):
        buckets = bucketize([], T0)

        assert len(buckets) == 33
        assert buckets[0].offset_minutes == 0
        assert buckets[-1].offset_minutes == 960
        assert all(b.is_empty for b in buckets)

    def test_bucket_offsets(self):
        np.testing.assert_array_equal(bucket_offsets(30, 90), [0, 30, 60, 90])

    def test_invalid_step(self):
        with pytest.raises(ValueError):
            bucket_offsets(0, 960)

    def test_nearest_bucket(self):
        buckets = bucketize([fhr(44, 150)], T0, value=lambda r: r.heart_rate)

        assert buckets[1].value == 150
        assert buckets[1].entry.heart_rate == 150

    def test_tie_rounds_up(self):
        """15 minutes is halfway between 0 and 30 and goes to 30."""
        buckets = bucketize([fhr(15)], T0)

        assert buckets[0].is_empty
        assert not buckets[1].is_empty

    def test_seconds_floored_before_rounding(self):
        """14 min 59 s floors to 14 minutes and stays in bucket 0."""
        reading = FetalReading(timestamp=T0 + timedelta(minutes=14, seconds=59), heart_rate=140)
        buckets = bucketize([reading], T0)

        assert not buckets[0].is_empty

    def test_negative_offsets_round_half_up(self):
        np.testing.assert_array_equal(
            assign_offsets([T0 - timedelta(minutes=15), T0 - timedelta(minutes=16)], T0),
            [0, -30]
        )

    def test_collision_later_timestamp_beats_backfill(self):
        """A reading backfilled into an occupied bucket does not hide the newer one."""
        entries = [fhr(10, 150), fhr(0, 140)]

        buckets = bucketize(entries, T0, value=lambda r: r.heart_rate)

        assert buckets[0].value == 150

    def test_beyond_horizon_dropped(self):
        """An entry at 975 minutes lands on 990 and is off the grid."""
        buckets = bucketize([fhr(0), fhr(975)], T0)

        filled = [b for b in buckets if not b.is_empty]
        assert len(filled) == 1
        assert filled[0].offset_minutes == 0

    def test_last_bucket_included(self):
        buckets = bucketize([fhr(970)], T0)

        assert not buckets[-1].is_empty

    def test_deterministic(self):
        entries = [fhr(40, 150), fhr(5, 130), fhr(100, 160), fhr(95, 170)]

        first = bucketize(entries, T0, value=lambda r: r.heart_rate)
        second = bucketize(entries, T0, value=lambda r: r.heart_rate)

        assert first == second

    def test_custom_grid(self):
        buckets = bucketize([fhr(50)], T0, step=60, horizon=120)

        assert [b.offset_minutes for b in buckets] == [0, 60, 120]
        assert not buckets[1].is_empty

    def test_bucket_defaults(self):
        assert Bucket(offset_minutes=30).is_empty


# =============================================================================
# History
# =============================================================================

class TestHistoryFrame:
    """Tests for the non-bucketed history table."""

    def test_empty(self):
        df = history_frame([], T0)

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 0
        assert 'minutes_from_start' in df.columns

    def test_sorted_by_timestamp_with_insertion_index(self):
        entries = [fhr(60, 150), fhr(0, 140)]

        df = history_frame(entries, T0)

        assert df['heart_rate'].tolist() == [140, 150]
        assert df['index'].tolist() == [1, 0]
        assert df['minutes_from_start'].tolist() == [0, 60]
        assert df['hours_from_start'].tolist() == [0.0, 1.0]

    def test_enum_values_rendered(self):
        entries = [FetalReading(timestamp=T0, heart_rate=140, molding=MoldingDegree.THREE)]

        df = history_frame(entries, T0)

        assert df.loc[0, 'molding'] == '3'
        assert df.loc[0, 'amniotic_fluid'] == 'clear'
        assert df.loc[0, 'time_label'] == '19/10/2026 08:00'

    def test_keeps_entries_beyond_horizon(self):
        entries = [fhr(0), fhr(975)]

        df = history_frame(entries, T0)

        assert len(df) == 2
        assert df['minutes_from_start'].tolist() == [0, 975]
