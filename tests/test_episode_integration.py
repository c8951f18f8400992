"""
Integration Tests for the Episode aggregate.

Tests the full flow: form commits mutate the stores, then every derived view
(start time, grid, reference lines, alerts, history) is recomputed.
"""

from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from partograf import Category, EditSession, Episode
from partograf.errors import IndexOutOfRange, RangeViolation


T0 = datetime(2026, 10, 19, 8, 0)


@pytest.fixture
def episode() -> Episode:
    return Episode(now=lambda: T0)


@pytest.fixture
def fetal_episode(episode) -> Episode:
    """Episode with three FHR readings, 30 minutes apart."""
    for i, hr in enumerate((130, 140, 150)):
        episode.add(Category.FETAL, {'heart_rate': hr}, T0 + timedelta(minutes=30 * i))
    return episode


# =============================================================================
# Edit Sessions
# =============================================================================

class TestEditSession:
    """Tests for begin_edit / commit / cancel_edit."""

    def test_commit_without_session_adds(self, fetal_episode):
        result = fetal_episode.commit(Category.FETAL, {'heart_rate': 160})

        assert result.accepted
        assert len(fetal_episode.fetal) == 4

    def test_commit_with_session_updates_and_closes(self, fetal_episode):
        fetal_episode.begin_edit(Category.FETAL, 1)

        result = fetal_episode.commit(Category.FETAL, {'heart_rate': 170})

        assert result.accepted
        assert result.index == 1
        assert [e.heart_rate for e in fetal_episode.fetal] == [130, 170, 150]
        assert fetal_episode.edit_session(Category.FETAL) is None

    def test_commit_keeps_timestamp_unless_given(self, fetal_episode):
        original = fetal_episode.fetal[1].timestamp
        fetal_episode.begin_edit(Category.FETAL, 1)
        fetal_episode.commit(Category.FETAL, {'heart_rate': 170})

        assert fetal_episode.fetal[1].timestamp == original

    def test_rejected_commit_keeps_session(self, fetal_episode):
        fetal_episode.begin_edit(Category.FETAL, 1)

        result = fetal_episode.commit(Category.FETAL, {'heart_rate': 20})

        assert isinstance(result.error, RangeViolation)
        assert fetal_episode.edit_session(Category.FETAL) == EditSession(Category.FETAL, 1)
        assert fetal_episode.fetal[1].heart_rate == 140

    def test_begin_edit_returns_entry(self, fetal_episode):
        result = fetal_episode.begin_edit(Category.FETAL, 2)

        assert result.entry.heart_rate == 150

    def test_begin_edit_out_of_range(self, fetal_episode):
        fetal_episode.begin_edit(Category.FETAL, 0)

        result = fetal_episode.begin_edit(Category.FETAL, 3)

        assert isinstance(result.error, IndexOutOfRange)
        assert fetal_episode.edit_session(Category.FETAL).index == 0

    def test_one_session_per_category(self, fetal_episode):
        fetal_episode.begin_edit(Category.FETAL, 0)
        fetal_episode.begin_edit(Category.FETAL, 2)

        assert fetal_episode.edit_session(Category.FETAL) == EditSession(Category.FETAL, 2)

    def test_sessions_independent_across_categories(self, fetal_episode):
        fetal_episode.add(Category.URINE, {'volume': 50})
        fetal_episode.begin_edit(Category.FETAL, 0)
        fetal_episode.begin_edit(Category.URINE, 0)

        fetal_episode.cancel_edit(Category.URINE)

        assert fetal_episode.edit_session(Category.URINE) is None
        assert fetal_episode.edit_session(Category.FETAL) is not None

    def test_deleting_edited_entry_closes_session(self, fetal_episode):
        fetal_episode.begin_edit(Category.FETAL, 1)

        fetal_episode.delete_at(Category.FETAL, 1)

        assert fetal_episode.edit_session(Category.FETAL) is None

    def test_deleting_earlier_entry_shifts_session(self, fetal_episode):
        fetal_episode.begin_edit(Category.FETAL, 2)

        fetal_episode.delete_at(Category.FETAL, 0)
        fetal_episode.commit(Category.FETAL, {'heart_rate': 175})

        assert [e.heart_rate for e in fetal_episode.fetal] == [140, 175]

    def test_deleting_later_entry_keeps_session(self, fetal_episode):
        fetal_episode.begin_edit(Category.FETAL, 0)

        fetal_episode.delete_at(Category.FETAL, 2)

        assert fetal_episode.edit_session(Category.FETAL).index == 0

    def test_category_accepts_string_value(self, fetal_episode):
        assert fetal_episode.store('fetal') is fetal_episode.fetal


# =============================================================================
# Derived Views
# =============================================================================

class TestDerivedViews:
    """Every derived view is recomputed from the stores on each call."""

    def test_start_time_empty_episode(self, episode):
        assert episode.is_empty
        assert episode.start_time() == T0

    def test_start_time_spans_all_categories(self, fetal_episode):
        fetal_episode.add(Category.CONTRACTION, {'frequency_per_10min': 3}, T0 - timedelta(minutes=20))

        assert fetal_episode.start_time() == T0 - timedelta(minutes=20)

    def test_start_time_reverts_to_now_after_deletes(self, episode):
        episode.add(Category.URINE, {'volume': 50}, T0 - timedelta(hours=4))
        assert episode.start_time() == T0 - timedelta(hours=4)

        episode.delete_at(Category.URINE, 0)

        assert episode.start_time() == T0

    def test_mixed_timezone_entries(self, fetal_episode):
        aware = (T0 - timedelta(hours=1)).astimezone(timezone.utc)

        assert fetal_episode.add(Category.FETAL, {'heart_rate': 150}, aware).accepted
        assert fetal_episode.start_time() == T0 - timedelta(hours=1)
        assert fetal_episode.fhr_buckets()[0].value == 150
        assert len(fetal_episode.history(Category.FETAL)) == 4

    def test_fhr_buckets(self, fetal_episode):
        values = [b.value for b in fetal_episode.fhr_buckets()[:4]]

        assert values == [130, 140, 150, None]

    def test_backfill_shifts_grid(self, fetal_episode):
        fetal_episode.add(Category.MATERNAL, {
            'systolic': 120, 'diastolic': 80, 'pulse': 80, 'temperature': 37
        }, T0 - timedelta(minutes=60))

        values = [b.value for b in fetal_episode.fhr_buckets()[:6]]

        assert values == [None, None, 130, 140, 150, None]

    def test_entry_beyond_horizon(self, episode):
        episode.add(Category.FETAL, {'heart_rate': 140}, T0)
        episode.add(Category.FETAL, {'heart_rate': 155}, T0 + timedelta(minutes=975))

        grid_values = [b.value for b in episode.fhr_buckets() if not b.is_empty]
        history = episode.history(Category.FETAL)

        assert grid_values == [140]
        assert history['heart_rate'].tolist() == [140, 155]

    def test_contraction_buckets(self, episode):
        episode.add(Category.CONTRACTION, {'frequency_per_10min': 3, 'duration': '20–40'}, T0)
        episode.add(Category.CONTRACTION, {'frequency_per_10min': 4}, T0 + timedelta(minutes=60))

        buckets = episode.contraction_buckets()

        assert buckets[0].value == 3
        assert buckets[2].value == 4

    def test_bucketize_idempotent(self, fetal_episode):
        assert fetal_episode.fhr_buckets() == fetal_episode.fhr_buckets()

    def test_reference_lines(self, episode):
        episode.add(Category.LABOR, {'dilation': 4, 'station': 1}, T0)
        episode.add(Category.LABOR, {'dilation': 6, 'station': 2}, T0 + timedelta(hours=2))

        lines = episode.reference_lines()

        assert lines.offsets == [0, 120]
        assert lines.alert == pytest.approx([2.0, 4.0])
        assert lines.action == pytest.approx([-2.0, 0.0])

    def test_alerts_follow_updates(self, episode):
        episode.add(Category.FETAL, {'heart_rate': 90})
        assert len(episode.alerts()) == 1

        episode.update_at(Category.FETAL, 0, {'heart_rate': 130})
        assert episode.alerts() == []

    def test_history_columns(self, fetal_episode):
        df = fetal_episode.history(Category.FETAL)

        for column in ('index', 'timestamp', 'time_label', 'minutes_from_start', 'heart_rate'):
            assert column in df.columns
        assert df['minutes_from_start'].tolist() == [0, 30, 60]

    def test_repr(self, fetal_episode):
        assert 'fetal=3' in repr(fetal_episode)
