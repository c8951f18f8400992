"""
Unit Tests for the Partograph Reference Lines.

Test Strategy:
    - Check the line formulas at and around their floors
    - Build labor-progress series with known timing and verify every point
    - Cover the insertion-order origin with a backfilled examination
"""

import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from partograf.data.models import LaborProgress
from partograf.rules.reference_lines import (
    ReferenceLines,
    action_line,
    alert_line,
    calculate_reference_lines,
)


T0 = datetime(2026, 10, 19, 8, 0)


def exam(hours: float, dilation: float) -> LaborProgress:
    """Labor-progress entry ``hours`` after T0."""
    return LaborProgress(timestamp=T0 + timedelta(hours=hours), dilation=dilation, station=2)


# =============================================================================
# Line Formulas
# =============================================================================

class TestLineFormulas:
    """Tests for alert_line and action_line."""

    @pytest.mark.parametrize("hours,expected", [(0, 2.0), (1, 3.0), (3, 5.0), (8, 10.0)])
    def test_alert_line_rises_1cm_per_hour(self, hours, expected):
        assert alert_line(hours) == pytest.approx(expected)

    def test_alert_line_floor(self):
        assert alert_line(-2) == 2.0

    def test_action_line_trails_by_4cm(self):
        for hours in (0, 0.5, 2, 6):
            assert action_line(hours) == pytest.approx(alert_line(hours) - 4)

    def test_action_line_floor(self):
        assert action_line(-5) == -2.0


# =============================================================================
# Series
# =============================================================================

class TestCalculateReferenceLines:
    """Tests for calculate_reference_lines."""

    def test_empty(self):
        lines = calculate_reference_lines([], T0)

        assert isinstance(lines, ReferenceLines)
        assert len(lines) == 0
        assert lines.alert == []

    def test_one_point_per_examination(self):
        entries = [exam(0, 3), exam(1, 4), exam(2, 5), exam(3, 6)]

        lines = calculate_reference_lines(entries, T0)

        assert lines.offsets == [0, 60, 120, 180]
        assert lines.alert == pytest.approx([2.0, 3.0, 4.0, 5.0])
        assert lines.action == pytest.approx([-2.0, -1.0, 0.0, 1.0])

    def test_offsets_relative_to_episode_start(self):
        """The episode may start before the first examination."""
        start = T0 - timedelta(minutes=30)
        entries = [exam(0, 3), exam(2, 5)]

        lines = calculate_reference_lines(entries, start)

        assert lines.offsets == [30, 150]
        assert lines.points[1].elapsed_hours == pytest.approx(2.0)

    def test_origin_is_first_inserted(self):
        """A backfilled earlier examination does not move the origin."""
        entries = [exam(2, 5), exam(0, 3)]

        lines = calculate_reference_lines(entries, T0)

        # Ordered by time for plotting
        assert lines.offsets == [0, 120]
        assert lines.points[0].elapsed_hours == pytest.approx(-2.0)
        assert lines.points[0].alert == 2.0
        assert lines.points[1].elapsed_hours == 0
        assert lines.points[1].alert == 2.0

    def test_past_action_line_flag(self):
        entries = [exam(0, 2), exam(8, 3)]

        lines = calculate_reference_lines(entries, T0)

        assert lines.points[0].past_action_line is False
        # 8 h: alert 10 cm, action 6 cm, dilation 3 cm
        assert lines.points[1].past_action_line is True

    def test_repr(self):
        assert repr(calculate_reference_lines([exam(0, 3)], T0)) == "ReferenceLines(1 points)"
