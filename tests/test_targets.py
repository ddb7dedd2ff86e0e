"""
Test price target estimation and pivot levels.
"""

import pytest

from stockscreen.pattern import SignalKind
from stockscreen.targets import PivotLevels, calculate_next_targets, calculate_pivot_points

PIVOTS = {"pivot": 100.0, "r1": 105.0, "r2": 110.0, "r3": 115.0, "s1": 95.0, "s2": 90.0, "s3": 85.0}


class TestNaiveTargets:
    """Percentage targets when no pivot data is supplied."""

    @pytest.mark.parametrize("signal", [SignalKind.BREAKOUT, SignalKind.ST_BREAKOUT, "Breakout", "ST Breakout"])
    def test_breakout_targets(self, signal):
        assert calculate_next_targets(100.0, signal) == pytest.approx([102.0, 105.0, 110.0])

    @pytest.mark.parametrize("signal", [SignalKind.BREAKDOWN, SignalKind.ST_BREAKDOWN, "ST Breakdown"])
    def test_breakdown_targets(self, signal):
        assert calculate_next_targets(100.0, signal) == pytest.approx([98.0, 95.0, 90.0])

    def test_unknown_signal(self):
        assert calculate_next_targets(100.0, "Sideways") == []
        assert calculate_next_targets(100.0, "Sideways", PIVOTS) == []


class TestPivotTargets:
    """Targets taken from pivot levels."""

    def test_breakout_uses_resistance_above_price(self):
        assert calculate_next_targets(107.0, SignalKind.BREAKOUT, PIVOTS) == [110.0, 115.0]

    def test_breakdown_uses_support_below_price(self):
        assert calculate_next_targets(92.0, SignalKind.ST_BREAKDOWN, PIVOTS) == [90.0, 85.0]

    def test_strictly_beyond_price(self):
        assert calculate_next_targets(115.0, SignalKind.BREAKOUT, PIVOTS) == []
        assert calculate_next_targets(95.0, SignalKind.BREAKDOWN, PIVOTS) == [90.0, 85.0]

    def test_accepts_pivot_levels(self):
        levels = PivotLevels.from_mapping(PIVOTS)
        assert calculate_next_targets(100.0, SignalKind.BREAKOUT, levels) == [105.0, 110.0, 115.0]


class TestPivotPoints:
    """Standard floor pivots."""

    def test_standard_pivots(self):
        levels = calculate_pivot_points(high=110.0, low=90.0, close=100.0)

        assert levels.pivot == pytest.approx(100.0)
        assert levels.r1 == pytest.approx(110.0)
        assert levels.r2 == pytest.approx(120.0)
        assert levels.r3 == pytest.approx(130.0)
        assert levels.s1 == pytest.approx(90.0)
        assert levels.s2 == pytest.approx(80.0)
        assert levels.s3 == pytest.approx(70.0)

    def test_level_ordering(self):
        levels = calculate_pivot_points(high=57.3, low=51.1, close=56.2)
        assert levels.s3 < levels.s2 < levels.s1 < levels.pivot < levels.r1 < levels.r2 < levels.r3
