"""
Unit tests for equity curve merging and drawdown computation.
"""

import numpy as np
import pytest

from stratfolio.analytics.aggregation import merge_equity_curves
from stratfolio.analytics.drawdown import drawdown_curve, max_drawdown_pct


pytestmark = pytest.mark.unit


class TestMergeEquityCurves:
    """Test suite for merge_equity_curves."""

    def test_two_strategies(self, make_strategy):
        """Test the worked example of two offsetting curves."""
        strategies = [
            make_strategy([100000, 101000, 102000]),
            make_strategy([100000, 99000, 101000], symbol="GBPUSD"),
        ]

        merged = merge_equity_curves(strategies)

        np.testing.assert_array_equal(merged, [100000.0, 100000.0, 103000.0])

    def test_deviation_relative_to_each_first_sample(self, make_strategy):
        """Test that curves on different capital bases merge by profit."""
        strategies = [
            make_strategy([5000, 5500]),
            make_strategy([250000, 249000], symbol="GBPUSD"),
        ]

        merged = merge_equity_curves(strategies)

        np.testing.assert_array_equal(merged, [100000.0, 99500.0])

    def test_shorter_curve_not_carried_forward(self, make_strategy):
        """Test that a short curve stops contributing after its end."""
        strategies = [
            make_strategy([100, 110, 120, 130]),
            make_strategy([100, 150], symbol="GBPUSD"),
        ]

        merged = merge_equity_curves(strategies)

        np.testing.assert_array_equal(
            merged, [100000.0, 100060.0, 100020.0, 100030.0]
        )

    def test_length_is_longest_curve(self, make_strategy):
        """Test output length."""
        strategies = [make_strategy([1] * 3), make_strategy([1] * 7)]

        assert merge_equity_curves(strategies).size == 7

    def test_custom_baseline(self, make_strategy):
        """Test that the baseline is configurable."""
        merged = merge_equity_curves([make_strategy([10, 12])], baseline=0)

        np.testing.assert_array_equal(merged, [0.0, 2.0])

    def test_empty(self):
        """Test that no strategies give an empty curve."""
        assert merge_equity_curves([]).size == 0


class TestDrawdown:
    """Test suite for drawdown helpers."""

    def test_drawdown_curve(self):
        """Test point-wise drawdown from the running peak."""
        np.testing.assert_allclose(
            drawdown_curve([100.0, 120.0, 90.0, 130.0, 104.0]),
            [0.0, 0.0, 0.25, 0.0, 0.2],
        )

    def test_max_drawdown_pct(self):
        """Test the largest decline in percent."""
        assert max_drawdown_pct([100.0, 120.0, 90.0, 130.0, 104.0]) == pytest.approx(25.0)

    def test_monotonic_curve_has_no_drawdown(self):
        """Test a rising curve."""
        assert max_drawdown_pct([1.0, 2.0, 3.0]) == 0.0

    def test_non_positive_peak_contributes_zero(self):
        """Test that drawdown is not computed against a non-positive peak."""
        drawdowns = drawdown_curve([-10.0, -20.0, 0.0, -5.0])

        np.testing.assert_array_equal(drawdowns, [0.0, 0.0, 0.0, 0.0])

    def test_empty(self):
        """Test neutral values for empty input."""
        assert drawdown_curve([]).size == 0
        assert max_drawdown_pct([]) == 0.0
