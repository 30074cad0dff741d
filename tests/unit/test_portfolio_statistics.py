"""
Unit tests for portfolio statistics and the analytics service functions.
"""

import numpy as np
import pytest

from stratfolio.analytics.metrics import (
    portfolio_statistics,
    sharpe_ratio,
    total_return_pct,
)
from stratfolio.analytics.service import (
    get_correlation,
    get_merged_curve,
    get_statistics,
)
from stratfolio.config.settings import AnalyzerSettings
from stratfolio.models.enums import RiskBucket
from stratfolio.models.statistics import PortfolioStatistics


pytestmark = pytest.mark.unit


class TestSharpeRatio:
    """Test suite for sharpe_ratio."""

    def test_sample_deviation(self):
        """Test mean over the n-1 standard deviation."""
        returns = [0.01, 0.03, -0.01, 0.02]
        expected = np.mean(returns) / np.std(returns, ddof=1)

        assert sharpe_ratio(returns) == pytest.approx(expected)

    @pytest.mark.parametrize("returns", [[], [0.05], [0.02, 0.02, 0.02]])
    def test_degenerate_inputs_are_zero(self, returns):
        """Test the neutral value for short or constant input."""
        assert sharpe_ratio(returns) == 0.0


class TestTotalReturnPct:
    """Test suite for total_return_pct."""

    def test_percent_change(self):
        """Test first-to-last change in percent."""
        assert total_return_pct([100000.0, 103000.0]) == pytest.approx(3.0)

    @pytest.mark.parametrize("curve", [[], [0.0, 10.0]])
    def test_undefined_is_zero(self, curve):
        """Test empty curves and zero starting values."""
        assert total_return_pct(curve) == 0.0


class TestPortfolioStatistics:
    """Test suite for portfolio_statistics."""

    def test_empty_selection_is_neutral(self):
        """Test the fixed neutral record."""
        stats = portfolio_statistics([])

        assert stats == PortfolioStatistics(
            total_return=0.0,
            max_drawdown=0.0,
            sharpe_ratio=0.0,
            profit_factor=1.0,
            win_rate=0.0,
            count=0,
        )

    def test_two_strategies(self, make_strategy):
        """Test curve-derived figures and averaged reported figures."""
        strategies = [
            make_strategy([100000, 101000, 102000], profitFactor=2.0, winRate=60),
            make_strategy([100000, 99000, 101000], symbol="GBPUSD", profitFactor=1.0, winRate=40),
        ]

        stats = portfolio_statistics(strategies)

        assert stats.count == 2
        assert stats.total_return == pytest.approx(3.0)
        assert stats.max_drawdown == 0.0
        assert stats.profit_factor == pytest.approx(1.5)
        assert stats.win_rate == pytest.approx(50.0)
        expected_sharpe = np.mean([0.0, 0.03]) / np.std([0.0, 0.03], ddof=1)
        assert stats.sharpe_ratio == pytest.approx(expected_sharpe)

    def test_drawdown_from_merged_curve(self, make_strategy):
        """Test that drawdown is measured on the merged curve in percent."""
        stats = portfolio_statistics([make_strategy([100000, 80000, 100000])])

        # merged curve: 100000, 80000, 100000
        assert stats.max_drawdown == pytest.approx(20.0)
        assert stats.total_return == 0.0

    def test_defaults_used_for_unreported_metrics(self, make_strategy):
        """Test that absent member metrics fall back to their defaults."""
        stats = portfolio_statistics([make_strategy([1, 2])])

        assert stats.profit_factor == 1.0
        assert stats.win_rate == 50.0


class TestServiceFunctions:
    """Test suite for the consumer-facing analytics functions."""

    def test_statistics_with_single_strategy(self, make_strategy):
        """Test that one strategy is summarized on its own."""
        stats = get_statistics([make_strategy([100000, 110000])])

        assert stats.count == 1
        assert stats.total_return == pytest.approx(10.0)

    def test_merged_curve_is_plain_list(self, make_strategy):
        """Test that the merged curve is returned as floats."""
        curve = get_merged_curve([make_strategy([100, 150])])

        assert curve == [100000.0, 100050.0]
        assert isinstance(curve, list)

    def test_merged_curve_uses_settings_baseline(self, make_strategy):
        """Test that the baseline comes from settings."""
        settings = AnalyzerSettings(merged_curve_baseline=10_000)

        assert get_merged_curve([make_strategy([5, 6])], settings) == [10000.0, 10001.0]

    def test_correlation_report_single_strategy(self, make_strategy):
        """Test a 1x1 matrix and no pairs for one strategy."""
        report = get_correlation([make_strategy([1, 2, 3])])

        assert report.labels == ["EURUSD H1"]
        assert report.matrix == [[1.0]]
        assert report.pairs == []

    def test_correlation_report_empty(self):
        """Test an empty report for no strategies."""
        report = get_correlation([])

        assert report.labels == []
        assert report.matrix == []
        assert report.pairs == []

    def test_correlation_thresholds_from_settings(self, make_strategy):
        """Test that risk buckets use configured thresholds."""
        # returns (1, 0, 0, 1) and (1, 1, 0, 1): r = 2 / sqrt(12)
        strategies = [
            make_strategy([1, 2, 2, 2, 4]),
            make_strategy([1, 2, 4, 4, 8], symbol="GBPUSD"),
        ]

        default_report = get_correlation(strategies)
        strict_report = get_correlation(
            strategies, AnalyzerSettings(low_risk_threshold=0.6, high_risk_threshold=0.9)
        )

        assert default_report.pairs[0].correlation == pytest.approx(0.57735, abs=1e-5)
        assert default_report.pairs[0].risk == RiskBucket.MEDIUM
        assert strict_report.pairs[0].risk == RiskBucket.LOW
        assert strict_report.pairs_at_risk(RiskBucket.LOW) == strict_report.pairs
