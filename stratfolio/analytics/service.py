"""
Consumer-facing analytics interface.

Display and storage collaborators call these functions with whatever
strategies are currently selected. They return plain Python values and are
total over any number of strategies, including zero and one:

- 0 strategies: neutral statistics, empty curve, empty correlation report
- 1 strategy: statistics of that strategy, its own curve, a 1x1 matrix of 1
  and no pairs
"""

from collections.abc import Sequence

from stratfolio.analytics.aggregation import merge_equity_curves
from stratfolio.analytics.correlation import (
    analyze_correlation_risk,
    correlation_matrix,
)
from stratfolio.analytics.metrics import portfolio_statistics
from stratfolio.config.settings import DEFAULT_SETTINGS, AnalyzerSettings
from stratfolio.models.correlation import CorrelationReport
from stratfolio.models.statistics import PortfolioStatistics
from stratfolio.models.strategy import Strategy


def get_statistics(
    strategies: Sequence[Strategy], settings: AnalyzerSettings = DEFAULT_SETTINGS
) -> PortfolioStatistics:
    """Return portfolio statistics of the given strategies."""
    return portfolio_statistics(strategies, baseline=settings.merged_curve_baseline)


def get_correlation(
    strategies: Sequence[Strategy], settings: AnalyzerSettings = DEFAULT_SETTINGS
) -> CorrelationReport:
    """Return the correlation matrix and ranked risk pairs of the given strategies."""
    return CorrelationReport(
        labels=[strategy.label for strategy in strategies],
        matrix=correlation_matrix(strategies).tolist(),
        pairs=analyze_correlation_risk(
            strategies,
            low_threshold=settings.low_risk_threshold,
            high_threshold=settings.high_risk_threshold,
        ),
    )


def get_merged_curve(
    strategies: Sequence[Strategy], settings: AnalyzerSettings = DEFAULT_SETTINGS
) -> list[float]:
    """Return the merged absolute equity curve of the given strategies."""
    return merge_equity_curves(
        strategies, baseline=settings.merged_curve_baseline
    ).tolist()
