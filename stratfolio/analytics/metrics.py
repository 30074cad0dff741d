"""
Portfolio-level statistics over a strategy combination.

Curve-derived figures (total return, max drawdown, Sharpe ratio) are
computed from the merged equity curve. Profit factor and win rate are the
arithmetic means of what each member strategy reports; they are not
re-derived from equity.

The empty selection returns a fixed neutral record.
"""

import logging
from collections.abc import Sequence

import numpy as np

from stratfolio.analytics.aggregation import merge_equity_curves
from stratfolio.analytics.drawdown import max_drawdown_pct
from stratfolio.analytics.returns import period_returns
from stratfolio.config.settings import MERGED_CURVE_BASELINE
from stratfolio.models.statistics import PortfolioStatistics
from stratfolio.models.strategy import Strategy


logger = logging.getLogger(__name__)


def sharpe_ratio(returns: Sequence[float]) -> float:
    """
    Mean return over the sample standard deviation (n-1 denominator).

    No risk-free rate and no annualization are applied.

    Args:
        returns: Period returns.

    Returns:
        Ratio, or 0 when fewer than 2 returns exist or the deviation is 0.

    Examples:
        >>> sharpe_ratio([0.01])
        0.0
        >>> sharpe_ratio([0.01, 0.01, 0.01])
        0.0
    """
    values = np.asarray(returns, dtype=np.float64)
    if values.size < 2:
        return 0.0

    deviation = float(np.std(values, ddof=1))
    if deviation == 0:
        return 0.0

    return float(np.mean(values)) / deviation


def total_return_pct(curve: Sequence[float]) -> float:
    """Return ``(last - first) / first`` of a curve in percent; 0 if undefined."""
    if len(curve) == 0 or curve[0] == 0:
        return 0.0
    return float((curve[-1] - curve[0]) / curve[0] * 100.0)


def portfolio_statistics(
    strategies: Sequence[Strategy], baseline: float = MERGED_CURVE_BASELINE
) -> PortfolioStatistics:
    """
    Compute aggregate statistics of an equal-weighted strategy combination.

    Args:
        strategies: Member strategies.
        baseline: Starting balance of the merged curve.

    Returns:
        PortfolioStatistics; the neutral record for an empty selection.

    Examples:
        >>> portfolio_statistics([]).profit_factor
        1.0
    """
    if not strategies:
        return PortfolioStatistics.neutral()

    merged = merge_equity_curves(strategies, baseline=baseline)
    returns = period_returns(merged)

    profit_factors = [float(s.backtest_stats.profit_factor) for s in strategies]
    win_rates = [float(s.backtest_stats.win_rate) for s in strategies]

    statistics = PortfolioStatistics(
        total_return=total_return_pct(merged),
        max_drawdown=max_drawdown_pct(merged),
        sharpe_ratio=sharpe_ratio(returns),
        profit_factor=float(np.mean(profit_factors)),
        win_rate=float(np.mean(win_rates)),
        count=len(strategies),
    )

    logger.debug(
        "Portfolio statistics: %d strategies, return=%.2f%%, max_dd=%.2f%%, sharpe=%.3f",
        statistics.count,
        statistics.total_return,
        statistics.max_drawdown,
        statistics.sharpe_ratio,
    )

    return statistics
