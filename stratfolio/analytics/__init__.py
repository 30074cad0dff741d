"""Statistics engine over canonical strategy records.

All functions are pure and deterministic; none mutates its input and none
raises for numeric edge cases.

Modules:
    returns: Period returns of an equity curve
    correlation: Pearson correlation, correlation matrix, risk pairs
    aggregation: Merged equity curve
    drawdown: Drawdown curve and maximum drawdown
    metrics: Portfolio statistics
    service: Consumer interface returning plain Python values
"""

from stratfolio.analytics.aggregation import merge_equity_curves
from stratfolio.analytics.correlation import (
    analyze_correlation_risk,
    classify_risk,
    correlation_matrix,
    pearson_correlation,
)
from stratfolio.analytics.drawdown import drawdown_curve, max_drawdown_pct
from stratfolio.analytics.metrics import portfolio_statistics, sharpe_ratio
from stratfolio.analytics.returns import period_returns
from stratfolio.analytics.service import (
    get_correlation,
    get_merged_curve,
    get_statistics,
)

__all__ = [
    "analyze_correlation_risk",
    "classify_risk",
    "correlation_matrix",
    "drawdown_curve",
    "get_correlation",
    "get_merged_curve",
    "get_statistics",
    "max_drawdown_pct",
    "merge_equity_curves",
    "pearson_correlation",
    "period_returns",
    "portfolio_statistics",
    "sharpe_ratio",
]
