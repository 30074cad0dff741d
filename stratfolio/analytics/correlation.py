"""
Pairwise correlation of strategy returns and risk classification.

Correlation is the Pearson coefficient of per-step equity returns over the
common prefix of two series. Every function here is pure and total: short
or degenerate inputs map to a neutral 0 instead of raising.
"""

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from stratfolio.analytics.returns import period_returns
from stratfolio.config.settings import HIGH_RISK_THRESHOLD, LOW_RISK_THRESHOLD
from stratfolio.models.correlation import CorrelationPair
from stratfolio.models.enums import RiskBucket
from stratfolio.models.strategy import Strategy


logger = logging.getLogger(__name__)


def pearson_correlation(series_x: Sequence[float], series_y: Sequence[float]) -> float:
    """
    Pearson correlation over the common prefix of two series.

    Uses the sums-of-products form
    ``(n*Sxy - Sx*Sy) / sqrt((n*Sxx - Sx^2) * (n*Syy - Sy^2))``.

    Args:
        series_x: First series.
        series_y: Second series.

    Returns:
        Coefficient in [-1, 1]; 0 when fewer than 2 common samples exist or
        either series has zero variance.

    Examples:
        >>> pearson_correlation([1.0, 2.0, 3.0], [2.0, 4.0, 6.0])
        1.0
        >>> pearson_correlation([1.0], [1.0])
        0.0
    """
    n = min(len(series_x), len(series_y))
    if n < 2:
        return 0.0

    x = np.asarray(series_x[:n], dtype=np.float64)
    y = np.asarray(series_y[:n], dtype=np.float64)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_xx = (x * x).sum()
    sum_yy = (y * y).sum()

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_xx - sum_x * sum_x) * (n * sum_yy - sum_y * sum_y)

    if variance_product <= 0:
        return 0.0

    correlation = numerator / np.sqrt(variance_product)
    return float(np.clip(correlation, -1.0, 1.0))


def correlation_matrix(strategies: Sequence[Strategy]) -> NDArray[np.float64]:
    """
    Square matrix of return correlations between strategies.

    Entry [i][j] is 1 on the diagonal, otherwise the Pearson correlation of
    the two strategies' period returns. Both triangles are computed.

    Args:
        strategies: Strategies in display order.

    Returns:
        ``len(strategies) x len(strategies)`` array; shape (0, 0) when empty.
    """
    count = len(strategies)
    matrix = np.zeros((count, count), dtype=np.float64)
    all_returns = [period_returns(strategy.equity) for strategy in strategies]

    for i in range(count):
        for j in range(count):
            if i == j:
                matrix[i, j] = 1.0
            else:
                matrix[i, j] = pearson_correlation(all_returns[i], all_returns[j])

    logger.debug("Computed %dx%d correlation matrix", count, count)
    return matrix


def classify_risk(
    correlation: float,
    low_threshold: float = LOW_RISK_THRESHOLD,
    high_threshold: float = HIGH_RISK_THRESHOLD,
) -> RiskBucket:
    """
    Bucket a correlation by magnitude; thresholds belong to the higher bucket.

    Examples:
        >>> classify_risk(0.29).value
        'low'
        >>> classify_risk(-0.3).value
        'medium'
        >>> classify_risk(0.7).value
        'high'
    """
    magnitude = abs(correlation)
    if magnitude < low_threshold:
        return RiskBucket.LOW
    if magnitude < high_threshold:
        return RiskBucket.MEDIUM
    return RiskBucket.HIGH


def analyze_correlation_risk(
    strategies: Sequence[Strategy],
    low_threshold: float = LOW_RISK_THRESHOLD,
    high_threshold: float = HIGH_RISK_THRESHOLD,
) -> list[CorrelationPair]:
    """
    Rank every unordered strategy pair by correlation magnitude.

    Args:
        strategies: Strategies to compare.
        low_threshold: Lower bound of the medium bucket.
        high_threshold: Lower bound of the high bucket.

    Returns:
        One CorrelationPair per ``i < j``, sorted by descending magnitude.
        Ties keep enumeration order. Empty for fewer than 2 strategies.
    """
    if len(strategies) < 2:
        return []

    matrix = correlation_matrix(strategies)
    pairs = []

    for i in range(len(strategies)):
        for j in range(i + 1, len(strategies)):
            magnitude = abs(float(matrix[i, j]))
            pairs.append(
                CorrelationPair(
                    strategy_a=strategies[i].label,
                    strategy_b=strategies[j].label,
                    correlation=magnitude,
                    risk=classify_risk(magnitude, low_threshold, high_threshold),
                )
            )

    # sorted() is stable, including with reverse=True
    return sorted(pairs, key=lambda pair: pair.correlation, reverse=True)
