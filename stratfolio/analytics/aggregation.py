"""
Equity curve aggregation across strategies.

The merged curve models an equal-weighted, capital-additive combination of
independently traded strategies sharing one account: each strategy
contributes its profit relative to its own first sample, and the summed
contributions are placed on a fixed starting balance.
"""

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from stratfolio.config.settings import MERGED_CURVE_BASELINE
from stratfolio.models.strategy import Strategy


logger = logging.getLogger(__name__)


def merge_equity_curves(
    strategies: Sequence[Strategy], baseline: float = MERGED_CURVE_BASELINE
) -> NDArray[np.float64]:
    """
    Combine strategy equity curves into one absolute portfolio curve.

    At each index the deviations ``equity[i] - equity[0]`` are summed across
    strategies. A strategy shorter than the longest curve stops
    contributing past its last sample; its final value is not carried
    forward.

    Args:
        strategies: Strategies to combine.
        baseline: Starting balance added to the summed deviations.

    Returns:
        Array with the length of the longest equity curve; empty when no
        strategies are given.

    Examples:
        >>> from stratfolio.models.strategy import BacktestStats, DataId, Strategy
        >>> a = Strategy(DataId("EURUSD", "H1"), (100000, 101000, 102000), (1,), BacktestStats())
        >>> b = Strategy(DataId("GBPUSD", "H1"), (100000, 99000, 101000), (1,), BacktestStats())
        >>> merge_equity_curves([a, b])
        array([100000., 100000., 103000.])
    """
    if not strategies:
        return np.array([], dtype=np.float64)

    max_length = max(len(strategy.equity) for strategy in strategies)
    deviations = np.zeros(max_length, dtype=np.float64)

    for strategy in strategies:
        equity = np.asarray(strategy.equity, dtype=np.float64)
        if equity.size == 0:
            continue
        deviations[: equity.size] += equity - equity[0]

    logger.debug(
        "Merged %d equity curves into %d points", len(strategies), max_length
    )

    return deviations + baseline
