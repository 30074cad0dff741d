"""
Drawdown computation for equity curves.

Drawdown at each point is the fractional decline from the running peak of
the curve, tracked left to right. All functions handle empty sequences
gracefully and return neutral defaults.
"""

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray


def drawdown_curve(curve: Sequence[float]) -> NDArray[np.float64]:
    """
    Compute the fractional drawdown ``(peak - value) / peak`` at each point.

    Points whose running peak is not positive contribute 0.

    Args:
        curve: Absolute equity values.

    Returns:
        Array of drawdown fractions (all >= 0); empty for empty input.

    Examples:
        >>> drawdown_curve([100.0, 120.0, 90.0, 130.0])
        array([0.  , 0.  , 0.25, 0.  ])
    """
    values = np.asarray(curve, dtype=np.float64)
    if values.size == 0:
        return np.array([], dtype=np.float64)

    running_peak = np.maximum.accumulate(values)
    drawdowns = np.zeros_like(values)
    np.divide(running_peak - values, running_peak, out=drawdowns, where=running_peak > 0)
    return drawdowns


def max_drawdown_pct(curve: Sequence[float]) -> float:
    """
    Largest peak-to-trough decline of a curve, in percent.

    Examples:
        >>> max_drawdown_pct([100.0, 120.0, 90.0, 130.0])
        25.0
        >>> max_drawdown_pct([])
        0.0
    """
    drawdowns = drawdown_curve(curve)
    if drawdowns.size == 0:
        return 0.0
    return float(np.max(drawdowns) * 100.0)
