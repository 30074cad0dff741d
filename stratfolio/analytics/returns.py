"""
Period return derivation from equity curves.
"""

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray


def period_returns(equity: Sequence[float]) -> NDArray[np.float64]:
    """
    Compute simple step returns of an equity series.

    Element i is ``(E[i+1] - E[i]) / E[i]``. A zero-valued prior sample
    yields a return of 0 for that step instead of an infinite value.

    Args:
        equity: Equity samples in chronological order.

    Returns:
        Array of length ``len(equity) - 1``; empty for fewer than 2 samples.

    Examples:
        >>> period_returns([100.0, 110.0, 99.0])
        array([ 0.1, -0.1])
        >>> period_returns([0.0, 5.0])
        array([0.])
    """
    values = np.asarray(equity, dtype=np.float64)
    if values.size < 2:
        return np.array([], dtype=np.float64)

    prior = values[:-1]
    changes = values[1:] - prior

    returns = np.zeros_like(changes)
    np.divide(changes, prior, out=returns, where=prior != 0)
    return returns
