"""Strategy filtering by instrument and reported metrics.

Filters are plain criteria models; applying them never mutates the input
collection.
"""
from collections.abc import Sequence
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from stratfolio.models.strategy import Strategy


class FilterOptions(BaseModel):
    """Criteria a strategy must satisfy to be listed.

    Unset criteria are ignored.

    Attributes:
        symbol: Exact (uppercase) symbol
        period: Exact timeframe
        min_profit_factor: Minimum reported profit factor
        max_drawdown: Maximum absolute reported drawdown
        min_sqn: Minimum reported SQN
        min_win_rate: Minimum reported win rate (percent)
    """

    model_config = ConfigDict(frozen=True)

    symbol: Optional[str] = None
    period: Optional[str] = None
    min_profit_factor: Optional[float] = Field(default=None, ge=0.0)
    max_drawdown: Optional[float] = Field(default=None, ge=0.0)
    min_sqn: Optional[float] = None
    min_win_rate: Optional[float] = Field(default=None, ge=0.0, le=100.0)

    def matches(self, strategy: Strategy) -> bool:
        """Check whether a strategy satisfies every set criterion.

        Args:
            strategy: Strategy to test

        Returns:
            True if all set criteria hold, False otherwise
        """
        stats = strategy.backtest_stats

        if self.symbol is not None and strategy.data_id.symbol != self.symbol.upper():
            return False
        if self.period is not None and strategy.data_id.period != self.period:
            return False
        if self.min_profit_factor is not None and stats.profit_factor < self.min_profit_factor:
            return False
        if self.max_drawdown is not None and abs(stats.max_drawdown) > self.max_drawdown:
            return False
        if self.min_sqn is not None and stats.sqn < self.min_sqn:
            return False
        if self.min_win_rate is not None and stats.win_rate < self.min_win_rate:
            return False
        return True

    @property
    def is_empty(self) -> bool:
        """True when no criterion is set."""
        return not self.model_dump(exclude_none=True)


def filter_strategies(
    strategies: Sequence[Strategy], options: FilterOptions
) -> list[Strategy]:
    """Return strategies matching the filter, preserving order.

    Args:
        strategies: Candidate strategies
        options: Filter criteria

    Returns:
        Matching strategies in input order
    """
    return [strategy for strategy in strategies if options.matches(strategy)]
