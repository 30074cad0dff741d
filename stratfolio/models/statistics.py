"""Portfolio statistics report model."""
from pydantic import BaseModel, ConfigDict, Field


class PortfolioStatistics(BaseModel):
    """Aggregate statistics of an equal-weighted strategy combination.

    Attributes:
        total_return: Return of the merged equity curve, in percent
        max_drawdown: Largest peak-to-trough decline of the merged curve, in percent
        sharpe_ratio: Mean over sample standard deviation of period returns
        profit_factor: Mean of members' reported profit factors
        win_rate: Mean of members' reported win rates
        count: Number of member strategies
    """

    model_config = ConfigDict(frozen=True)

    total_return: float = 0.0
    max_drawdown: float = Field(default=0.0, ge=0.0)
    sharpe_ratio: float = 0.0
    profit_factor: float = 1.0
    win_rate: float = 0.0
    count: int = Field(default=0, ge=0)

    @classmethod
    def neutral(cls) -> "PortfolioStatistics":
        """Return the neutral record reported for an empty selection."""
        return cls()
