"""Correlation entities for portfolio risk analysis.

This module defines the derived pair-wise correlation record and the
correlation report handed to display collaborators. Both are produced on
demand from canonical strategies and never persisted.
"""
from pydantic import BaseModel, ConfigDict, Field

from stratfolio.models.enums import RiskBucket


class CorrelationPair(BaseModel):
    """Correlation magnitude and risk bucket for two strategies.

    Attributes:
        strategy_a: Label of the first strategy ('SYMBOL period')
        strategy_b: Label of the second strategy
        correlation: Absolute Pearson correlation of period returns
        risk: Risk bucket of the correlation magnitude
    """

    model_config = ConfigDict(frozen=True)

    strategy_a: str
    strategy_b: str
    correlation: float = Field(..., ge=0.0, le=1.0)
    risk: RiskBucket


class CorrelationReport(BaseModel):
    """Correlation matrix together with its ranked pairs.

    Attributes:
        labels: Strategy labels in matrix order
        matrix: Square correlation matrix (row-major)
        pairs: Unordered pairs sorted by descending correlation magnitude
    """

    model_config = ConfigDict(frozen=True)

    labels: list[str] = Field(default_factory=list)
    matrix: list[list[float]] = Field(default_factory=list)
    pairs: list[CorrelationPair] = Field(default_factory=list)

    def pairs_at_risk(self, risk: RiskBucket) -> list[CorrelationPair]:
        """Return pairs in the given risk bucket, preserving rank order."""
        return [pair for pair in self.pairs if pair.risk == risk]
