"""Canonical records, derived reports and the error family."""

from stratfolio.models.correlation import CorrelationPair, CorrelationReport
from stratfolio.models.enums import RiskBucket
from stratfolio.models.exceptions import (
    BatchIngestionError,
    CoercionError,
    ExportError,
    LibraryError,
    StratfolioError,
    ValidationError,
)
from stratfolio.models.statistics import PortfolioStatistics
from stratfolio.models.strategy import (
    GUARANTEED_METRIC_DEFAULTS,
    BacktestStats,
    DataId,
    Portfolio,
    Strategy,
)

__all__ = [
    "BacktestStats",
    "BatchIngestionError",
    "CoercionError",
    "CorrelationPair",
    "CorrelationReport",
    "DataId",
    "ExportError",
    "GUARANTEED_METRIC_DEFAULTS",
    "LibraryError",
    "Portfolio",
    "PortfolioStatistics",
    "RiskBucket",
    "StratfolioError",
    "Strategy",
    "ValidationError",
]
