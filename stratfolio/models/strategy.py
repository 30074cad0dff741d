"""
Canonical strategy records.

This module defines the immutable records produced by the normalizer and
consumed by the statistics engine and the interchange writer: the
instrument identifier, the backtest statistics mapping, the strategy
record itself and the portfolio snapshot.

Strategy records are frozen; opaque vendor payloads are carried along
untouched and never interpreted.
"""

import copy
import uuid
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


Number = int | float

# Guaranteed metric names and their neutral defaults
GUARANTEED_METRIC_DEFAULTS: dict[str, Number] = {
    "profitFactor": 1,
    "maxDrawdown": 0,
    "sqn": 0,
    "totalReturn": 0,
    "winRate": 50,
}


@dataclass(frozen=True)
class DataId:
    """
    Identifies a tradable instrument and timeframe pair.

    Attributes:
        symbol: Instrument symbol, uppercase after normalization.
        period: Timeframe as given by the source (e.g. 'H1', 'M15').

    Examples:
        >>> DataId(symbol="EURUSD", period="H1").label
        'EURUSD H1'
        >>> DataId("EURUSD", "H1") == DataId("EURUSD", "H1")
        True
    """

    symbol: str
    period: str

    @property
    def label(self) -> str:
        """Return display label used in correlation reports."""
        return f"{self.symbol} {self.period}"

    def to_dict(self) -> dict[str, str]:
        """Return the interchange representation."""
        return {"symbol": self.symbol, "period": self.period}


class BacktestStats(Mapping[str, Number]):
    """
    Read-only mapping of metric name to numeric value.

    The five guaranteed metrics are always present after normalization;
    vendor-specific metrics remain reachable under their original names.

    Examples:
        >>> stats = BacktestStats({"profitFactor": 1.8, "PF": 1.8})
        >>> stats.profit_factor
        1.8
        >>> stats.win_rate
        50
        >>> stats["PF"]
        1.8
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, Number] | None = None):
        merged: dict[str, Number] = dict(GUARANTEED_METRIC_DEFAULTS)
        merged.update(values or {})
        self._values = merged

    def __getitem__(self, key: str) -> Number:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"BacktestStats({self._values!r})"

    @property
    def profit_factor(self) -> Number:
        return self._values["profitFactor"]

    @property
    def max_drawdown(self) -> Number:
        """Vendor-reported max drawdown; sign is not normalized."""
        return self._values["maxDrawdown"]

    @property
    def sqn(self) -> Number:
        return self._values["sqn"]

    @property
    def total_return(self) -> Number:
        return self._values["totalReturn"]

    @property
    def win_rate(self) -> Number:
        return self._values["winRate"]

    def to_dict(self) -> dict[str, Number]:
        """Return a plain dict copy in insertion order."""
        return dict(self._values)


def generate_strategy_id(data_id: DataId) -> str:
    """
    Generate a process-unique strategy identity.

    Args:
        data_id: Instrument identifier of the strategy.

    Returns:
        Identity string of the form ``SYMBOL_period_<hex>``.
    """
    return f"{data_id.symbol}_{data_id.period}_{uuid.uuid4().hex}"


@dataclass(frozen=True)
class Strategy:
    """
    Canonical, validated strategy record.

    Attributes:
        data_id: Instrument and timeframe.
        equity: Equity samples in chronological order (non-empty).
        balance: Balance samples in chronological order (non-empty).
        backtest_stats: Normalized statistics mapping.
        strategy: Opaque strategy-definition payload.
        open_filters: Opaque open-filter payload, None when absent.
        close_filters: Opaque close-filter payload, None when absent.
        extra_fields: Unknown top-level source fields, preserved verbatim.
        id: Identity assigned at ingestion.
    """

    data_id: DataId
    equity: tuple[Number, ...]
    balance: tuple[Number, ...]
    backtest_stats: BacktestStats
    strategy: Any = field(default_factory=dict)
    open_filters: Any = None
    close_filters: Any = None
    extra_fields: Mapping[str, Any] = field(default_factory=dict)
    id: str = ""

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, "id", generate_strategy_id(self.data_id))

    @property
    def label(self) -> str:
        """Return 'SYMBOL period' display label."""
        return self.data_id.label

    def snapshot(self) -> "Strategy":
        """Return a by-value copy sharing no mutable state with this record."""
        return copy.deepcopy(self)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _portfolio_id() -> str:
    return f"portfolio_{uuid.uuid4().hex}"


@dataclass(frozen=True)
class Portfolio:
    """
    Immutable snapshot of a named group of strategies.

    Attributes:
        name: Free-text display name (non-blank).
        members: Non-empty ordered tuple of strategy copies.
        id: Portfolio identity.
        created_at: Creation timestamp (UTC).

    Raises:
        ValueError: If the name is blank or there are no members.
    """

    name: str
    members: tuple[Strategy, ...]
    id: str = field(default_factory=_portfolio_id)
    created_at: datetime = field(default_factory=_utc_now)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Portfolio name must not be blank")
        if not self.members:
            raise ValueError("Portfolio must contain at least one strategy")
        object.__setattr__(self, "members", tuple(self.members))

    @classmethod
    def from_selection(cls, name: str, strategies: Sequence[Strategy]) -> "Portfolio":
        """
        Snapshot the given strategies by value into a new portfolio.

        Args:
            name: Portfolio display name.
            strategies: Currently selected strategies.

        Returns:
            New Portfolio whose members are deep copies.
        """
        return cls(name=name, members=tuple(s.snapshot() for s in strategies))

    @property
    def symbols(self) -> list[str]:
        """Distinct member symbols in first-seen order."""
        return list(dict.fromkeys(m.data_id.symbol for m in self.members))

    @property
    def periods(self) -> list[str]:
        """Distinct member timeframes in first-seen order."""
        return list(dict.fromkeys(m.data_id.period for m in self.members))
