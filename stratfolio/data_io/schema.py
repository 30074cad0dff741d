"""
Vendor field reconciliation and numeric coercion.

Backtest exporters disagree on metric names (``profitFactor``, ``PF``,
``profit_factor`` ...). This module holds the explicit alias table used to
resolve each guaranteed metric, plus the strict numeric coercion applied to
every numeric field of an uploaded record.
"""

import math
from collections.abc import Mapping
from typing import Any

from stratfolio.models.exceptions import CoercionError
from stratfolio.models.strategy import GUARANTEED_METRIC_DEFAULTS, Number


# Ordered accepted source names per guaranteed metric; first present wins
METRIC_ALIASES: dict[str, tuple[str, ...]] = {
    "profitFactor": ("profitFactor", "profit_factor", "ProfitFactor", "PF"),
    "maxDrawdown": ("maxDrawdown", "max_drawdown", "MaxDrawdown", "DD", "drawdown"),
    "sqn": ("sqn", "SQN", "systemQualityNumber"),
    "totalReturn": ("totalReturn", "total_return", "TotalReturn", "return"),
    "winRate": ("winRate", "win_rate", "WinRate", "winningRate", "winning_rate"),
}

# Top-level keys of an interchange record that the normalizer interprets
KNOWN_RECORD_KEYS = (
    "dataId",
    "equity",
    "balance",
    "backtestStats",
    "strategy",
    "openFilters",
    "closeFilters",
)


def _finite_int(number: int, raw: Any, field: str, source: str | None) -> int:
    """Reject integers too large to convert to a float."""
    try:
        float(number)
    except OverflowError as exc:
        raise CoercionError(field, raw, source=source) from exc
    return number


def coerce_number(value: Any, field: str, source: str | None = None) -> Number:
    """
    Coerce a JSON value to a finite int or float.

    Integers stay integers and floats stay floats so re-serialization
    reproduces the original JSON numbers. Numeric strings are parsed.

    Args:
        value: Raw JSON value.
        field: Field path used in the error message.
        source: Context label of the record.

    Returns:
        The numeric value.

    Raises:
        CoercionError: If the value is not a finite number.

    Examples:
        >>> coerce_number("1.8", "PF")
        1.8
        >>> coerce_number(" 42 ", "trades")
        42
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise CoercionError(field, value, source=source)

    if isinstance(value, int):
        return _finite_int(value, value, field, source)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise CoercionError(field, value, source=source)
        return value

    if isinstance(value, str):
        text = value.strip()
        # int()/float() accept '_' digit separators; reject them
        if not text or "_" in text:
            raise CoercionError(field, value, source=source)
        try:
            number = int(text)
        except ValueError:
            pass
        else:
            return _finite_int(number, value, field, source)
        try:
            number = float(text)
        except ValueError as exc:
            raise CoercionError(field, value, source=source) from exc
        if not math.isfinite(number):
            raise CoercionError(field, value, source=source)
        return number

    raise CoercionError(field, value, source=source)


def coerce_series(values: list[Any], field: str, source: str | None = None) -> tuple[Number, ...]:
    """
    Coerce every element of a JSON array to a number.

    Args:
        values: Raw JSON array.
        field: Field name ('equity' or 'balance').
        source: Context label of the record.

    Returns:
        Tuple of numbers in source order.

    Raises:
        CoercionError: On the first non-numeric element.
    """
    return tuple(
        coerce_number(value, f"{field}[{index}]", source)
        for index, value in enumerate(values)
    )


def normalize_backtest_stats(
    stats: Mapping[str, Any], source: str | None = None
) -> dict[str, Number]:
    """
    Resolve guaranteed metrics and carry every other numeric field through.

    Each guaranteed metric takes the first non-null alias present in the
    source, or its neutral default. All source keys are then copied under
    their original names. JSON nulls are treated as absent.

    Args:
        stats: Raw ``backtestStats`` object.
        source: Context label of the record.

    Returns:
        Normalized statistics dict, guaranteed metrics first.

    Raises:
        CoercionError: If any present value is not numeric.

    Examples:
        >>> normalize_backtest_stats({"PF": 1.8})["profitFactor"]
        1.8
        >>> normalize_backtest_stats({})["winRate"]
        50
    """
    normalized: dict[str, Number] = {}

    for metric, aliases in METRIC_ALIASES.items():
        for alias in aliases:
            if stats.get(alias) is not None:
                normalized[metric] = coerce_number(
                    stats[alias], f"backtestStats.{alias}", source
                )
                break
        else:
            normalized[metric] = GUARANTEED_METRIC_DEFAULTS[metric]

    for key, value in stats.items():
        if value is None:
            continue
        normalized[key] = coerce_number(value, f"backtestStats.{key}", source)

    return normalized
