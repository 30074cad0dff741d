"""
Unit tests for metric alias resolution and numeric coercion.
"""

import pytest

from stratfolio.data_io.schema import (
    METRIC_ALIASES,
    coerce_number,
    normalize_backtest_stats,
)
from stratfolio.models.exceptions import CoercionError


pytestmark = pytest.mark.unit


class TestCoerceNumber:
    """Test suite for coerce_number."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (3, 3),
            (-2.5, -2.5),
            ("7", 7),
            ("-0.25", -0.25),
            ("1e3", 1000.0),
            ("  12  ", 12),
        ],
    )
    def test_accepted_values(self, value, expected):
        """Test values that coerce successfully."""
        result = coerce_number(value, "field")

        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize(
        "value", [True, False, None, "", "   ", "ten", "inf", float("nan"), {}, [], "1_0"]
    )
    def test_rejected_values(self, value):
        """Test values that raise CoercionError."""
        with pytest.raises(CoercionError) as exc_info:
            coerce_number(value, "backtestStats.sqn", "x.json[0]")

        assert exc_info.value.field == "backtestStats.sqn"
        assert exc_info.value.source == "x.json[0]"

    @pytest.mark.parametrize("value", [10**400, -(10**400), "1" + "0" * 400, "9" * 5000])
    def test_integers_beyond_float_range_rejected(self, value):
        """Test that integers with no finite float value raise CoercionError."""
        with pytest.raises(CoercionError) as exc_info:
            coerce_number(value, "equity[0]", "big.json[0]")

        assert exc_info.value.value == value

    def test_largest_float_sized_integer_accepted(self):
        """Test that an integer just inside float range stays an int."""
        value = 10**308

        assert coerce_number(value, "equity[0]") == value
        assert coerce_number(str(value), "equity[0]") == value


class TestNormalizeBacktestStats:
    """Test suite for alias resolution."""

    @pytest.mark.parametrize(
        "metric, aliases",
        list(METRIC_ALIASES.items()),
    )
    def test_every_alias_resolves(self, metric, aliases):
        """Test that each documented alias feeds its metric."""
        for alias in aliases:
            stats = normalize_backtest_stats({alias: 4.5})

            assert stats[metric] == 4.5

    def test_guaranteed_metrics_come_first(self):
        """Test key order: guaranteed metrics, then source keys."""
        stats = normalize_backtest_stats({"trades": 10, "DD": -4})

        assert list(stats) == [
            "profitFactor",
            "maxDrawdown",
            "sqn",
            "totalReturn",
            "winRate",
            "trades",
            "DD",
        ]
        assert stats["maxDrawdown"] == -4

    def test_drawdown_sign_not_normalized(self):
        """Test that maxDrawdown keeps the sign it was reported with."""
        assert normalize_backtest_stats({"maxDrawdown": -12.5})["maxDrawdown"] == -12.5
        assert normalize_backtest_stats({"maxDrawdown": 12.5})["maxDrawdown"] == 12.5

    def test_null_extra_fields_dropped(self):
        """Test that null vendor fields are not copied."""
        stats = normalize_backtest_stats({"sharpeRatio": None})

        assert "sharpeRatio" not in stats
