"""
Unit tests for single-record and single-payload normalization.

Tests required-field validation order, symbol casing, metric alias
resolution, numeric coercion and opaque payload preservation.
"""

import pytest

from stratfolio.data_io.ingestion import normalize, normalize_record
from stratfolio.models.exceptions import CoercionError, ValidationError


pytestmark = pytest.mark.unit


class TestNormalizeRecord:
    """Test suite for normalize_record."""

    def test_minimal_record_with_alias(self):
        """Test the documented minimal example record."""
        strategy = normalize_record(
            {
                "dataId": {"symbol": "eurusd", "period": "H1"},
                "equity": [1, 2],
                "balance": [1, 2],
                "backtestStats": {"PF": 1.8},
            },
            "upload.json[0]",
        )

        assert strategy.data_id.symbol == "EURUSD"
        assert strategy.data_id.period == "H1"
        assert strategy.backtest_stats.profit_factor == 1.8
        assert strategy.backtest_stats.max_drawdown == 0
        assert strategy.backtest_stats["PF"] == 1.8

    def test_defaults_applied_for_missing_metrics(self, raw_record):
        """Test neutral defaults for every absent guaranteed metric."""
        strategy = normalize_record(raw_record(backtestStats={}), "a.json[0]")

        assert dict(strategy.backtest_stats) == {
            "profitFactor": 1,
            "maxDrawdown": 0,
            "sqn": 0,
            "totalReturn": 0,
            "winRate": 50,
        }

    def test_period_case_preserved(self, raw_record):
        """Test that period keeps its original casing."""
        record = raw_record(dataId={"symbol": "gbpJpy", "period": "m15"})

        strategy = normalize_record(record, "a.json[0]")

        assert strategy.data_id.symbol == "GBPJPY"
        assert strategy.data_id.period == "m15"

    def test_numeric_identifiers_coerced_to_strings(self, raw_record):
        """Test that numeric symbol/period values become strings."""
        record = raw_record(dataId={"symbol": 500, "period": 60})

        strategy = normalize_record(record, "a.json[0]")

        assert strategy.data_id.symbol == "500"
        assert strategy.data_id.period == "60"

    def test_string_numbers_coerced(self, raw_record):
        """Test that numeric strings in series and stats are parsed."""
        record = raw_record(
            equity=["100", "101.5"],
            balance=[100, 101],
            backtestStats={"profit_factor": "1.25", "Trades": " 42 "},
        )

        strategy = normalize_record(record, "a.json[0]")

        assert strategy.equity == (100, 101.5)
        assert strategy.backtest_stats.profit_factor == 1.25
        assert strategy.backtest_stats["Trades"] == 42
        assert strategy.backtest_stats["profit_factor"] == 1.25

    def test_first_alias_wins(self, raw_record):
        """Test that alias order decides between competing source names."""
        record = raw_record(backtestStats={"PF": 3.0, "profit_factor": 2.0})

        strategy = normalize_record(record, "a.json[0]")

        assert strategy.backtest_stats.profit_factor == 2.0
        assert strategy.backtest_stats["PF"] == 3.0

    def test_null_alias_skipped(self, raw_record):
        """Test that a null alias falls through to the next one."""
        record = raw_record(backtestStats={"winRate": None, "win_rate": 61.0})

        strategy = normalize_record(record, "a.json[0]")

        assert strategy.backtest_stats.win_rate == 61.0
        assert "winRate" in strategy.backtest_stats
        assert strategy.backtest_stats["win_rate"] == 61.0

    def test_ints_stay_ints(self, raw_record):
        """Test that integers are not widened to floats."""
        strategy = normalize_record(raw_record(), "a.json[0]")

        assert all(isinstance(value, int) for value in strategy.equity)
        assert isinstance(strategy.backtest_stats["trades"], int)

    def test_opaque_payloads_preserved_by_value(self, raw_record):
        """Test that opaque payloads are copied, not shared."""
        record = raw_record(openFilters=[{"kind": "session"}], vendor={"build": 7})

        strategy = normalize_record(record, "a.json[0]")
        record["strategy"]["openRules"].append({"name": "RSI"})
        record["openFilters"].clear()

        assert strategy.strategy == {"openRules": [{"name": "Moving Average", "period": 14}]}
        assert strategy.open_filters == [{"kind": "session"}]
        assert strategy.close_filters is None
        assert strategy.extra_fields == {"vendor": {"build": 7}}

    def test_missing_strategy_payload_defaults_to_empty(self, raw_record):
        """Test that an absent strategy payload becomes an empty object."""
        record = raw_record()
        del record["strategy"]

        strategy = normalize_record(record, "a.json[0]")

        assert strategy.strategy == {}

    def test_identity_assigned_and_unique(self, raw_record):
        """Test that each normalization assigns a fresh identity."""
        first = normalize_record(raw_record(), "a.json[0]")
        second = normalize_record(raw_record(), "a.json[0]")

        assert first.id.startswith("EURUSD_H1_")
        assert first.id != second.id


class TestNormalizeRecordValidation:
    """Test suite for required-field validation."""

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"dataId": None}, "Missing or invalid dataId"),
            ({"dataId": "EURUSD"}, "Missing or invalid dataId"),
            ({"dataId": {"symbol": "EURUSD"}}, "Missing symbol or period in dataId"),
            ({"dataId": {"symbol": "", "period": "H1"}}, "Missing symbol or period in dataId"),
            ({"dataId": {"symbol": "  ", "period": "H1"}}, "Missing symbol or period in dataId"),
            ({"dataId": {"symbol": True, "period": "H1"}}, "Missing symbol or period in dataId"),
            ({"equity": "1,2,3"}, "Missing or invalid equity/balance arrays"),
            ({"balance": None}, "Missing or invalid equity/balance arrays"),
            ({"equity": []}, "Empty equity/balance arrays"),
            ({"backtestStats": [1, 2]}, "Missing or invalid backtestStats"),
        ],
    )
    def test_required_field_failures(self, raw_record, overrides, message):
        """Test that each malformed field raises its own error."""
        with pytest.raises(ValidationError) as exc_info:
            normalize_record(raw_record(**overrides), "bad.json[2]")

        assert exc_info.value.message == message
        assert exc_info.value.source == "bad.json[2]"
        assert "bad.json[2]" in str(exc_info.value)

    def test_check_order_reports_dataid_first(self):
        """Test that an empty object fails on dataId before anything else."""
        with pytest.raises(ValidationError, match="Missing or invalid dataId"):
            normalize_record({}, "a.json[0]")

    def test_non_object_record(self):
        """Test that a non-object record is rejected."""
        with pytest.raises(ValidationError, match="must be a JSON object"):
            normalize_record([1, 2, 3], "a.json[0]")

    @pytest.mark.parametrize("bad_value", ["abc", "", True, None, [1], "nan", float("inf"), "1_000"])
    def test_non_numeric_equity_raises_coercion_error(self, raw_record, bad_value):
        """Test that non-numeric equity samples are not silently zeroed."""
        record = raw_record(equity=[100, bad_value])

        with pytest.raises(CoercionError) as exc_info:
            normalize_record(record, "a.json[0]")

        assert exc_info.value.field == "equity[1]"
        assert exc_info.value.source == "a.json[0]"

    def test_non_numeric_stat_raises_coercion_error(self, raw_record):
        """Test that coercion failures in stats are validation errors."""
        record = raw_record(backtestStats={"sqn": "high"})

        with pytest.raises(ValidationError) as exc_info:
            normalize_record(record, "a.json[0]")

        assert isinstance(exc_info.value, CoercionError)
        assert exc_info.value.field == "backtestStats.sqn"


class TestNormalizePayload:
    """Test suite for normalize over single objects and arrays."""

    def test_single_object_labelled_as_element_zero(self, raw_record):
        """Test that a single object yields one strategy."""
        strategies = normalize(raw_record(), "a.json")

        assert len(strategies) == 1

    def test_array_elements_normalized_in_order(self, raw_record):
        """Test that every array element becomes a strategy."""
        payload = [
            raw_record(dataId={"symbol": "eurusd", "period": "H1"}),
            raw_record(dataId={"symbol": "usdjpy", "period": "D1"}),
        ]

        strategies = normalize(payload, "batch.json")

        assert [s.label for s in strategies] == ["EURUSD H1", "USDJPY D1"]

    def test_array_error_carries_position(self, raw_record):
        """Test that a failing element is reported with its index."""
        payload = [raw_record(), raw_record(dataId=None)]

        with pytest.raises(ValidationError) as exc_info:
            normalize(payload, "batch.json")

        assert exc_info.value.source == "batch.json[1]"

    def test_empty_array_rejected(self):
        """Test that an empty array is not a valid upload."""
        with pytest.raises(ValidationError, match="no strategy records"):
            normalize([], "empty.json")
