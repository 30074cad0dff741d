"""
Pytest configuration and global fixtures.

This module provides shared test fixtures used across the test suite,
including raw interchange records, canonical strategy factories and
upload helpers.
"""

import json

import pytest

from stratfolio.data_io.ingestion import UploadFile
from stratfolio.models.strategy import BacktestStats, DataId, Strategy


@pytest.fixture()
def raw_record():
    """
    Provide a raw interchange record factory.

    Returns:
        Callable accepting field overrides and returning a fresh dict.

    Examples:
        >>> def test_something(raw_record):
        ...     record = raw_record(equity=[1, 2, 3])
        ...     assert record["dataId"]["symbol"] == "eurusd"
    """

    def _create(**overrides):
        record = {
            "dataId": {"symbol": "eurusd", "period": "H1"},
            "equity": [100000, 100500, 100250, 101000],
            "balance": [100000, 100400, 100400, 100900],
            "backtestStats": {
                "profitFactor": 1.45,
                "maxDrawdown": -3.2,
                "sqn": 2.1,
                "totalReturn": 12.5,
                "winRate": 55.5,
                "trades": 120,
            },
            "strategy": {"openRules": [{"name": "Moving Average", "period": 14}]},
        }
        record.update(overrides)
        return record

    return _create


@pytest.fixture()
def make_strategy():
    """
    Provide a canonical Strategy factory.

    Returns:
        Callable taking an equity series plus optional symbol, period and
        stats overrides.
    """

    def _create(equity, symbol="EURUSD", period="H1", **stats):
        return Strategy(
            data_id=DataId(symbol=symbol, period=period),
            equity=tuple(equity),
            balance=tuple(equity),
            backtest_stats=BacktestStats(stats),
        )

    return _create


@pytest.fixture()
def make_upload():
    """
    Provide an UploadFile factory serializing a JSON payload.

    Returns:
        Callable taking a file name and a payload (or raw bytes).
    """

    def _create(name, payload):
        content = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
        return UploadFile(name=name, content=content)

    return _create
