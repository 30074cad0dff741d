"""
Tabular strategy summary for spreadsheet tools.

One row per strategy with a fixed column order. The CSV rendition quotes
every cell and formats numbers with fixed precision.
"""

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from stratfolio.models.exceptions import ExportError
from stratfolio.models.strategy import Strategy


logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "Symbol",
    "Timeframe",
    "Profit Factor",
    "Max Drawdown (%)",
    "SQN",
    "Win Rate (%)",
    "Total Return (%)",
]

# Decimal places per numeric column in the CSV rendition
_CSV_PRECISION = {
    "Profit Factor": 2,
    "Max Drawdown (%)": 2,
    "SQN": 2,
    "Win Rate (%)": 1,
    "Total Return (%)": 2,
}


def summary_frame(strategies: Sequence[Strategy]) -> pd.DataFrame:
    """
    Build the summary table of reported strategy metrics.

    Max drawdown is reported as an absolute value.

    Args:
        strategies: Strategies in row order.

    Returns:
        DataFrame with ``SUMMARY_COLUMNS``.
    """
    rows = [
        [
            s.data_id.symbol,
            s.data_id.period,
            float(s.backtest_stats.profit_factor),
            abs(float(s.backtest_stats.max_drawdown)),
            float(s.backtest_stats.sqn),
            float(s.backtest_stats.win_rate),
            float(s.backtest_stats.total_return),
        ]
        for s in strategies
    ]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def summary_csv(strategies: Sequence[Strategy]) -> str:
    """
    Render the summary table as CSV with every cell quoted.

    Examples:
        >>> summary_csv([]).splitlines()[0]
        '"Symbol","Timeframe","Profit Factor","Max Drawdown (%)","SQN","Win Rate (%)","Total Return (%)"'
    """
    frame = summary_frame(strategies)
    for column, places in _CSV_PRECISION.items():
        frame[column] = frame[column].map(lambda value, p=places: f"{value:.{p}f}")

    return frame.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")


def write_summary_csv(strategies: Sequence[Strategy], destination: str | Path) -> Path:
    """
    Write the CSV summary to a file.

    Raises:
        ExportError: If the file cannot be written.
    """
    destination = Path(destination)
    content = summary_csv(strategies)
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ExportError(f"Failed to write summary {destination}", cause=exc) from exc

    logger.info("Wrote summary of %d strategies to %s", len(strategies), destination)
    return destination
