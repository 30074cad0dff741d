"""CLI command for analyzing a set of backtest exports.

Usage:
    stratfolio analyze runs/*.json
    stratfolio analyze runs/*.json --top 10
    stratfolio analyze runs/*.json --json > report.json

Exit codes:
    0: Success
    1: No strategy could be ingested
    2: Invalid settings file
"""

import argparse
import json
import logging

from rich.table import Table

from stratfolio.analytics.service import get_correlation, get_statistics
from stratfolio.cli.common import (
    EXIT_BAD_CONFIG,
    EXIT_FAILURE,
    EXIT_OK,
    add_common_arguments,
    console,
    ingest_files,
    resolve_settings,
)
from stratfolio.cli.logging_setup import setup_logging
from stratfolio.models.correlation import CorrelationReport
from stratfolio.models.enums import RiskBucket
from stratfolio.models.statistics import PortfolioStatistics
from stratfolio.models.strategy import Strategy


logger = logging.getLogger(__name__)

_RISK_STYLES = {
    RiskBucket.LOW: "green",
    RiskBucket.MEDIUM: "yellow",
    RiskBucket.HIGH: "red",
}


def configure_analyze_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments of the 'analyze' subcommand."""
    add_common_arguments(parser)
    parser.add_argument(
        "--top",
        type=int,
        default=5,
        help="Number of correlation pairs to list (default: 5)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON report instead of tables",
    )


def _strategy_table(strategies: list[Strategy]) -> Table:
    table = Table(title="Strategies")
    for column in ("Symbol", "Timeframe", "Profit Factor", "Max DD", "SQN", "Win Rate", "Return"):
        table.add_column(column, justify="left" if column in ("Symbol", "Timeframe") else "right")
    for strategy in strategies:
        stats = strategy.backtest_stats
        table.add_row(
            strategy.data_id.symbol,
            strategy.data_id.period,
            f"{stats.profit_factor:.2f}",
            f"{abs(stats.max_drawdown):.2f}",
            f"{stats.sqn:.2f}",
            f"{stats.win_rate:.1f}",
            f"{stats.total_return:.2f}",
        )
    return table


def _statistics_table(statistics: PortfolioStatistics) -> Table:
    table = Table(title="Portfolio")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Strategies", str(statistics.count))
    table.add_row("Total Return (%)", f"{statistics.total_return:.2f}")
    table.add_row("Max Drawdown (%)", f"{statistics.max_drawdown:.2f}")
    table.add_row("Sharpe Ratio", f"{statistics.sharpe_ratio:.3f}")
    table.add_row("Avg Profit Factor", f"{statistics.profit_factor:.2f}")
    table.add_row("Avg Win Rate (%)", f"{statistics.win_rate:.1f}")
    return table


def _correlation_table(report: CorrelationReport, top: int) -> Table:
    table = Table(title=f"Correlation Risk ({len(report.pairs)} pairs)")
    table.add_column("Strategy A")
    table.add_column("Strategy B")
    table.add_column("|r|", justify="right")
    table.add_column("Risk")
    for pair in report.pairs[:top]:
        table.add_row(
            pair.strategy_a,
            pair.strategy_b,
            f"{pair.correlation * 100:.1f}%",
            f"[{_RISK_STYLES[pair.risk]}]{pair.risk.value}[/]",
        )
    return table


def run_analyze_command(args: argparse.Namespace) -> int:
    """Execute the 'analyze' subcommand.

    Returns:
        Exit code
    """
    setup_logging(level=args.log_level, log_file=args.log_file, use_json=args.log_json)

    settings = resolve_settings(args.config)
    if settings is None:
        return EXIT_BAD_CONFIG

    result = ingest_files(args.files, settings, max_workers=args.workers)
    if result is None:
        return EXIT_FAILURE

    strategies = result.strategies
    statistics = get_statistics(strategies, settings)
    report = get_correlation(strategies, settings)

    if args.json:
        payload = {
            "strategies": [
                {"id": s.id, "label": s.label, "backtestStats": s.backtest_stats.to_dict()}
                for s in strategies
            ],
            "statistics": statistics.model_dump(),
            "correlation": report.model_dump(mode="json"),
            "errors": [str(error) for error in result.errors],
        }
        print(json.dumps(payload, indent=2))
        return EXIT_OK

    console.print(_strategy_table(strategies))
    console.print(_statistics_table(statistics))
    if len(strategies) >= 2:
        console.print(_correlation_table(report, args.top))
    else:
        console.print("Select at least 2 strategies to analyze correlations.")

    return EXIT_OK
