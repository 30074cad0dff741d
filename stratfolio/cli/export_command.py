"""CLI command for exporting backtest exports as a portfolio archive.

Usage:
    stratfolio export runs/*.json --name "Core FX" --output exports
    stratfolio export runs/*.json --name "Core FX" --output exports --csv
    stratfolio export runs/*.json --name picks --output exports --individual

Exit codes:
    0: Success
    1: Ingestion or export failure
    2: Invalid settings file
"""

import argparse
import logging
from datetime import UTC, datetime
from pathlib import Path

from stratfolio.cli.common import (
    EXIT_BAD_CONFIG,
    EXIT_FAILURE,
    EXIT_OK,
    add_common_arguments,
    console,
    err_console,
    ingest_files,
    resolve_settings,
)
from stratfolio.cli.logging_setup import setup_logging
from stratfolio.export.archive import ArchiveExporter
from stratfolio.export.naming import stats_file_name
from stratfolio.export.summary import write_summary_csv
from stratfolio.models.exceptions import ExportError, LibraryError
from stratfolio.portfolio.library import StrategyLibrary


logger = logging.getLogger(__name__)


def configure_export_parser(parser: argparse.ArgumentParser) -> None:
    """Add arguments of the 'export' subcommand."""
    add_common_arguments(parser)
    parser.add_argument(
        "--name",
        type=str,
        required=True,
        help="Portfolio name, also used for the output file names",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("exports"),
        help="Output directory (default: exports)",
    )
    parser.add_argument(
        "--csv",
        action="store_true",
        help="Also write the per-strategy CSV summary",
    )
    parser.add_argument(
        "--individual",
        action="store_true",
        help="Write a flat archive of strategy files instead of a portfolio archive",
    )


def run_export_command(args: argparse.Namespace) -> int:
    """Execute the 'export' subcommand.

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

    library = StrategyLibrary()
    for upload in result.uploads:
        library.add_upload(upload)
    library.select_all()

    try:
        portfolio = library.create_portfolio(args.name)
    except LibraryError as exc:
        err_console.print(f"Error: {exc}", style="red", markup=False)
        return EXIT_FAILURE

    try:
        with ArchiveExporter() as exporter:
            if args.individual:
                future = exporter.submit_strategies(portfolio.members, args.output, args.name)
            else:
                future = exporter.submit_portfolio(portfolio, args.output)
            archive_path = future.result()

        console.print(f"Wrote {len(portfolio.members)} strategies to {archive_path}", markup=False)

        if args.csv:
            csv_path = args.output / stats_file_name(args.name, datetime.now(UTC))
            write_summary_csv(portfolio.members, csv_path)
            console.print(f"Wrote summary to {csv_path}", markup=False)
    except ExportError as exc:
        logger.error("Export failed: %s", exc)
        err_console.print(f"Error: {exc}", style="red", markup=False)
        return EXIT_FAILURE

    return EXIT_OK
