import argparse
import sys
from typing import Optional

from stratfolio.cli.analyze_command import configure_analyze_parser, run_analyze_command
from stratfolio.cli.export_command import configure_export_parser, run_export_command


def main(args: Optional[list[str]] = None) -> int:
    """
    Main entry point for the 'stratfolio' CLI.
    """
    parser = argparse.ArgumentParser(
        description="Stratfolio: backtest export ingestion and portfolio correlation analysis"
    )
    subparsers = parser.add_subparsers(
        dest="command", required=True, help="Subcommands"
    )

    # -------------------------------------------------------------------------
    # Subcommand: analyze
    # -------------------------------------------------------------------------
    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Report statistics and correlation risk of backtest exports",
        description="Ingest backtest exports and report portfolio statistics and correlation risk.",
    )
    configure_analyze_parser(analyze_parser)

    # -------------------------------------------------------------------------
    # Subcommand: export
    # -------------------------------------------------------------------------
    export_parser = subparsers.add_parser(
        "export",
        help="Bundle backtest exports into a portfolio archive",
        description="Ingest backtest exports and write them as a portfolio archive and CSV summary.",
    )
    configure_export_parser(export_parser)

    # -------------------------------------------------------------------------
    # Parse & Execute
    # -------------------------------------------------------------------------
    parsed_args = parser.parse_args(args)

    if parsed_args.command == "analyze":
        return run_analyze_command(parsed_args)
    if parsed_args.command == "export":
        return run_export_command(parsed_args)

    return 0


if __name__ == "__main__":
    sys.exit(main())
