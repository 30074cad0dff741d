"""Shared helpers for CLI commands: settings and file ingestion."""

import argparse
import logging
from pathlib import Path

from pydantic import ValidationError as SettingsValidationError
from rich.console import Console

from stratfolio.config.settings import DEFAULT_SETTINGS, AnalyzerSettings, load_settings
from stratfolio.data_io.batch import BatchResult, normalize_batch
from stratfolio.data_io.ingestion import UploadFile
from stratfolio.models.exceptions import BatchIngestionError


logger = logging.getLogger(__name__)
console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_CONFIG = 2


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the upload, config and logging arguments shared by commands."""
    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="Backtest export files (.json) to ingest",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON settings file (default: built-in settings)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Files normalized concurrently (default: from settings)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        help="Write file logs as JSON lines",
    )


def resolve_settings(config_path: Path | None) -> AnalyzerSettings | None:
    """Load settings, printing the problem and returning None when invalid."""
    if config_path is None:
        return DEFAULT_SETTINGS
    try:
        return load_settings(config_path)
    except (OSError, ValueError, SettingsValidationError) as exc:
        err_console.print(
            f"Error: Invalid settings file {config_path}: {exc}", style="red", markup=False
        )
        return None


def ingest_files(
    paths: list[Path], settings: AnalyzerSettings, max_workers: int | None = None
) -> BatchResult | None:
    """Read and normalize upload files, printing collected errors.

    Returns:
        BatchResult, or None when no strategy could be ingested.
    """
    uploads = []
    unreadable = []
    for path in paths:
        try:
            uploads.append(UploadFile.from_path(path))
        except OSError as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            unreadable.append(f"{path}: {exc.strerror or exc}")

    try:
        result = normalize_batch(uploads, settings, max_workers=max_workers)
    except BatchIngestionError as exc:
        err_console.print(str(exc), style="red", markup=False)
        for message in unreadable:
            err_console.print(message, style="red", markup=False)
        return None

    for message in unreadable + [str(error) for error in result.errors]:
        err_console.print(f"Skipped {message}", style="yellow", markup=False)

    if not result.strategies:
        err_console.print("Error: No strategies found in the given files", style="red")
        return None

    return result
