"""
Interchange archive generation.

Canonical strategies are written back in the shape the normalizer accepts,
so an exported archive can be re-uploaded unchanged:

    SYMBOL/TIMEFRAME/strategy-<uuid>.json   one entry per strategy
    portfolio-info.json                     portfolio metadata

Archives are assembled in memory and written to disk through a temporary
sibling file and an atomic rename, so a failed export never leaves a
partial archive under the final name. ``ArchiveExporter`` runs generation
on a background thread and hands back a future the caller can await or
poll.
"""

import io
import json
import logging
import os
import tempfile
import zipfile
from collections.abc import Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from stratfolio.export.naming import (
    archive_file_name,
    generate_entry_id,
    sanitize_path_segment,
)
from stratfolio.models.exceptions import ExportError
from stratfolio.models.strategy import Portfolio, Strategy


logger = logging.getLogger(__name__)

METADATA_ENTRY = "portfolio-info.json"


def interchange_document(strategy: Strategy) -> dict[str, Any]:
    """
    Project a canonical strategy onto the interchange record shape.

    Args:
        strategy: Strategy to project.

    Returns:
        Dict with keys dataId, equity, balance, backtestStats, strategy,
        openFilters/closeFilters when present, then preserved extra fields.
    """
    document: dict[str, Any] = {
        "dataId": strategy.data_id.to_dict(),
        "equity": list(strategy.equity),
        "balance": list(strategy.balance),
        "backtestStats": strategy.backtest_stats.to_dict(),
        "strategy": strategy.strategy,
    }
    if strategy.open_filters is not None:
        document["openFilters"] = strategy.open_filters
    if strategy.close_filters is not None:
        document["closeFilters"] = strategy.close_filters
    for key, value in strategy.extra_fields.items():
        document.setdefault(key, value)
    return document


def _dump_json(payload: Any, entry: str) -> str:
    try:
        return json.dumps(payload, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise ExportError(f"Failed to serialize archive entry {entry}", cause=exc) from exc


def portfolio_metadata(portfolio: Portfolio, exported_at: datetime) -> dict[str, Any]:
    """
    Build the top-level metadata entry of a portfolio archive.

    Args:
        portfolio: Exported portfolio.
        exported_at: Export timestamp.

    Returns:
        Dict with name, timestamps, member count and distinct symbols/timeframes.
    """
    return {
        "portfolioName": portfolio.name,
        "createdAt": portfolio.created_at.isoformat(),
        "exportedAt": exported_at.isoformat(),
        "strategyCount": len(portfolio.members),
        "symbols": portfolio.symbols,
        "timeframes": portfolio.periods,
    }


def _zip_entries(entries: Sequence[tuple[str, Any]]) -> bytes:
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry_path, payload in entries:
                archive.writestr(entry_path, _dump_json(payload, entry_path))
    except (OSError, zipfile.LargeZipFile) as exc:
        raise ExportError("Failed to generate ZIP file", cause=exc) from exc
    return buffer.getvalue()


def build_portfolio_archive(
    portfolio: Portfolio, exported_at: datetime | None = None
) -> bytes:
    """
    Generate a portfolio archive grouped by symbol, then timeframe.

    Args:
        portfolio: Portfolio to export.
        exported_at: Export timestamp (default: now, UTC).

    Returns:
        ZIP archive bytes.

    Raises:
        ExportError: If an entry cannot be serialized or the archive
            cannot be generated.
    """
    exported_at = exported_at or datetime.now(UTC)

    grouped: dict[str, dict[str, list[Strategy]]] = {}
    for strategy in portfolio.members:
        by_period = grouped.setdefault(strategy.data_id.symbol, {})
        by_period.setdefault(strategy.data_id.period, []).append(strategy)

    entries: list[tuple[str, Any]] = []
    for symbol, by_period in grouped.items():
        for period, strategies in by_period.items():
            folder = f"{sanitize_path_segment(symbol)}/{sanitize_path_segment(period)}"
            for strategy in strategies:
                entry_path = f"{folder}/strategy-{generate_entry_id()}.json"
                entries.append((entry_path, interchange_document(strategy)))

    entries.append((METADATA_ENTRY, portfolio_metadata(portfolio, exported_at)))

    data = _zip_entries(entries)
    logger.info(
        "Generated archive for portfolio %s: %d strategies, %d bytes",
        portfolio.name,
        len(portfolio.members),
        len(data),
    )
    return data


def build_strategies_archive(strategies: Sequence[Strategy]) -> bytes:
    """
    Generate a flat archive with one ``SYMBOL_TIMEFRAME_<id>.json`` per strategy.

    Raises:
        ExportError: If there is nothing to export or generation fails.
    """
    if not strategies:
        raise ExportError("No strategies to export")

    entries = []
    for strategy in strategies:
        symbol = sanitize_path_segment(strategy.data_id.symbol)
        period = sanitize_path_segment(strategy.data_id.period)
        entry_path = f"{symbol}_{period}_{generate_entry_id()}.json"
        entries.append((entry_path, interchange_document(strategy)))

    data = _zip_entries(entries)
    logger.info("Generated archive of %d strategies, %d bytes", len(strategies), len(data))
    return data


def write_archive(data: bytes, destination: str | Path) -> Path:
    """
    Write archive bytes atomically.

    The bytes go to a temporary file next to the destination, which is
    renamed into place only after a complete write.

    Args:
        data: Archive bytes.
        destination: Final archive path.

    Returns:
        The destination path.

    Raises:
        ExportError: If the archive cannot be written.
    """
    destination = Path(destination)
    tmp_name = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=destination.parent,
            prefix=f".{destination.name}.",
            suffix=".partial",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, destination)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise ExportError(f"Failed to write archive {destination}", cause=exc) from exc

    logger.info("Wrote archive to %s (%d bytes)", destination, len(data))
    return destination


def export_portfolio(
    portfolio: Portfolio,
    output_dir: str | Path,
    exported_at: datetime | None = None,
) -> Path:
    """
    Generate and write a portfolio archive named after the portfolio.

    Returns:
        Path of the written archive.

    Raises:
        ExportError: If generation or writing fails.
    """
    exported_at = exported_at or datetime.now(UTC)
    data = build_portfolio_archive(portfolio, exported_at=exported_at)
    destination = Path(output_dir) / archive_file_name(portfolio.name, exported_at)
    return write_archive(data, destination)


def export_strategies(
    strategies: Sequence[Strategy],
    output_dir: str | Path,
    name: str = "strategies",
    exported_at: datetime | None = None,
) -> Path:
    """
    Generate and write a flat strategies archive.

    Returns:
        Path of the written archive.

    Raises:
        ExportError: If generation or writing fails.
    """
    exported_at = exported_at or datetime.now(UTC)
    data = build_strategies_archive(strategies)
    destination = Path(output_dir) / archive_file_name(name, exported_at)
    return write_archive(data, destination)


class ArchiveExporter:
    """Runs archive exports on a background thread pool.

    Each submission returns a ``Future`` resolving to the written path or
    raising ``ExportError``.

    Examples:
        >>> with ArchiveExporter() as exporter:  # doctest: +SKIP
        ...     future = exporter.submit_portfolio(portfolio, "exports")
        ...     path = future.result()
    """

    def __init__(self, max_workers: int = 1):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="archive-export"
        )

    def submit_portfolio(
        self, portfolio: Portfolio, output_dir: str | Path
    ) -> "Future[Path]":
        """Schedule a portfolio archive export."""
        return self._executor.submit(export_portfolio, portfolio, output_dir)

    def submit_strategies(
        self,
        strategies: Sequence[Strategy],
        output_dir: str | Path,
        name: str = "strategies",
    ) -> "Future[Path]":
        """Schedule a flat strategies archive export."""
        return self._executor.submit(
            export_strategies, tuple(strategies), output_dir, name
        )

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting work, optionally waiting for running exports."""
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ArchiveExporter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=True)
