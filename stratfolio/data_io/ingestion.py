"""
Normalization of uploaded backtest exports into canonical strategies.

This module validates untrusted JSON records from third-party strategy
generators and converts them into frozen ``Strategy`` records:

- Pre-flight eligibility check (suffix and size) before any parsing
- Required-field validation in a fixed order, one error per condition
- Vendor metric reconciliation and strict numeric coercion
- Opaque payloads (strategy definition, filters, unknown keys) carried
  through by value

A record either normalizes completely or raises ``ValidationError``;
partially populated records are never returned.
"""

import copy
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from stratfolio.config.settings import DEFAULT_SETTINGS, AnalyzerSettings
from stratfolio.data_io.schema import (
    KNOWN_RECORD_KEYS,
    coerce_series,
    normalize_backtest_stats,
)
from stratfolio.models.exceptions import ValidationError
from stratfolio.models.strategy import BacktestStats, DataId, Strategy


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadFile:
    """
    Raw upload as received from a file chooser or the command line.

    Attributes:
        name: File name including suffix.
        content: Raw file bytes.
    """

    name: str
    content: bytes

    @property
    def size(self) -> int:
        """Size of the upload in bytes."""
        return len(self.content)

    @classmethod
    def from_path(cls, path: str | Path) -> "UploadFile":
        """Read an upload from disk."""
        file_path = Path(path)
        return cls(name=file_path.name, content=file_path.read_bytes())


@dataclass(frozen=True)
class UploadedFile:
    """
    Strategies normalized from one upload.

    Attributes:
        name: Source file name.
        strategies: Normalized strategies in file order.
        uploaded_at: Ingestion timestamp (UTC).
    """

    name: str
    strategies: tuple[Strategy, ...]
    uploaded_at: datetime = field(default_factory=lambda: datetime.now(UTC))


def check_upload_eligible(
    name: str, size: int, settings: AnalyzerSettings = DEFAULT_SETTINGS
) -> list[str]:
    """
    Cheap pre-flight check on file metadata before any parsing.

    Args:
        name: File name including suffix.
        size: File size in bytes.
        settings: Limits to apply.

    Returns:
        Human-readable rejection reasons; empty when the file is eligible.

    Examples:
        >>> check_upload_eligible("run.json", 1024)
        []
        >>> check_upload_eligible("run.csv", 1024)
        ['File must have .json extension']
    """
    errors = []

    if not name.lower().endswith(tuple(settings.allowed_suffixes)):
        allowed = " or ".join(settings.allowed_suffixes)
        errors.append(f"File must have {allowed} extension")

    if size > settings.max_upload_bytes:
        limit_mib = settings.max_upload_bytes / (1024 * 1024)
        errors.append(f"File size must be less than {limit_mib:g}MB")

    return errors


def _coerce_label(value: Any) -> str | None:
    """Coerce a symbol/period value to a non-blank string, or None."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    text = str(value)
    return text if text.strip() else None


def normalize_record(data: Any, source: str) -> Strategy:
    """
    Validate and normalize one raw strategy record.

    Checks run in order and each failure is a distinct error: ``dataId``
    object, ``dataId.symbol``/``dataId.period``, ``equity``/``balance``
    arrays, ``backtestStats`` object.

    Args:
        data: Parsed JSON value of one record.
        source: Context label used in error messages (e.g. 'a.json[0]').

    Returns:
        Canonical Strategy with a fresh identity.

    Raises:
        ValidationError: If a required field is missing or malformed.
        CoercionError: If a numeric field holds a non-numeric value.

    Examples:
        >>> strategy = normalize_record(
        ...     {
        ...         "dataId": {"symbol": "eurusd", "period": "H1"},
        ...         "equity": [1, 2],
        ...         "balance": [1, 2],
        ...         "backtestStats": {"PF": 1.8},
        ...     },
        ...     "upload.json[0]",
        ... )
        >>> strategy.data_id.symbol
        'EURUSD'
        >>> strategy.backtest_stats.profit_factor
        1.8
    """
    if not isinstance(data, Mapping):
        raise ValidationError("Strategy record must be a JSON object", source=source)

    raw_id = data.get("dataId")
    if not isinstance(raw_id, Mapping):
        raise ValidationError("Missing or invalid dataId", source=source)

    symbol = _coerce_label(raw_id.get("symbol"))
    period = _coerce_label(raw_id.get("period"))
    if symbol is None or period is None:
        raise ValidationError("Missing symbol or period in dataId", source=source)

    equity = data.get("equity")
    balance = data.get("balance")
    if not isinstance(equity, list) or not isinstance(balance, list):
        raise ValidationError("Missing or invalid equity/balance arrays", source=source)
    if not equity or not balance:
        raise ValidationError("Empty equity/balance arrays", source=source)

    raw_stats = data.get("backtestStats")
    if not isinstance(raw_stats, Mapping):
        raise ValidationError("Missing or invalid backtestStats", source=source)

    data_id = DataId(symbol=symbol.upper(), period=period)
    strategy_payload = data.get("strategy")
    extra_fields = {
        key: copy.deepcopy(value)
        for key, value in data.items()
        if key not in KNOWN_RECORD_KEYS
    }

    return Strategy(
        data_id=data_id,
        equity=coerce_series(equity, "equity", source),
        balance=coerce_series(balance, "balance", source),
        backtest_stats=BacktestStats(normalize_backtest_stats(raw_stats, source)),
        strategy=copy.deepcopy(strategy_payload) if strategy_payload is not None else {},
        open_filters=copy.deepcopy(data.get("openFilters")),
        close_filters=copy.deepcopy(data.get("closeFilters")),
        extra_fields=extra_fields,
    )


def normalize(payload: Any, context: str) -> list[Strategy]:
    """
    Normalize a parsed upload holding one record or an array of records.

    Each array element is normalized independently and labelled with its
    position (``context[i]``); a single object is element 0.

    Args:
        payload: Parsed JSON document.
        context: Label of the upload, usually the file name.

    Returns:
        Canonical strategies in document order.

    Raises:
        ValidationError: On the first invalid record or an empty array.
    """
    records = payload if isinstance(payload, list) else [payload]
    if not records:
        raise ValidationError("File contains no strategy records", source=context)

    return [
        normalize_record(item, f"{context}[{index}]")
        for index, item in enumerate(records)
    ]


def parse_upload(
    upload: UploadFile, settings: AnalyzerSettings = DEFAULT_SETTINGS
) -> UploadedFile:
    """
    Check eligibility, decode and normalize a single upload.

    Args:
        upload: Raw upload.
        settings: Limits to apply.

    Returns:
        UploadedFile with the normalized strategies.

    Raises:
        ValidationError: If the file is ineligible, not JSON, or holds an
            invalid record.
    """
    rejections = check_upload_eligible(upload.name, upload.size, settings)
    if rejections:
        raise ValidationError(", ".join(rejections), source=upload.name)

    # JSONDecodeError is a ValueError; oversized int literals raise plain
    # ValueError and deep nesting raises RecursionError
    try:
        payload = json.loads(upload.content.decode("utf-8"))
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        raise ValidationError(
            "Invalid JSON format", source=upload.name, context={"cause": str(exc)}
        ) from exc

    strategies = normalize(payload, upload.name)
    logger.info(
        "Normalized %d strategies from %s",
        len(strategies),
        upload.name,
        extra={"source": upload.name},
    )

    return UploadedFile(name=upload.name, strategies=tuple(strategies))
