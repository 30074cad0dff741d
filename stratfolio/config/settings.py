"""
Runtime settings using Pydantic.

This module provides type-safe validation and loading for the limits and
constants used by ingestion, the statistics engine and the exporter.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator


MAX_UPLOAD_BYTES = 50 * 1024 * 1024
MERGED_CURVE_BASELINE = 100_000.0
LOW_RISK_THRESHOLD = 0.3
HIGH_RISK_THRESHOLD = 0.7


class AnalyzerSettings(BaseModel):
    """
    Configuration for ingestion limits and analytics constants.

    Attributes:
        max_upload_bytes: Largest accepted upload in bytes (default: 50 MiB).
        allowed_suffixes: Accepted file name suffixes, lowercase (default: ['.json']).
        merged_curve_baseline: Absolute level the merged equity curve starts at
            (default: 100000).
        low_risk_threshold: |r| at or above which a pair is medium risk (default: 0.3).
        high_risk_threshold: |r| at or above which a pair is high risk (default: 0.7).
        max_workers: Concurrent file normalizations in a batch (default: 1).

    Examples:
        >>> settings = AnalyzerSettings(max_workers=4)
        >>> settings.high_risk_threshold
        0.7
    """

    max_upload_bytes: int = Field(default=MAX_UPLOAD_BYTES, gt=0)
    allowed_suffixes: list[str] = Field(default_factory=lambda: [".json"], min_length=1)
    merged_curve_baseline: float = Field(default=MERGED_CURVE_BASELINE, gt=0.0)
    low_risk_threshold: float = Field(default=LOW_RISK_THRESHOLD, gt=0.0, lt=1.0)
    high_risk_threshold: float = Field(default=HIGH_RISK_THRESHOLD, gt=0.0, le=1.0)
    max_workers: int = Field(default=1, ge=1, le=64)

    @field_validator("allowed_suffixes")
    @classmethod
    def normalize_suffixes(cls, value: list[str]) -> list[str]:
        """Lowercase suffixes and require a leading dot."""
        normalized = []
        for suffix in value:
            suffix = suffix.strip().lower()
            if not suffix.startswith(".") or len(suffix) < 2:
                raise ValueError(f"Suffix must look like '.ext', got {suffix!r}")
            normalized.append(suffix)
        return normalized

    @model_validator(mode="after")
    def validate_thresholds(self) -> "AnalyzerSettings":
        """Ensure the risk buckets are ordered."""
        if self.low_risk_threshold >= self.high_risk_threshold:
            raise ValueError(
                f"low_risk_threshold ({self.low_risk_threshold}) must be below "
                f"high_risk_threshold ({self.high_risk_threshold})"
            )
        return self

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "AnalyzerSettings":
        """Create AnalyzerSettings from a dictionary (e.g., parsed JSON)."""
        return cls.model_validate(config_dict)


def load_settings(path: str | Path) -> AnalyzerSettings:
    """
    Load settings from a JSON file.

    Args:
        path: Path to a JSON object with AnalyzerSettings fields.

    Returns:
        Validated AnalyzerSettings.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON.
        pydantic.ValidationError: If a field is out of range.
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a JSON object: {file_path}")

    return AnalyzerSettings.from_dict(data)


# Default configuration instance
DEFAULT_SETTINGS = AnalyzerSettings()
