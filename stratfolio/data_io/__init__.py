"""Normalization of third-party backtest exports.

Modules:
    schema: Metric alias table and numeric coercion
    ingestion: Eligibility check and single-upload normalization
    batch: Multi-file ingestion with per-file error collection
"""

from stratfolio.data_io.batch import BatchResult, FileError, normalize_batch
from stratfolio.data_io.ingestion import (
    UploadedFile,
    UploadFile,
    check_upload_eligible,
    normalize,
    normalize_record,
    parse_upload,
)
from stratfolio.data_io.schema import METRIC_ALIASES

__all__ = [
    "BatchResult",
    "FileError",
    "METRIC_ALIASES",
    "UploadFile",
    "UploadedFile",
    "check_upload_eligible",
    "normalize",
    "normalize_batch",
    "normalize_record",
    "parse_upload",
]
