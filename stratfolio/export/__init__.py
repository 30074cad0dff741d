"""Interchange writer: archives and tabular summaries.

Modules:
    naming: Sanitized output names and unique entry ids
    archive: ZIP archives in the ingestion record shape
    summary: Per-strategy summary table and CSV
"""

from stratfolio.export.archive import (
    ArchiveExporter,
    build_portfolio_archive,
    build_strategies_archive,
    export_portfolio,
    export_strategies,
    interchange_document,
    write_archive,
)
from stratfolio.export.naming import sanitize_file_name
from stratfolio.export.summary import (
    SUMMARY_COLUMNS,
    summary_csv,
    summary_frame,
    write_summary_csv,
)

__all__ = [
    "ArchiveExporter",
    "SUMMARY_COLUMNS",
    "build_portfolio_archive",
    "build_strategies_archive",
    "export_portfolio",
    "export_strategies",
    "interchange_document",
    "sanitize_file_name",
    "summary_csv",
    "summary_frame",
    "write_archive",
    "write_summary_csv",
]
