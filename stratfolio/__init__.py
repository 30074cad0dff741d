"""Stratfolio: backtest-export ingestion and portfolio analytics.

Subpackages:
    models: Canonical records, reports and the error family
    config: Validated runtime settings
    data_io: Normalization of vendor backtest exports
    analytics: Correlation, merged equity and portfolio statistics
    portfolio: In-memory strategy library, selection and filtering
    export: Interchange archives and tabular summaries
    cli: Command-line entry points
"""

__version__ = "0.1.0"
