"""Strategy library, selection and filtering.

Modules:
    filters: Filter criteria over reported metrics
    library: In-memory uploads, selection and saved portfolios
"""

from stratfolio.portfolio.filters import FilterOptions, filter_strategies
from stratfolio.portfolio.library import StrategyLibrary

__all__ = ["FilterOptions", "StrategyLibrary", "filter_strategies"]
