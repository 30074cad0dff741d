"""In-memory library of uploaded strategies, selection and saved portfolios.

This module holds the process-lifetime collections a caller builds up
between uploads: the flat strategy collection, the current selection and
the saved portfolio snapshots. Strategies are never modified in place;
removing an upload cascades to the selection.

The statistics engine and exporter do not depend on this module; they
accept whatever strategies the library hands out.
"""
import logging
from typing import Optional

from stratfolio.data_io.ingestion import UploadedFile
from stratfolio.models.exceptions import LibraryError
from stratfolio.models.strategy import Portfolio, Strategy
from stratfolio.portfolio.filters import FilterOptions, filter_strategies

logger = logging.getLogger(__name__)


class StrategyLibrary:
    """Holds uploaded strategies, the current selection and portfolios.

    Attributes:
        uploads: Uploaded files in upload order
        portfolios: Saved portfolio snapshots in creation order
        selected_ids: Ids of selected strategies in selection order
    """

    def __init__(self):
        """Initialize an empty library."""
        self.uploads: list[UploadedFile] = []
        self.portfolios: list[Portfolio] = []
        self.selected_ids: list[str] = []

    @property
    def strategies(self) -> list[Strategy]:
        """All strategies across uploads, in upload order."""
        return [s for upload in self.uploads for s in upload.strategies]

    def get_strategy(self, strategy_id: str) -> Strategy:
        """Look up a strategy by id.

        Raises:
            LibraryError: If no strategy has that id
        """
        for strategy in self.strategies:
            if strategy.id == strategy_id:
                return strategy
        raise LibraryError(f"Unknown strategy id: {strategy_id}")

    def add_upload(self, upload: UploadedFile) -> None:
        """Add an uploaded file's strategies to the collection.

        Args:
            upload: Normalized upload
        """
        self.uploads.append(upload)
        logger.info(
            "Added upload %s with %d strategies", upload.name, len(upload.strategies)
        )

    def remove_upload(self, name: str) -> int:
        """Remove every upload with the given file name.

        The removed strategies also leave the current selection. Saved
        portfolios keep their own copies and are unaffected.

        Args:
            name: File name of the upload

        Returns:
            Number of strategies removed
        """
        matching = [upload for upload in self.uploads if upload.name == name]
        if not matching:
            logger.warning("No upload named %s to remove", name)
            return 0

        removed_ids = {s.id for upload in matching for s in upload.strategies}

        self.uploads = [upload for upload in self.uploads if upload.name != name]
        self.selected_ids = [sid for sid in self.selected_ids if sid not in removed_ids]

        logger.info("Removed upload %s (%d strategies)", name, len(removed_ids))
        return len(removed_ids)

    def select(self, *strategy_ids: str) -> None:
        """Add strategies to the selection, ignoring ones already selected.

        Raises:
            LibraryError: If an id is unknown
        """
        known = {s.id for s in self.strategies}
        for strategy_id in strategy_ids:
            if strategy_id not in known:
                raise LibraryError(f"Unknown strategy id: {strategy_id}")
            if strategy_id not in self.selected_ids:
                self.selected_ids.append(strategy_id)

    def select_all(self, options: Optional[FilterOptions] = None) -> None:
        """Select every strategy, or every strategy passing a filter."""
        self.select(*(s.id for s in self.filtered(options or FilterOptions())))

    def deselect(self, strategy_id: str) -> None:
        """Remove a strategy from the selection if present."""
        self.selected_ids = [sid for sid in self.selected_ids if sid != strategy_id]

    def clear_selection(self) -> None:
        """Empty the selection."""
        self.selected_ids = []

    def selected_strategies(self) -> list[Strategy]:
        """Selected strategies in collection order."""
        selected = set(self.selected_ids)
        return [s for s in self.strategies if s.id in selected]

    def filtered(self, options: FilterOptions) -> list[Strategy]:
        """Strategies matching the filter, in collection order."""
        return filter_strategies(self.strategies, options)

    def symbols(self) -> list[str]:
        """Distinct symbols, sorted."""
        return sorted({s.data_id.symbol for s in self.strategies})

    def periods(self) -> list[str]:
        """Distinct timeframes, sorted."""
        return sorted({s.data_id.period for s in self.strategies})

    def create_portfolio(self, name: str) -> Portfolio:
        """Snapshot the current selection into a new saved portfolio.

        Args:
            name: Portfolio display name

        Returns:
            The new Portfolio

        Raises:
            LibraryError: If the name is blank or nothing is selected
        """
        if not name or not name.strip():
            raise LibraryError("Portfolio name is required")

        selected = self.selected_strategies()
        if not selected:
            raise LibraryError("Select at least one strategy to create a portfolio")

        portfolio = Portfolio.from_selection(name, selected)
        self.portfolios.append(portfolio)

        logger.info(
            "Created portfolio %s (%s) with %d strategies",
            portfolio.name,
            portfolio.id,
            len(portfolio.members),
        )
        return portfolio

    def get_portfolio(self, portfolio_id: str) -> Portfolio:
        """Look up a saved portfolio by id.

        Raises:
            LibraryError: If no portfolio has that id
        """
        for portfolio in self.portfolios:
            if portfolio.id == portfolio_id:
                return portfolio
        raise LibraryError(f"Unknown portfolio id: {portfolio_id}")

    def delete_portfolio(self, portfolio_id: str) -> None:
        """Delete a saved portfolio.

        Raises:
            LibraryError: If no portfolio has that id
        """
        portfolio = self.get_portfolio(portfolio_id)
        self.portfolios = [p for p in self.portfolios if p.id != portfolio_id]
        logger.info("Deleted portfolio %s (%s)", portfolio.name, portfolio_id)
