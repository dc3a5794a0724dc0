"""
Main Orchestrator for Net Worth Tracker

This module ties the Portfolio aggregate, the calculator, the projection
engine and storage together behind one application service.

DESIGN DECISION: The orchestrator enforces the boundaries:
- Every successful mutation is written through to storage immediately
- A mutation that targets an unknown id reports False and writes nothing
- Storage failures propagate to the caller; they are never swallowed
- A rejected import leaves the in-memory portfolio untouched
- Every step is audited

Callers must serialize access: one logical writer at a time.
"""

from typing import Any, Optional
from uuid import UUID

from networth.audit import AuditLogger
from networth.config import StorageBackend, TrackerSettings, get_settings
from networth.models.asset import Asset
from networth.models.liability import Liability
from networth.models.portfolio import EntityId, Portfolio
from networth.models.snapshot import Snapshot
from networth.models.types import AssetType, LiabilityType
from networth.services import calculator, projection
from networth.services.calculator import PortfolioSummary
from networth.services.projection import ProjectionPoint
from networth.services.storage import (
    InMemoryPortfolioRepository,
    JsonFilePortfolioRepository,
    MalformedImportError,
    NoDataError,
    PortfolioRepository,
    StorageError,
)


class NetWorthService:
    """
    Application service for the net worth tracker.

    Flow for every mutation:
    1. Apply the change to the in-memory Portfolio
    2. Save the whole portfolio (write-through, no batching)
    3. Audit what happened
    """

    def __init__(
        self,
        repository: PortfolioRepository,
        audit_logger: Optional[AuditLogger] = None,
        settings: Optional[TrackerSettings] = None,
    ):
        self._portfolio = Portfolio()
        self._repository = repository
        self._audit_logger = audit_logger
        self._settings = settings or get_settings()

    @property
    def portfolio(self) -> Portfolio:
        """The current portfolio. Mutate it through this service only."""
        return self._portfolio

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    async def initialize(self) -> bool:
        """
        Load the stored portfolio.

        Returns:
            True if data was found, False on first run (not an error)

        Raises:
            PersistenceError: If stored data cannot be read
        """
        try:
            state = await self._repository.load()
        except StorageError as e:
            await self._audit_storage_failure("load", e)
            raise

        if state is None:
            return False

        self._portfolio = Portfolio.from_state(state)
        if self._audit_logger:
            await self._audit_logger.log_portfolio_loaded(
                asset_count=len(state.assets),
                liability_count=len(state.liabilities),
                snapshot_count=len(state.snapshots),
            )
        return True

    async def save(self, correlation_id: Optional[UUID] = None) -> None:
        """Persist the current portfolio."""
        try:
            await self._repository.save(self._portfolio.to_state())
        except StorageError as e:
            await self._audit_storage_failure("save", e, correlation_id)
            raise

    # -------------------------------------------------------------------------
    # Assets
    # -------------------------------------------------------------------------

    async def add_asset(
        self,
        name: str,
        category: AssetType,
        value: float = 0.0,
        details: Any = None,
        correlation_id: Optional[UUID] = None,
    ) -> Asset:
        """
        Create and store a new asset.

        `details` may be a CryptoDetails/MetalDetails record or the
        equivalent dict; when present it determines the value.
        """
        asset = self._portfolio.add_asset(
            Asset(name=name, category=category, value=value, details=details)
        )
        await self.save(correlation_id)

        if self._audit_logger:
            await self._audit_logger.log_entity_added(
                entity_type="asset",
                entity_id=asset.id,
                name=asset.name,
                value=asset.value,
                correlation_id=correlation_id,
            )
        return asset

    async def update_asset(
        self,
        asset_id: EntityId,
        correlation_id: Optional[UUID] = None,
        **changes: Any,
    ) -> bool:
        """Partially update an asset. False if no asset has this id."""
        if not self._portfolio.update_asset(asset_id, **changes):
            await self._audit_not_found("asset", asset_id, "update", correlation_id)
            return False

        await self.save(correlation_id)
        if self._audit_logger:
            await self._audit_logger.log_entity_updated(
                entity_type="asset",
                entity_id=UUID(str(asset_id)),
                fields=list(changes),
                correlation_id=correlation_id,
            )
        return True

    async def delete_asset(
        self,
        asset_id: EntityId,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Delete an asset. False if no asset has this id."""
        if not self._portfolio.remove_asset(asset_id):
            await self._audit_not_found("asset", asset_id, "delete", correlation_id)
            return False

        await self.save(correlation_id)
        if self._audit_logger:
            await self._audit_logger.log_entity_deleted(
                entity_type="asset",
                entity_id=UUID(str(asset_id)),
                correlation_id=correlation_id,
            )
        return True

    # -------------------------------------------------------------------------
    # Liabilities
    # -------------------------------------------------------------------------

    async def add_liability(
        self,
        name: str,
        category: LiabilityType,
        value: float = 0.0,
        details: Any = None,
        correlation_id: Optional[UUID] = None,
    ) -> Liability:
        """
        Create and store a new liability.

        `details` may be a LoanDetails/RecurringDetails record or the
        equivalent dict. A recurring dict without `annual_amount` gets
        one derived as monthly_amount * 12.
        """
        liability = self._portfolio.add_liability(
            Liability(name=name, category=category, value=value, details=details)
        )
        await self.save(correlation_id)

        if self._audit_logger:
            await self._audit_logger.log_entity_added(
                entity_type="liability",
                entity_id=liability.id,
                name=liability.name,
                value=liability.value,
                correlation_id=correlation_id,
            )
        return liability

    async def update_liability(
        self,
        liability_id: EntityId,
        correlation_id: Optional[UUID] = None,
        **changes: Any,
    ) -> bool:
        """Partially update a liability. False if no liability has this id."""
        if not self._portfolio.update_liability(liability_id, **changes):
            await self._audit_not_found("liability", liability_id, "update", correlation_id)
            return False

        await self.save(correlation_id)
        if self._audit_logger:
            await self._audit_logger.log_entity_updated(
                entity_type="liability",
                entity_id=UUID(str(liability_id)),
                fields=list(changes),
                correlation_id=correlation_id,
            )
        return True

    async def delete_liability(
        self,
        liability_id: EntityId,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Delete a liability. False if no liability has this id."""
        if not self._portfolio.remove_liability(liability_id):
            await self._audit_not_found("liability", liability_id, "delete", correlation_id)
            return False

        await self.save(correlation_id)
        if self._audit_logger:
            await self._audit_logger.log_entity_deleted(
                entity_type="liability",
                entity_id=UUID(str(liability_id)),
                correlation_id=correlation_id,
            )
        return True

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    async def create_snapshot(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> Snapshot:
        """Capture the current portfolio and store it."""
        snapshot = self._portfolio.create_snapshot()
        await self.save(correlation_id)

        if self._audit_logger:
            await self._audit_logger.log_snapshot_created(
                snapshot_id=snapshot.id,
                net_worth=snapshot.net_worth,
                correlation_id=correlation_id,
            )
        return snapshot

    async def delete_snapshot(
        self,
        snapshot_id: EntityId,
        correlation_id: Optional[UUID] = None,
    ) -> bool:
        """Delete a snapshot. False if no snapshot has this id."""
        if not self._portfolio.remove_snapshot(snapshot_id):
            await self._audit_not_found("snapshot", snapshot_id, "delete", correlation_id)
            return False

        await self.save(correlation_id)
        if self._audit_logger:
            await self._audit_logger.log_entity_deleted(
                entity_type="snapshot",
                entity_id=UUID(str(snapshot_id)),
                correlation_id=correlation_id,
            )
        return True

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    def get_summary(self) -> PortfolioSummary:
        """All summary metrics for the current portfolio."""
        return calculator.summarize(
            self._portfolio.assets,
            self._portfolio.liabilities,
        )

    def get_projections(self, months: Optional[int] = None) -> list[ProjectionPoint]:
        """
        Projected net worth for month 0..months.

        Defaults to the configured projection horizon.
        """
        if months is None:
            months = self._settings.default_projection_months
        return projection.project_net_worth(
            self._portfolio.get_total_assets(),
            self._portfolio.liabilities,
            months,
        )

    def get_projection_milestones(self) -> dict[int, float]:
        """Projected net worth at each configured projection period."""
        periods = self._settings.projection_periods_list
        series = self.get_projections(max(periods))
        return {period: series[period].net_worth for period in periods}

    def get_break_even_point(self, monthly_asset_growth: float = 0.0) -> Optional[int]:
        """Months until net worth turns non-negative, if it is negative now."""
        return projection.break_even_point(
            self._portfolio.get_net_worth(),
            self._portfolio.liabilities,
            monthly_asset_growth,
            max_months=self._settings.break_even_max_months,
        )

    def get_recurring_expenses(self, months: int) -> float:
        return projection.recurring_expenses_over(self._portfolio.liabilities, months)

    def get_loan_payments(self, months: int) -> float:
        return projection.loan_payments_over(self._portfolio.liabilities, months)

    def get_loan_payoff_timeline(self) -> dict[str, int]:
        return projection.loan_payoff_timeline(self._portfolio.liabilities)

    # -------------------------------------------------------------------------
    # Export / import / reset
    # -------------------------------------------------------------------------

    async def export_data(self) -> str:
        """
        Export the persisted portfolio as JSON.

        Raises:
            NoDataError: If nothing has been saved yet
        """
        try:
            text = await self._repository.export()
        except NoDataError:
            raise
        except StorageError as e:
            await self._audit_storage_failure("export", e)
            raise

        if self._audit_logger:
            await self._audit_logger.log_exported(len(text.encode("utf-8")))
        return text

    async def import_data(
        self,
        text: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """
        Replace the portfolio with an exported document.

        Raises:
            MalformedImportError: If the text is not a valid portfolio.
                The current portfolio is left untouched.
            PersistenceError: If the imported data cannot be stored
        """
        try:
            state = await self._repository.import_data(text)
        except MalformedImportError as e:
            if self._audit_logger:
                await self._audit_logger.log_import_rejected(str(e), correlation_id)
            raise
        except StorageError as e:
            await self._audit_storage_failure("import", e, correlation_id)
            raise

        self._portfolio = Portfolio.from_state(state)
        if self._audit_logger:
            await self._audit_logger.log_imported(
                asset_count=len(state.assets),
                liability_count=len(state.liabilities),
                snapshot_count=len(state.snapshots),
                correlation_id=correlation_id,
            )

    async def clear_all(self, correlation_id: Optional[UUID] = None) -> None:
        """Remove all data, in storage and in memory."""
        try:
            await self._repository.clear()
        except StorageError as e:
            await self._audit_storage_failure("clear", e, correlation_id)
            raise

        self._portfolio.clear()
        if self._audit_logger:
            await self._audit_logger.log_cleared(correlation_id)

    # -------------------------------------------------------------------------
    # Audit helpers
    # -------------------------------------------------------------------------

    async def _audit_not_found(
        self,
        entity_type: str,
        entity_id: EntityId,
        operation: str,
        correlation_id: Optional[UUID],
    ) -> None:
        if self._audit_logger:
            await self._audit_logger.log_not_found(
                entity_type=entity_type,
                entity_id=str(entity_id),
                operation=operation,
                correlation_id=correlation_id,
            )

    async def _audit_storage_failure(
        self,
        operation: str,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        if self._audit_logger:
            await self._audit_logger.log_storage_failed(
                operation=operation,
                error_message=str(error),
                correlation_id=correlation_id,
            )


def create_service(
    settings: Optional[TrackerSettings] = None,
) -> NetWorthService:
    """
    Factory function to create the application service.

    Args:
        settings: Settings to use. Defaults to the cached environment settings.

    Returns:
        A NetWorthService backed by the configured storage. Call
        initialize() on it before use.
    """
    settings = settings or get_settings()

    if settings.storage_backend == StorageBackend.MEMORY:
        repository: PortfolioRepository = InMemoryPortfolioRepository(settings.storage_key)
    else:
        repository = JsonFilePortfolioRepository(settings=settings)

    return NetWorthService(
        repository=repository,
        audit_logger=AuditLogger(),
        settings=settings,
    )
