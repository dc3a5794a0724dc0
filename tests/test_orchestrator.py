"""
Tests for the NetWorthService orchestrator

These run the full flow (portfolio, calculator, projection, storage and
audit) against the in-memory repository.
"""

import json
from typing import Optional
from uuid import uuid4

import pytest

from networth.audit import AuditLogger, create_correlation_id
from networth.config import StorageBackend, TrackerSettings
from networth.models.audit import AuditEventType, AuditSeverity
from networth.models.portfolio import PortfolioState
from networth.models.types import (
    AssetType,
    CryptoDetails,
    CryptoType,
    LiabilityType,
    LoanDetails,
)
from networth.orchestrator import NetWorthService, create_service
from networth.services.storage import (
    InMemoryPortfolioRepository,
    JsonFilePortfolioRepository,
    MalformedImportError,
    NoDataError,
    PersistenceError,
)


class FailingRepository(InMemoryPortfolioRepository):
    """Repository whose writes always fail."""

    async def save(self, state: PortfolioState) -> bool:
        raise PersistenceError("disk full")

    async def load(self) -> Optional[PortfolioState]:
        raise PersistenceError("unreadable")


@pytest.fixture
def settings() -> TrackerSettings:
    return TrackerSettings(storage_backend=StorageBackend.MEMORY)


@pytest.fixture
def store() -> dict[str, str]:
    return {}


@pytest.fixture
def audit_logger() -> AuditLogger:
    return AuditLogger()


@pytest.fixture
def service(store, audit_logger, settings) -> NetWorthService:
    return NetWorthService(
        repository=InMemoryPortfolioRepository(store=store),
        audit_logger=audit_logger,
        settings=settings,
    )


async def populate(service: NetWorthService) -> None:
    """Cash 10k, TFSA 50k, credit card 2k, car loan 20k: net worth 38k."""
    await service.add_asset("Checking Account", AssetType.CASH, 10000)
    await service.add_asset("TFSA Investment", AssetType.TFSA, 50000)
    await service.add_liability("Credit Card", LiabilityType.CREDIT_CARD, 2000)
    await service.add_liability(
        "Car Loan",
        LiabilityType.CAR_LOAN,
        details=LoanDetails(principal=20000, interest_rate=5, monthly_payment=377, remaining_months=60),
    )


def event_types(audit_logger: AuditLogger) -> list[AuditEventType]:
    return [e.event_type for e in reversed(audit_logger.recent_events())]


class TestLifecycle:
    """Initialize, mutate, reload."""

    async def test_first_run(self, service, audit_logger):
        assert await service.initialize() is False
        assert service.portfolio.get_net_worth() == 0
        assert audit_logger.recent_events() == []

    async def test_mutations_are_written_through(self, service, store, settings):
        await populate(service)

        reloaded = NetWorthService(
            repository=InMemoryPortfolioRepository(store=store),
            settings=settings,
        )
        assert await reloaded.initialize() is True
        assert reloaded.portfolio.get_net_worth() == 38000
        assert [a.name for a in reloaded.portfolio.assets] == ["Checking Account", "TFSA Investment"]

    async def test_scenario_summary(self, service):
        await populate(service)
        summary = service.get_summary()
        assert summary.total_assets == 60000
        assert summary.total_liabilities == 22000
        assert summary.net_worth == 38000
        assert summary.total_loan_interest == pytest.approx(2620)

    async def test_update_asset(self, service, store):
        await populate(service)
        tfsa = service.portfolio.assets[1]
        assert await service.update_asset(tfsa.id, value=55000) is True
        assert service.portfolio.get_net_worth() == 43000
        saved = PortfolioState.model_validate_json(store["networth_portfolio"])
        assert saved.assets[1].value == 55000

    async def test_update_crypto_details_recomputes(self, service):
        asset = await service.add_asset(
            "Bitcoin",
            AssetType.CRYPTO_LONG_TERM,
            details={"kind": "crypto", "coin_type": "Bitcoin", "quantity": 1, "price_per_coin": 50000},
        )
        assert asset.value == 50000
        await service.update_asset(
            str(asset.id),
            details=CryptoDetails(coin_type=CryptoType.BTC, quantity=1.5, price_per_coin=60000),
        )
        assert service.portfolio.get_asset(asset.id).value == 90000

    async def test_delete_and_snapshot(self, service):
        await populate(service)
        card = service.portfolio.liabilities[0]
        assert await service.delete_liability(card.id) is True
        snapshot = await service.create_snapshot()
        assert snapshot.net_worth == 40000
        assert await service.delete_snapshot(snapshot.id) is True
        assert service.portfolio.snapshots == []

    async def test_invalid_input_is_rejected_before_storage(self, service, store):
        with pytest.raises(ValueError):
            await service.add_asset("", AssetType.CASH, 1)
        assert store == {}


class TestUnknownIds:
    """Unknown ids report False, write nothing and are audited."""

    @pytest.mark.parametrize("operation", [
        "update_asset", "delete_asset", "update_liability", "delete_liability", "delete_snapshot",
    ])
    async def test_unknown_id(self, service, store, audit_logger, operation):
        await populate(service)
        before = dict(store)
        method = getattr(service, operation)
        kwargs = {"value": 1} if operation.startswith("update") else {}

        assert await method(uuid4(), **kwargs) is False
        assert await method("not-a-uuid", **kwargs) is False
        assert store == before

        latest = audit_logger.recent_events(1)[0]
        assert latest.event_type == AuditEventType.ENTITY_NOT_FOUND
        assert latest.severity == AuditSeverity.WARNING
        assert latest.details["requested_id"] == "not-a-uuid"


class TestAudit:
    """Audit trail produced by the service."""

    async def test_events_for_mutations(self, service, audit_logger):
        correlation_id = create_correlation_id()
        asset = await service.add_asset("Cash", AssetType.CASH, 100, correlation_id=correlation_id)
        await service.update_asset(asset.id, correlation_id=correlation_id, value=200, name="Wallet")
        await service.create_snapshot(correlation_id=correlation_id)
        await service.delete_asset(asset.id, correlation_id=correlation_id)

        assert event_types(audit_logger) == [
            AuditEventType.ASSET_ADDED,
            AuditEventType.ASSET_UPDATED,
            AuditEventType.SNAPSHOT_CREATED,
            AuditEventType.ASSET_DELETED,
        ]
        events = audit_logger.recent_events()
        assert all(e.correlation_id == correlation_id for e in events)
        updated = next(e for e in events if e.event_type == AuditEventType.ASSET_UPDATED)
        assert updated.details["fields"] == ["name", "value"]
        assert updated.entity_id == asset.id

    async def test_trail_is_bounded(self, store, settings):
        audit_logger = AuditLogger(max_events=3)
        service = NetWorthService(InMemoryPortfolioRepository(store=store), audit_logger, settings)
        for i in range(5):
            await service.add_asset(f"Asset {i}", AssetType.CASH, i)
        events = audit_logger.recent_events()
        assert len(events) == 3
        assert events[0].details["name"] == "Asset 4"

    async def test_save_failure_is_audited_and_raised(self, audit_logger, settings):
        service = NetWorthService(FailingRepository(), audit_logger, settings)
        with pytest.raises(PersistenceError, match="disk full"):
            await service.add_asset("Cash", AssetType.CASH, 1)
        latest = audit_logger.recent_events(1)[0]
        assert latest.event_type == AuditEventType.STORAGE_FAILED
        assert latest.severity == AuditSeverity.ERROR
        assert latest.details["operation"] == "save"

    async def test_load_failure_is_audited_and_raised(self, audit_logger, settings):
        service = NetWorthService(FailingRepository(), audit_logger, settings)
        with pytest.raises(PersistenceError):
            await service.initialize()
        assert event_types(audit_logger) == [AuditEventType.STORAGE_FAILED]

    async def test_service_works_without_audit_logger(self, settings):
        service = NetWorthService(InMemoryPortfolioRepository(), settings=settings)
        await service.add_asset("Cash", AssetType.CASH, 1)
        assert await service.delete_asset(uuid4()) is False


class TestExportImport:
    """Export, import and reset."""

    async def test_export_before_any_save(self, service, audit_logger):
        with pytest.raises(NoDataError):
            await service.export_data()
        assert audit_logger.recent_events() == []

    async def test_export_then_import_into_fresh_service(self, service, audit_logger, settings):
        await populate(service)
        await service.create_snapshot()
        exported = await service.export_data()
        assert audit_logger.recent_events(1)[0].event_type == AuditEventType.PORTFOLIO_EXPORTED

        fresh_logger = AuditLogger()
        fresh = NetWorthService(InMemoryPortfolioRepository(), fresh_logger, settings)
        await fresh.import_data(exported)

        assert fresh.portfolio.assets == service.portfolio.assets
        assert fresh.portfolio.liabilities == service.portfolio.liabilities
        assert fresh.portfolio.snapshots == service.portfolio.snapshots
        assert fresh_logger.recent_events(1)[0].details == {"assets": 2, "liabilities": 2, "snapshots": 1}

    async def test_rejected_import_keeps_portfolio(self, service, store, audit_logger):
        await populate(service)
        before = dict(store)

        with pytest.raises(MalformedImportError):
            await service.import_data(json.dumps({"assets": [{"name": "x"}]}))

        assert service.portfolio.get_net_worth() == 38000
        assert store == before
        latest = audit_logger.recent_events(1)[0]
        assert latest.event_type == AuditEventType.IMPORT_REJECTED
        assert "Failed to import data" in latest.error_message

    async def test_clear_all(self, service, store, audit_logger):
        await populate(service)
        await service.create_snapshot()
        await service.clear_all()

        assert service.portfolio.assets == []
        assert service.portfolio.liabilities == []
        assert service.portfolio.snapshots == []
        assert store == {}
        assert await service.initialize() is False
        assert audit_logger.recent_events(1)[0].event_type == AuditEventType.PORTFOLIO_CLEARED


class TestProjections:
    """Projection views through the service."""

    async def test_default_horizon(self, service):
        await populate(service)
        points = service.get_projections()
        assert len(points) == 13
        assert points[0].net_worth == 38000

    async def test_milestones(self, service):
        await populate(service)
        milestones = service.get_projection_milestones()
        assert list(milestones) == [3, 6, 12, 24, 36, 60]
        # The car loan amortizes, so net worth climbs
        assert milestones[60] > milestones[12] > milestones[3] > 38000

    async def test_break_even(self, service):
        await service.add_asset("Cash", AssetType.CASH, 4000)
        await service.add_liability("Credit Card", LiabilityType.CREDIT_CARD, 5000)
        assert service.get_break_even_point(100) == 40
        assert service.get_break_even_point(0) is None

    async def test_break_even_respects_configured_cap(self, store):
        settings = TrackerSettings(storage_backend=StorageBackend.MEMORY, break_even_max_months=12)
        service = NetWorthService(InMemoryPortfolioRepository(store=store), settings=settings)
        await service.add_liability("Credit Card", LiabilityType.CREDIT_CARD, 5000)
        await service.add_asset("Cash", AssetType.CASH, 4000)
        assert service.get_break_even_point(100) is None

    async def test_period_totals(self, service):
        await populate(service)
        await service.add_liability(
            "Car Insurance",
            LiabilityType.CAR_INSURANCE,
            details={"kind": "recurring", "monthly_amount": 150},
        )
        assert service.get_recurring_expenses(12) == 1800
        assert service.get_loan_payments(12) == 377 * 12
        assert service.get_loan_payoff_timeline() == {"Car Loan": 60}


class TestCreateService:
    """Factory wiring."""

    def test_memory_backend(self, settings):
        service = create_service(settings)
        assert isinstance(service, NetWorthService)
        assert isinstance(service._repository, InMemoryPortfolioRepository)
        assert isinstance(service._audit_logger, AuditLogger)

    async def test_file_backend(self, tmp_path):
        settings = TrackerSettings(storage_backend=StorageBackend.FILE, data_dir=tmp_path)
        service = create_service(settings)
        assert isinstance(service._repository, JsonFilePortfolioRepository)

        await service.add_asset("Cash", AssetType.CASH, 10)
        assert (tmp_path / "networth_portfolio.json").is_file()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
