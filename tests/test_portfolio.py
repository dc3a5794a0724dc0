"""Tests for the Portfolio aggregate."""

import pytest
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from networth.models.asset import Asset
from networth.models.liability import Liability
from networth.models.portfolio import Portfolio, PortfolioState
from networth.models.snapshot import Snapshot
from networth.models.types import (
    AssetType,
    CryptoDetails,
    CryptoType,
    LiabilityType,
    LoanDetails,
)


@pytest.fixture
def portfolio() -> Portfolio:
    """Two assets and two liabilities: net worth 38,000."""
    p = Portfolio()
    p.add_asset(Asset(name="Checking Account", category=AssetType.CASH, value=10000))
    p.add_asset(Asset(name="TFSA Investment", category=AssetType.TFSA, value=50000))
    p.add_liability(Liability(name="Credit Card", category=LiabilityType.CREDIT_CARD, value=2000))
    p.add_liability(Liability(
        name="Car Loan",
        category=LiabilityType.CAR_LOAN,
        details=LoanDetails(principal=20000, interest_rate=5, monthly_payment=377, remaining_months=60),
    ))
    return p


def make_snapshot(taken_at: datetime, net_worth: float) -> Snapshot:
    return Snapshot(
        taken_at=taken_at,
        total_assets=net_worth,
        total_liabilities=0,
        net_worth=net_worth,
    )


class TestTotals:
    """Totals are pure folds over the current collections."""

    def test_scenario_totals(self, portfolio):
        assert portfolio.get_total_assets() == 60000
        assert portfolio.get_total_liabilities() == 22000
        assert portfolio.get_net_worth() == 38000

    def test_empty_portfolio(self):
        p = Portfolio()
        assert p.get_total_assets() == 0
        assert p.get_total_liabilities() == 0
        assert p.get_net_worth() == 0

    def test_totals_reflect_latest_update(self, portfolio):
        tfsa = next(a for a in portfolio.assets if a.category == AssetType.TFSA)
        assert portfolio.update_asset(tfsa.id, value=55000) is True
        assert portfolio.get_total_assets() == 65000
        assert portfolio.get_net_worth() == 43000


class TestAssetOperations:
    """Add / update / remove / get for assets."""

    def test_insertion_order_preserved(self, portfolio):
        assert [a.name for a in portfolio.assets] == ["Checking Account", "TFSA Investment"]

    def test_get_asset_by_id_or_string(self, portfolio):
        asset = portfolio.assets[0]
        assert portfolio.get_asset(asset.id) == asset
        assert portfolio.get_asset(str(asset.id)) == asset

    def test_get_unknown_asset(self, portfolio):
        assert portfolio.get_asset(uuid4()) is None

    def test_update_unknown_asset_is_a_no_op(self, portfolio):
        before = portfolio.assets
        assert portfolio.update_asset(uuid4(), value=1) is False
        assert portfolio.update_asset("invalid-id", value=1) is False
        assert portfolio.assets == before

    def test_remove_asset(self, portfolio):
        asset = portfolio.assets[0]
        assert portfolio.remove_asset(asset.id) is True
        assert len(portfolio.assets) == 1
        assert portfolio.remove_asset(asset.id) is False

    def test_repeated_updates_keep_crypto_value_in_sync(self):
        p = Portfolio()
        stored = p.add_asset(Asset(
            name="BTC",
            category=AssetType.CRYPTO_LONG_TERM,
            details=CryptoDetails(coin_type=CryptoType.BTC, quantity=1, price_per_coin=100),
        ))
        for quantity, price in [(2, 100), (2, 250), (0.5, 40000)]:
            p.update_asset(stored.id, details=CryptoDetails(
                coin_type=CryptoType.BTC, quantity=quantity, price_per_coin=price,
            ))
            assert p.get_asset(stored.id).value == quantity * price

    def test_returned_assets_are_copies(self, portfolio):
        leaked = portfolio.assets[0]
        leaked.update(value=1)
        assert portfolio.get_total_assets() == 60000

    def test_added_asset_is_copied_in(self):
        p = Portfolio()
        asset = Asset(name="Cash", category=AssetType.CASH, value=100)
        p.add_asset(asset)
        asset.update(value=999)
        assert p.get_total_assets() == 100


class TestLiabilityOperations:
    """Add / update / remove / get for liabilities."""

    def test_update_liability(self, portfolio):
        card = portfolio.liabilities[0]
        assert portfolio.update_liability(card.id, value=500) is True
        assert portfolio.get_liability(card.id).value == 500

    def test_unknown_liability(self, portfolio):
        assert portfolio.update_liability(uuid4(), value=1) is False
        assert portfolio.remove_liability(uuid4()) is False
        assert portfolio.get_liability(uuid4()) is None
        assert len(portfolio.liabilities) == 2

    def test_remove_liability(self, portfolio):
        card = portfolio.liabilities[0]
        assert portfolio.remove_liability(card.id) is True
        assert portfolio.get_total_liabilities() == 20000


class TestSnapshots:
    """Snapshot capture, ordering and immutability."""

    def test_create_snapshot_captures_totals(self, portfolio):
        snapshot = portfolio.create_snapshot()
        assert snapshot.total_assets == 60000
        assert snapshot.total_liabilities == 22000
        assert snapshot.net_worth == 38000
        assert len(snapshot.assets) == 2
        assert len(snapshot.liabilities) == 2
        assert len(portfolio.snapshots) == 1

    def test_snapshots_are_appended_never_merged(self, portfolio):
        first = portfolio.create_snapshot()
        second = portfolio.create_snapshot()
        assert first.id != second.id
        assert len(portfolio.snapshots) == 2

    def test_snapshot_unaffected_by_later_mutation(self, portfolio):
        snapshot = portfolio.create_snapshot()
        cash = portfolio.assets[0]
        portfolio.update_asset(cash.id, value=1, name="Renamed")
        portfolio.remove_liability(portfolio.liabilities[0].id)
        portfolio.add_asset(Asset(name="New", category=AssetType.GOLD, value=5))

        stored = portfolio.snapshots[0]
        assert stored == snapshot
        assert stored.total_assets == 60000
        assert stored.assets[0].name == "Checking Account"
        assert stored.assets[0].value == 10000
        assert len(stored.liabilities) == 2

    def test_returned_snapshot_cannot_reach_stored_copy(self, portfolio):
        snapshot = portfolio.create_snapshot()
        snapshot.assets[0].update(value=1)
        assert portfolio.snapshots[0].assets[0].value == 10000

    def test_sorted_newest_first(self):
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        p = Portfolio(PortfolioState(
            assets=[],
            liabilities=[],
            snapshots=[
                make_snapshot(now - timedelta(days=30), 1),
                make_snapshot(now, 3),
                make_snapshot(now - timedelta(days=10), 2),
            ],
        ))
        assert [s.net_worth for s in p.get_snapshots_sorted()] == [3, 2, 1]
        # Storage order untouched
        assert [s.net_worth for s in p.snapshots] == [1, 3, 2]

    def test_equal_timestamps_keep_insertion_order(self):
        now = datetime(2024, 6, 1, tzinfo=timezone.utc)
        p = Portfolio(PortfolioState(
            assets=[],
            liabilities=[],
            snapshots=[
                make_snapshot(now, 1),
                make_snapshot(now + timedelta(days=1), 0),
                make_snapshot(now, 2),
                make_snapshot(now, 3),
            ],
        ))
        assert [s.net_worth for s in p.get_snapshots_sorted()] == [0, 1, 2, 3]

    def test_imported_naive_timestamp_sorts_with_new_snapshots(self):
        state = PortfolioState.model_validate_json(
            '{"assets": [], "liabilities": [], "snapshots": [{"taken_at": "2024-01-15T10:00:00", '
            '"total_assets": 5, "total_liabilities": 0, "net_worth": 5}]}'
        )
        p = Portfolio.from_state(state)
        fresh = p.create_snapshot()

        ordered = p.get_snapshots_sorted()
        assert [s.id for s in ordered] == [fresh.id, state.snapshots[0].id]
        assert ordered[1].taken_at == datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)

    def test_remove_snapshot(self, portfolio):
        snapshot = portfolio.create_snapshot()
        assert portfolio.remove_snapshot(snapshot.id) is True
        assert portfolio.remove_snapshot(snapshot.id) is False
        assert portfolio.snapshots == []


class TestWholePortfolio:
    """clear() and state conversion."""

    def test_clear_empties_everything(self, portfolio):
        portfolio.create_snapshot()
        portfolio.clear()
        assert portfolio.assets == []
        assert portfolio.liabilities == []
        assert portfolio.snapshots == []
        assert portfolio.get_net_worth() == 0

    def test_state_round_trip(self, portfolio):
        portfolio.create_snapshot()
        restored = Portfolio.from_state(portfolio.to_state())
        assert restored.assets == portfolio.assets
        assert restored.liabilities == portfolio.liabilities
        assert restored.snapshots == portfolio.snapshots


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
