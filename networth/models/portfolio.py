"""
Portfolio Aggregate

The Portfolio is the single owner of assets, liabilities and snapshots.

DESIGN DECISION: Nothing outside the portfolio ever holds a live entity.
Entities are copied on the way in and on the way out, so the only way to
change one is through update_* / remove_*, which keep derived values in
sync. Lookups by an unknown id report failure (False / None); they never
raise.
"""

from typing import Any, Optional, Union
from uuid import UUID

from pydantic import BaseModel, Field

from networth.models.asset import Asset
from networth.models.liability import Liability
from networth.models.snapshot import Snapshot
from networth.models.types import utc_now


EntityId = Union[UUID, str]


class PortfolioState(BaseModel):
    """
    Serialized form of a portfolio.

    This is the tree that is persisted, exported and imported:
    portfolio -> entities -> typed detail records.
    """

    assets: list[Asset] = Field(
        ...,
        description="Assets in insertion order"
    )
    liabilities: list[Liability] = Field(
        ...,
        description="Liabilities in insertion order"
    )
    snapshots: list[Snapshot] = Field(
        ...,
        description="Snapshots in creation order"
    )


def _matches(entity_id: UUID, wanted: EntityId) -> bool:
    return str(entity_id) == str(wanted)


class Portfolio:
    """
    Aggregate root holding ordered collections of assets, liabilities
    and snapshots.

    Totals are folds over the current collections with no caching, so
    they always reflect the latest mutation.
    """

    def __init__(self, state: Optional[PortfolioState] = None):
        self._assets: list[Asset] = []
        self._liabilities: list[Liability] = []
        self._snapshots: list[Snapshot] = []

        if state is not None:
            self._assets = [a.model_copy(deep=True) for a in state.assets]
            self._liabilities = [l.model_copy(deep=True) for l in state.liabilities]
            self._snapshots = [s.model_copy(deep=True) for s in state.snapshots]

    # -------------------------------------------------------------------------
    # Read access (copies)
    # -------------------------------------------------------------------------

    @property
    def assets(self) -> list[Asset]:
        return [a.model_copy(deep=True) for a in self._assets]

    @property
    def liabilities(self) -> list[Liability]:
        return [l.model_copy(deep=True) for l in self._liabilities]

    @property
    def snapshots(self) -> list[Snapshot]:
        return [s.model_copy(deep=True) for s in self._snapshots]

    # -------------------------------------------------------------------------
    # Assets
    # -------------------------------------------------------------------------

    def add_asset(self, asset: Asset) -> Asset:
        """Append an asset. Returns a copy of what was stored."""
        stored = asset.model_copy(deep=True)
        self._assets.append(stored)
        return stored.model_copy(deep=True)

    def update_asset(self, asset_id: EntityId, **changes: Any) -> bool:
        """Partially update an asset. False if the id is unknown."""
        asset = self._find(self._assets, asset_id)
        if asset is None:
            return False
        asset.update(**changes)
        return True

    def remove_asset(self, asset_id: EntityId) -> bool:
        """Remove an asset. False if the id is unknown."""
        return self._remove(self._assets, asset_id)

    def get_asset(self, asset_id: EntityId) -> Optional[Asset]:
        asset = self._find(self._assets, asset_id)
        return asset.model_copy(deep=True) if asset else None

    # -------------------------------------------------------------------------
    # Liabilities
    # -------------------------------------------------------------------------

    def add_liability(self, liability: Liability) -> Liability:
        """Append a liability. Returns a copy of what was stored."""
        stored = liability.model_copy(deep=True)
        self._liabilities.append(stored)
        return stored.model_copy(deep=True)

    def update_liability(self, liability_id: EntityId, **changes: Any) -> bool:
        """Partially update a liability. False if the id is unknown."""
        liability = self._find(self._liabilities, liability_id)
        if liability is None:
            return False
        liability.update(**changes)
        return True

    def remove_liability(self, liability_id: EntityId) -> bool:
        """Remove a liability. False if the id is unknown."""
        return self._remove(self._liabilities, liability_id)

    def get_liability(self, liability_id: EntityId) -> Optional[Liability]:
        liability = self._find(self._liabilities, liability_id)
        return liability.model_copy(deep=True) if liability else None

    # -------------------------------------------------------------------------
    # Totals
    # -------------------------------------------------------------------------

    def get_total_assets(self) -> float:
        return sum((a.value for a in self._assets), 0.0)

    def get_total_liabilities(self) -> float:
        return sum((l.value for l in self._liabilities), 0.0)

    def get_net_worth(self) -> float:
        return self.get_total_assets() - self.get_total_liabilities()

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def create_snapshot(self) -> Snapshot:
        """
        Capture the current state and append it.

        Always succeeds. Snapshots taken on the same day are kept side by
        side; nothing is replaced or merged.
        """
        snapshot = Snapshot(
            taken_at=utc_now(),
            total_assets=self.get_total_assets(),
            total_liabilities=self.get_total_liabilities(),
            net_worth=self.get_net_worth(),
            assets=tuple(self.assets),
            liabilities=tuple(self.liabilities),
        )
        self._snapshots.append(snapshot)
        return snapshot.model_copy(deep=True)

    def get_snapshots_sorted(self) -> list[Snapshot]:
        """Snapshots newest first. Equal timestamps keep insertion order."""
        # sorted() is stable, including with reverse=True
        return sorted(self.snapshots, key=lambda s: s.taken_at, reverse=True)

    def remove_snapshot(self, snapshot_id: EntityId) -> bool:
        """Remove a snapshot. False if the id is unknown."""
        return self._remove(self._snapshots, snapshot_id)

    # -------------------------------------------------------------------------
    # Whole-portfolio operations
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """Empty all three collections."""
        self._assets, self._liabilities, self._snapshots = [], [], []

    def to_state(self) -> PortfolioState:
        return PortfolioState(
            assets=self.assets,
            liabilities=self.liabilities,
            snapshots=self.snapshots,
        )

    @classmethod
    def from_state(cls, state: PortfolioState) -> "Portfolio":
        return cls(state)

    @staticmethod
    def _find(items: list, entity_id: EntityId):
        return next((item for item in items if _matches(item.id, entity_id)), None)

    @staticmethod
    def _remove(items: list, entity_id: EntityId) -> bool:
        for index, item in enumerate(items):
            if _matches(item.id, entity_id):
                del items[index]
                return True
        return False
