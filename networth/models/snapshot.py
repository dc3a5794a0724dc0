"""Snapshot - an immutable capture of the portfolio at a point in time."""

from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from networth.models.asset import Asset
from networth.models.liability import Liability
from networth.models.types import UtcDatetime, utc_now


class Snapshot(BaseModel):
    """
    Point-in-time totals plus full copies of the holdings.

    CRITICAL: The holdings are copies, never references to live entities.
    Mutating the portfolio after the capture must not change a snapshot.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(
        default_factory=uuid4,
        description="Unique snapshot ID"
    )
    taken_at: UtcDatetime = Field(
        default_factory=utc_now,
        description="When the snapshot was taken"
    )
    total_assets: float
    total_liabilities: float
    net_worth: float
    assets: tuple[Asset, ...] = ()
    liabilities: tuple[Liability, ...] = ()

    @property
    def formatted_date(self) -> str:
        """Short display date, e.g. 'Jan 15, 2024'."""
        return f"{self.taken_at:%b} {self.taken_at.day}, {self.taken_at.year}"
