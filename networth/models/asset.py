"""Asset entity."""

from typing import Optional

from pydantic import Field

from networth.models.instrument import Instrument
from networth.models.types import (
    AssetDetails,
    AssetType,
    CryptoDetails,
    MetalDetails,
)
from networth.models.valuation import asset_value


class Asset(Instrument):
    """
    Anything the user owns.

    Cash-like assets carry a direct value. Crypto and precious-metal
    holdings carry details and their value is quantity x price.
    """

    category: AssetType = Field(
        ...,
        description="Asset category"
    )
    details: Optional[AssetDetails] = Field(
        default=None,
        description="Crypto or precious-metal details, if any"
    )

    def compute_value(self) -> float:
        return asset_value(self.details, self.value)

    @property
    def is_crypto(self) -> bool:
        return isinstance(self.details, CryptoDetails)

    @property
    def is_precious_metal(self) -> bool:
        return isinstance(self.details, MetalDetails)
