"""
Portfolio Calculator

Stateless functions over asset and liability collections.
None of them mutate their inputs.

DIVISION BY ZERO IS NOT AN ERROR HERE:
- debt_to_asset_ratio() is exactly 0 when there are no assets
- liquidity_ratio() is math.inf when there are no liabilities
Both are defined sentinels. Callers rendering or comparing the
liquidity ratio must special-case infinity.
"""

import math
from collections.abc import Iterable, Sequence
from typing import Union

from pydantic import BaseModel, Field

from networth.models.asset import Asset
from networth.models.liability import Liability
from networth.models.types import LIQUID_ASSET_TYPES


def total_assets(assets: Iterable[Asset]) -> float:
    return sum((asset.value for asset in assets), 0.0)


def total_liabilities(liabilities: Iterable[Liability]) -> float:
    return sum((liability.value for liability in liabilities), 0.0)


def net_worth(assets: Sequence[Asset], liabilities: Sequence[Liability]) -> float:
    return total_assets(assets) - total_liabilities(liabilities)


def _share_by_category(
    items: Sequence[Union[Asset, Liability]],
) -> dict[str, float]:
    """Percentage of the total contributed by each category."""
    total = sum((item.value for item in items), 0.0)
    shares: dict[str, float] = {}
    for item in items:
        percentage = item.value / total * 100 if total > 0 else 0.0
        key = item.category.value
        shares[key] = shares.get(key, 0.0) + percentage
    return shares


def asset_allocation(assets: Sequence[Asset]) -> dict[str, float]:
    """
    Percentage of total assets held in each asset category.
    
    Entries sharing a category add up. When total assets are zero
    every category reports 0 instead of dividing by zero.
    """
    return _share_by_category(assets)


def liability_breakdown(liabilities: Sequence[Liability]) -> dict[str, float]:
    """Percentage of total liabilities owed in each liability category."""
    return _share_by_category(liabilities)


def total_loan_interest(liabilities: Iterable[Liability]) -> float:
    """Remaining interest summed over loans only."""
    return sum((l.total_interest for l in liabilities if l.is_loan), 0.0)


def monthly_recurring_expenses(liabilities: Iterable[Liability]) -> float:
    """Monthly amount summed over recurring expenses only."""
    return sum(
        (l.recurring.monthly_amount for l in liabilities if l.recurring is not None),
        0.0,
    )


def debt_to_asset_ratio(
    assets: Sequence[Asset],
    liabilities: Sequence[Liability],
) -> float:
    """Liabilities as a percentage of assets; 0 when there are no assets."""
    assets_total = total_assets(assets)
    if assets_total == 0:
        return 0.0
    return total_liabilities(liabilities) / assets_total * 100


def liquid_assets(assets: Iterable[Asset]) -> float:
    """Value held in cash-equivalent categories."""
    return sum(
        (asset.value for asset in assets if asset.category in LIQUID_ASSET_TYPES),
        0.0,
    )


def liquidity_ratio(
    assets: Sequence[Asset],
    liabilities: Sequence[Liability],
) -> float:
    """Liquid assets over total liabilities; math.inf when nothing is owed."""
    liabilities_total = total_liabilities(liabilities)
    if liabilities_total == 0:
        return math.inf
    return liquid_assets(assets) / liabilities_total


class PortfolioSummary(BaseModel):
    """Every summary metric of a portfolio at once."""
    
    total_assets: float
    total_liabilities: float
    net_worth: float
    asset_allocation: dict[str, float] = Field(default_factory=dict)
    liability_breakdown: dict[str, float] = Field(default_factory=dict)
    debt_to_asset_ratio: float
    liquidity_ratio: float = Field(
        ...,
        description="May be infinity when there are no liabilities"
    )
    total_loan_interest: float
    monthly_recurring_expenses: float


def summarize(
    assets: Sequence[Asset],
    liabilities: Sequence[Liability],
) -> PortfolioSummary:
    """Compute all summary metrics for the given holdings."""
    return PortfolioSummary(
        total_assets=total_assets(assets),
        total_liabilities=total_liabilities(liabilities),
        net_worth=net_worth(assets, liabilities),
        asset_allocation=asset_allocation(assets),
        liability_breakdown=liability_breakdown(liabilities),
        debt_to_asset_ratio=debt_to_asset_ratio(assets, liabilities),
        liquidity_ratio=liquidity_ratio(assets, liabilities),
        total_loan_interest=total_loan_interest(liabilities),
        monthly_recurring_expenses=monthly_recurring_expenses(liabilities),
    )
