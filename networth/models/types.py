"""
Shared Types for Net Worth Tracker

Enumerations and the typed detail records that drive value calculation.

DESIGN DECISION: Instrument details form a tagged union keyed by `kind`.
An asset holds crypto details OR metal details OR nothing - never both -
and pydantic picks the right record from the tag when parsing stored data.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Normalize to aware UTC. Naive datetimes are taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


# Every stored timestamp is aware UTC, so timestamps always compare.
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class AssetType(str, Enum):
    """
    Supported asset categories.
    
    DESIGN DECISION: Explicit categories rather than free text keep
    allocation breakdowns consistent.
    """
    CASH = "Cash"
    HIGH_SAVINGS = "High Savings Account"
    TFSA = "Wealthsimple TFSA"
    TFSA_MANAGED = "Wealthsimple TFSA Managed"
    RRSP = "Wealthsimple RRSP"
    RRSP_MANAGED = "Wealthsimple RRSP Managed"
    CRYPTO_LONG_TERM = "Wealthsimple Long-Term Crypto"
    UNREGISTERED = "Wealthsimple Unregistered"
    CRO_CRYPTO = "CRO Crypto"
    GOLD = "Gold"
    SILVER = "Silver"


class LiabilityType(str, Enum):
    """Supported liability categories."""
    CREDIT_CARD = "Credit Card"
    LINE_OF_CREDIT = "Line of Credit"
    CAR_LOAN = "Car Loan"
    HOME_LOAN = "Home Loan"
    CAR_INSURANCE = "Car Insurance"
    HOME_INSURANCE = "Home Insurance"
    HEALTH_INSURANCE = "Health Insurance"
    LIFE_INSURANCE = "Life Insurance"
    PROPERTY_TAX = "Property Taxes"
    SECURITY_BILLS = "Security Bills"


class CryptoType(str, Enum):
    """Coins a crypto holding can be denominated in."""
    BTC = "Bitcoin"
    ETH = "Ethereum"
    CRO = "Crypto.com Coin"
    OTHER = "Other"


class MetalUnit(str, Enum):
    """Weight unit of a precious-metal holding."""
    GRAMS = "grams"
    OUNCES = "ounces"


# Readily spendable categories used by the liquidity ratio.
LIQUID_ASSET_TYPES: frozenset[AssetType] = frozenset({
    AssetType.CASH,
    AssetType.HIGH_SAVINGS,
})


# =============================================================================
# INSTRUMENT DETAILS
# =============================================================================
#
# Amounts are plain floats and are NOT range-checked: zero or negative
# quantities, prices and weights are accepted and propagated. Input
# validation belongs to whatever collects the numbers from the user.

class CryptoDetails(BaseModel):
    """A crypto holding: value = quantity x price_per_coin."""
    model_config = ConfigDict(frozen=True)
    
    kind: Literal["crypto"] = "crypto"
    coin_type: CryptoType
    quantity: float
    price_per_coin: float


class MetalDetails(BaseModel):
    """A precious-metal holding: value = weight x price_per_unit."""
    model_config = ConfigDict(frozen=True)
    
    kind: Literal["metal"] = "metal"
    unit: MetalUnit
    weight: float
    price_per_unit: float


class LoanDetails(BaseModel):
    """An amortizing loan. The liability's value is the outstanding principal."""
    model_config = ConfigDict(frozen=True)
    
    kind: Literal["loan"] = "loan"
    principal: float
    interest_rate: float = Field(
        ...,
        description="Annual interest rate in percent (5 means 5%)"
    )
    monthly_payment: float
    remaining_months: int


class RecurringDetails(BaseModel):
    """
    A recurring expense. The liability's value is the annual amount.
    
    annual_amount is derived as monthly_amount * 12 when omitted.
    When supplied explicitly (e.g. from an import) it is kept verbatim,
    even if it disagrees with the monthly figure.
    """
    model_config = ConfigDict(frozen=True)
    
    kind: Literal["recurring"] = "recurring"
    monthly_amount: float
    annual_amount: float
    
    @model_validator(mode='before')
    @classmethod
    def derive_annual_amount(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("annual_amount") is None:
            monthly = data.get("monthly_amount")
            if monthly is not None:
                data = {**data, "annual_amount": float(monthly) * 12}
        return data
    
    @classmethod
    def from_monthly(cls, monthly_amount: float) -> "RecurringDetails":
        """Build a record whose annual amount is derived from the monthly one."""
        return cls(monthly_amount=monthly_amount, annual_amount=monthly_amount * 12)


AssetDetails = Annotated[
    Union[CryptoDetails, MetalDetails],
    Field(discriminator="kind"),
]

LiabilityDetails = Annotated[
    Union[LoanDetails, RecurringDetails],
    Field(discriminator="kind"),
]
