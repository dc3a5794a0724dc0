"""
Instrument Value Strategies

Pure functions turning a typed detail record into a monetary value.
No rounding is applied anywhere; inputs are propagated as given.
"""

from typing import Optional, Union

from networth.models.types import (
    CryptoDetails,
    LoanDetails,
    MetalDetails,
    RecurringDetails,
)


def asset_value(
    details: Optional[Union[CryptoDetails, MetalDetails]],
    direct_value: float,
) -> float:
    """
    Value of an asset.
    
    Crypto: quantity x price per coin.
    Precious metal: weight x price per unit.
    No details: the directly entered value.
    """
    if details is None:
        return direct_value
    if isinstance(details, CryptoDetails):
        return details.quantity * details.price_per_coin
    if isinstance(details, MetalDetails):
        return details.weight * details.price_per_unit
    raise TypeError(f"Unsupported asset details: {type(details).__name__}")


def liability_value(
    details: Optional[Union[LoanDetails, RecurringDetails]],
    direct_value: float,
) -> float:
    """
    Value of a liability.
    
    Loan: outstanding principal (future interest is not included).
    Recurring: the annual amount.
    No details: the directly entered value.
    """
    if details is None:
        return direct_value
    if isinstance(details, LoanDetails):
        return details.principal
    if isinstance(details, RecurringDetails):
        return details.annual_amount
    raise TypeError(f"Unsupported liability details: {type(details).__name__}")


def loan_total_interest(loan: LoanDetails) -> float:
    """
    Interest still to be paid: payments remaining minus principal.
    
    Inconsistent inputs can make this negative; it is returned as-is.
    """
    return loan.monthly_payment * loan.remaining_months - loan.principal
