"""
Projection Engine

Simulates the portfolio month by month. Month 0 is "now" and is never
projected; months 1..N are.

ASSUMPTIONS:
- Assets are held constant (no growth model) in project_net_worth()
- Loans amortize with a fixed monthly payment and monthly interest of
  annual_rate / 12 / 100 on the running balance
- Recurring expenses accrue linearly: monthly_amount * months
- Everything else keeps its current value

LOANS PAST PAYOFF:
Amortization runs for min(months, remaining_months) steps. Past
remaining_months the balance stays frozen at the payoff-month balance.
A balance that would go negative is reported as 0. When the payment does
not cover the interest the balance grows inside the loop; that growth is
reported as-is.
"""

from collections.abc import Iterable, Sequence
from typing import Optional

from pydantic import BaseModel

from networth.models.liability import Liability
from networth.models.types import LoanDetails


DEFAULT_BREAK_EVEN_MAX_MONTHS = 360


class ProjectionPoint(BaseModel):
    """Projected net worth at one month index."""
    
    month: int
    net_worth: float


def amortized_balance(loan: LoanDetails, months: int) -> float:
    """Outstanding principal after paying `months` instalments."""
    monthly_rate = loan.interest_rate / 12 / 100
    balance = loan.principal
    for _ in range(min(months, loan.remaining_months)):
        interest = balance * monthly_rate
        balance -= loan.monthly_payment - interest
    return max(0.0, balance)


def projected_liability_value(liability: Liability, months: int) -> float:
    """
    Value of a liability `months` from now.
    
    Loan: amortized balance (see module docstring for the payoff policy).
    Recurring: monthly amount accrued over the period.
    Direct value: unchanged.
    """
    if liability.loan is not None:
        return amortized_balance(liability.loan, months)
    if liability.recurring is not None:
        return liability.recurring.monthly_amount * months
    return liability.value


def project_liabilities(liabilities: Iterable[Liability], months: int) -> float:
    """Total projected liability value at a month index."""
    return sum((projected_liability_value(l, months) for l in liabilities), 0.0)


def project_net_worth(
    current_assets: float,
    liabilities: Sequence[Liability],
    months: int,
) -> list[ProjectionPoint]:
    """
    Net worth for month 0..months inclusive (months + 1 points).
    
    Month 0 uses current liability values. Every later month is projected
    from scratch rather than from the previous point, so rounding errors
    never compound across the series.
    """
    current_liabilities = sum((l.value for l in liabilities), 0.0)
    points = [ProjectionPoint(month=0, net_worth=current_assets - current_liabilities)]
    
    for month in range(1, months + 1):
        projected = project_liabilities(liabilities, month)
        points.append(ProjectionPoint(month=month, net_worth=current_assets - projected))
    
    return points


def recurring_expenses_over(liabilities: Iterable[Liability], months: int) -> float:
    """Total paid on recurring expenses over a period."""
    return sum(
        (l.recurring.monthly_amount * months for l in liabilities if l.recurring is not None),
        0.0,
    )


def loan_payments_over(liabilities: Iterable[Liability], months: int) -> float:
    """Total loan instalments (principal + interest) paid over a period."""
    return sum(
        (
            l.loan.monthly_payment * min(months, l.loan.remaining_months)
            for l in liabilities
            if l.loan is not None
        ),
        0.0,
    )


def loan_payoff_timeline(liabilities: Iterable[Liability]) -> dict[str, int]:
    """Months until each loan is paid off, keyed by loan name."""
    return {l.name: l.loan.remaining_months for l in liabilities if l.loan is not None}


def break_even_point(
    current_net_worth: float,
    liabilities: Sequence[Liability],
    monthly_asset_growth: float = 0.0,
    max_months: int = DEFAULT_BREAK_EVEN_MAX_MONTHS,
) -> Optional[int]:
    """
    First month at which projected net worth is non-negative.
    
    Returns None straight away when net worth is already non-negative,
    and None when nothing crosses zero within `max_months`.
    
    The asset estimate starts at the size of the current deficit and
    grows linearly by `monthly_asset_growth` per month.
    """
    if current_net_worth >= 0:
        return None
    
    deficit = abs(current_net_worth)
    for month in range(1, max_months + 1):
        projected_assets = deficit + monthly_asset_growth * month
        if projected_assets - project_liabilities(liabilities, month) >= 0:
            return month
    
    return None
