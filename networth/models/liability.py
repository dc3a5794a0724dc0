"""Liability entity."""

from typing import Optional

from pydantic import Field

from networth.models.instrument import Instrument
from networth.models.types import (
    LiabilityDetails,
    LiabilityType,
    LoanDetails,
    RecurringDetails,
)
from networth.models.valuation import liability_value, loan_total_interest


class Liability(Instrument):
    """
    Anything the user owes.

    Loans are valued at their outstanding principal, recurring expenses
    at their annual amount, everything else (e.g. a credit card balance)
    at the directly entered value.
    """

    category: LiabilityType = Field(
        ...,
        description="Liability category"
    )
    details: Optional[LiabilityDetails] = Field(
        default=None,
        description="Loan or recurring-expense details, if any"
    )

    def compute_value(self) -> float:
        return liability_value(self.details, self.value)

    @property
    def loan(self) -> Optional[LoanDetails]:
        return self.details if isinstance(self.details, LoanDetails) else None

    @property
    def recurring(self) -> Optional[RecurringDetails]:
        return self.details if isinstance(self.details, RecurringDetails) else None

    @property
    def is_loan(self) -> bool:
        return self.loan is not None

    @property
    def is_recurring(self) -> bool:
        return self.recurring is not None

    @property
    def total_interest(self) -> float:
        """Interest left to pay on a loan; 0 for anything else."""
        if self.loan is None:
            return 0.0
        return loan_total_interest(self.loan)

    @property
    def total_loan_cost(self) -> float:
        """Principal plus remaining interest for loans, value otherwise."""
        if self.loan is None:
            return self.value
        return self.loan.principal + self.total_interest
