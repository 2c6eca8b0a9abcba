"""Data models for the term loan calculator.

This module defines dataclasses representing the entities passed between the
calendar helpers, the amortization engine and the presentation layer: the
validated loan parameters, one row per scheduled payment, the summary and the
accumulator carried from one payment to the next. All of them are immutable;
a fresh set is built for every calculation.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, List, NamedTuple


class PaymentType(str, Enum):
    """When in the period a payment falls.

    Only ``END`` changes the calculation; ``BEGINNING`` is accepted and
    treated exactly like ``END``.
    """

    END = "end"
    BEGINNING = "beginning"


@dataclass(frozen=True)
class LoanInput:
    """Parameters of one loan calculation.

    Attributes
    ----------
    loan_amount: float
        Principal borrowed.
    annual_interest_rate: float
        Nominal annual rate in percent (``5.25`` means 5.25 %).
    rate_term_months: int
        Length of the fixed-rate term.
    amortization_months: int
        Time planned to fully repay the loan.
    payments_per_year: int
        1, 2, 4, 12, 24, 26 and 52 are the usual values.
    start_date, first_payment_date, rate_term_maturity_date: date
        Key dates. Ordering is checked by the validation layer, not here.
    compounding_frequency: int
        Number of times per year interest compounds (2 for Canadian mortgages).
    payment_type: PaymentType
        Accepted for completeness; every schedule is end-of-period.
    """

    loan_amount: float
    annual_interest_rate: float
    rate_term_months: int
    amortization_months: int
    payments_per_year: int
    start_date: date
    first_payment_date: date
    rate_term_maturity_date: date
    compounding_frequency: int = 2
    payment_type: PaymentType = PaymentType.END

    @property
    def total_payments(self) -> int:
        """Number of payments needed to amortize the loan."""
        return math.floor(self.amortization_months / 12 * self.payments_per_year)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("start_date", "first_payment_date", "rate_term_maturity_date"):
            data[key] = data[key].isoformat()
        data["payment_type"] = self.payment_type.value
        return data


@dataclass(frozen=True)
class PaymentRow:
    """One scheduled payment.

    ``scheduled_payment`` is always ``principal_payment + interest_payment``;
    the final row may be smaller or larger than the fixed payment because it
    clears the remaining balance.
    """

    payment_number: int
    payment_date: date
    beginning_balance: float
    scheduled_payment: float
    principal_payment: float
    interest_payment: float
    ending_balance: float
    cumulative_interest: float
    days_between_payments: int

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["payment_date"] = self.payment_date.isoformat()
        return data


@dataclass(frozen=True)
class LoanSummary:
    """Aggregate figures for a schedule.

    ``monthly_payment`` is the fixed periodic payment, whatever the payment
    frequency is. ``total_payments`` is a currency amount (the sum of every
    row's scheduled payment) while ``number_of_payments`` is the row count.
    """

    monthly_payment: float
    total_interest: float
    total_payments: float
    rate_term_interest: float
    rate_term_principal: float
    number_of_payments: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class AmortizationResult(NamedTuple):
    schedule: List[PaymentRow]
    summary: LoanSummary


@dataclass(frozen=True)
class ScheduleState:
    """Running totals carried from one payment to the next."""

    balance: float
    cumulative_interest: float
    previous_date: date
    rate_term_interest: float = 0.0
    rate_term_principal: float = 0.0


@dataclass(frozen=True)
class Holiday:
    name: str
    date: date

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "date": self.date.isoformat()}
