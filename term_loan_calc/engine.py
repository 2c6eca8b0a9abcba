"""Core calculation engine for the term loan calculator.

This module implements the financial logic required to build a Canadian-style
amortization schedule. The periodic payment comes from the annuity formula
applied to an effective per-payment rate (nominal rate converted through the
compounding frequency). Interest on each row, however, accrues daily on the
actual number of days since the previous payment, so moving a payment off a
weekend or holiday changes the principal/interest split but never the payment
amount.

The schedule is built as a fold: ``next_payment`` turns one ``ScheduleState``
into the next plus the emitted ``PaymentRow``.
"""

from __future__ import annotations

import logging
import math
from datetime import date, timedelta
from typing import List, Tuple

from .business_days import adjust_payment_date, get_days_between
from .data_models import (
    AmortizationResult,
    LoanInput,
    LoanSummary,
    PaymentRow,
    PaymentType,
    ScheduleState,
)

log = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25
# Balances at or below this are treated as paid off.
PAYOFF_THRESHOLD = 0.01


def effective_rate(annual_rate: float, payments_per_year: int, compounding_frequency: int = 2) -> float:
    """Convert a nominal annual rate in percent to a rate per payment period."""
    periodic = annual_rate / 100 / compounding_frequency
    return (1 + periodic) ** (compounding_frequency / payments_per_year) - 1


def calculate_payment_amount(
    principal: float,
    annual_rate: float,
    total_payments: int,
    payments_per_year: int,
    compounding_frequency: int = 2,
) -> float:
    """Return the fixed payment that amortizes ``principal``.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` the effective rate per payment period
    and ``n`` the number of payments. When the effective rate is zero the
    payment simplifies to ``P / n``.
    """
    values = (principal, annual_rate, total_payments, payments_per_year, compounding_frequency)
    if not all(math.isfinite(v) for v in values):
        raise ValueError("Payment inputs must be finite numbers")
    if total_payments <= 0:
        raise ValueError("Number of payments must be positive")
    if payments_per_year <= 0 or compounding_frequency <= 0:
        raise ValueError("Payment and compounding frequencies must be positive")

    rate = effective_rate(annual_rate, payments_per_year, compounding_frequency)
    if rate == 0:
        return principal / total_payments
    factor = (1 + rate) ** total_payments
    return principal * (rate * factor) / (factor - 1)


def payment_frequency_days(payments_per_year: int) -> int:
    """Nominal spacing of payments in days, rounding halves up."""
    return math.floor(DAYS_PER_YEAR / payments_per_year + 0.5)


def scheduled_payment_date(first_payment_date: date, payment_number: int, frequency_days: int) -> date:
    """Return the unadjusted date of payment ``payment_number`` (1-based)."""
    return first_payment_date + timedelta(days=(payment_number - 1) * frequency_days)


def next_payment(
    state: ScheduleState,
    payment_number: int,
    payment_date: date,
    fixed_payment: float,
    annual_rate: float,
    rate_term_maturity_date: date,
    is_final: bool = False,
) -> Tuple[PaymentRow, ScheduleState]:
    """Apply one payment to ``state``.

    Parameters
    ----------
    state: ScheduleState
        Balance and running totals before this payment.
    payment_number: int
        1-based index of the payment.
    payment_date: date
        The business-day-adjusted payment date.
    fixed_payment: float
        The regular payment amount.
    annual_rate: float
        Nominal annual rate in percent; accrued daily on a 365.25-day year.
    rate_term_maturity_date: date
        Rows paid on or before this date count towards the rate-term totals.
    is_final: bool
        When True, the row pays off the whole remaining balance.

    Returns
    -------
    row: PaymentRow
        The emitted schedule row.
    state: ScheduleState
        The state after the payment.
    """
    balance = state.balance
    days = get_days_between(state.previous_date, payment_date)
    daily_rate = annual_rate / 100 / DAYS_PER_YEAR
    interest = balance * daily_rate * days

    principal = fixed_payment - interest
    if is_final or principal > balance:
        principal = balance

    ending_balance = max(0.0, balance - principal)
    cumulative_interest = state.cumulative_interest + interest

    rate_term_interest = state.rate_term_interest
    rate_term_principal = state.rate_term_principal
    if payment_date <= rate_term_maturity_date:
        rate_term_interest += interest
        rate_term_principal += principal

    row = PaymentRow(
        payment_number=payment_number,
        payment_date=payment_date,
        beginning_balance=balance,
        scheduled_payment=principal + interest,
        principal_payment=principal,
        interest_payment=interest,
        ending_balance=ending_balance,
        cumulative_interest=cumulative_interest,
        days_between_payments=days,
    )
    new_state = ScheduleState(
        balance=ending_balance,
        cumulative_interest=cumulative_interest,
        previous_date=payment_date,
        rate_term_interest=rate_term_interest,
        rate_term_principal=rate_term_principal,
    )
    return row, new_state


def summarize(fixed_payment: float, schedule: List[PaymentRow], state: ScheduleState) -> LoanSummary:
    return LoanSummary(
        monthly_payment=fixed_payment,
        total_interest=state.cumulative_interest,
        total_payments=sum(row.scheduled_payment for row in schedule),
        rate_term_interest=state.rate_term_interest,
        rate_term_principal=state.rate_term_principal,
        number_of_payments=len(schedule),
    )


def calculate_amortization_schedule(loan: LoanInput) -> AmortizationResult:
    """Compute the amortization schedule and summary for a loan.

    Parameters
    ----------
    loan: LoanInput
        Validated loan parameters. The engine trusts the caller for ranges and
        date ordering; only a non-positive payment count or non-finite numbers
        raise ``ValueError``.

    Returns
    -------
    AmortizationResult
        ``schedule`` holds one row per payment, stopping early once the
        balance is paid off; ``summary`` aggregates the rows.
    """
    if loan.payment_type is PaymentType.BEGINNING:
        log.debug("Beginning-of-period payments are calculated as end-of-period")

    total_payments = loan.total_payments
    fixed_payment = calculate_payment_amount(
        loan.loan_amount,
        loan.annual_interest_rate,
        total_payments,
        loan.payments_per_year,
        loan.compounding_frequency,
    )
    frequency_days = payment_frequency_days(loan.payments_per_year)

    schedule: List[PaymentRow] = []
    state = ScheduleState(
        balance=loan.loan_amount,
        cumulative_interest=0.0,
        previous_date=loan.start_date,
    )
    for number in range(1, total_payments + 1):
        payment_date = adjust_payment_date(
            scheduled_payment_date(loan.first_payment_date, number, frequency_days)
        )
        row, state = next_payment(
            state,
            number,
            payment_date,
            fixed_payment,
            loan.annual_interest_rate,
            loan.rate_term_maturity_date,
            is_final=number == total_payments,
        )
        schedule.append(row)
        if state.balance <= PAYOFF_THRESHOLD:
            if number < total_payments:
                log.debug("Loan paid off early at payment %d of %d", number, total_payments)
            break

    log.debug(
        "Computed %d payments of %.2f for %.2f at %.4f%%",
        len(schedule),
        fixed_payment,
        loan.loan_amount,
        loan.annual_interest_rate,
    )
    return AmortizationResult(schedule, summarize(fixed_payment, schedule, state))
