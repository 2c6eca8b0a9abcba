"""Shared fixtures.

Fixture loan: $500K at 5.25 %, compounded semi-annually, 25-year amortization,
monthly payments, 5-year rate term starting 2024-01-15.
"""

from datetime import date

import pytest

from term_loan_calc.data_models import LoanInput
from term_loan_calc.engine import calculate_amortization_schedule


@pytest.fixture
def canonical_loan() -> LoanInput:
    return LoanInput(
        loan_amount=500_000.0,
        annual_interest_rate=5.25,
        rate_term_months=60,
        amortization_months=300,
        payments_per_year=12,
        start_date=date(2024, 1, 15),
        first_payment_date=date(2024, 2, 15),
        rate_term_maturity_date=date(2029, 1, 15),
        compounding_frequency=2,
    )


@pytest.fixture
def canonical_result(canonical_loan):
    return calculate_amortization_schedule(canonical_loan)


@pytest.fixture
def loan_payload() -> dict:
    """The same loan as submitted by a JSON client."""
    return {
        "loanAmount": 500000,
        "annualInterestRate": 5.25,
        "rateTermMonths": 60,
        "amortizationMonths": 300,
        "paymentsPerYear": 12,
        "startDate": "2024-01-15",
        "firstPaymentDate": "2024-02-15",
        "rateTermMaturityDate": "2029-01-15",
        "compoundingFrequency": 2,
        "paymentType": "end",
    }
