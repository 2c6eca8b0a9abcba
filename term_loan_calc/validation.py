"""Input validation for loan calculations.

The engine trusts its input, so every caller (CLI, web API) runs user input
through ``validate_loan_input`` first. Field names are snake_case; the
camelCase names used by JSON clients (``loanAmount``, ``paymentsPerYear``...)
are accepted as aliases.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.alias_generators import to_camel, to_snake

from .data_models import LoanInput, PaymentType
from .utils import add_months

DATE_ORDER_MESSAGE = (
    "Payment dates must be logical (first payment >= start date, maturity > start date)"
)
PAYMENT_COUNT_MESSAGE = "Amortization period must allow at least one payment"


class LoanValidationError(ValueError):
    """Raised when loan input fails validation.

    ``errors`` holds one ``{"field": ..., "message": ...}`` dict per problem.
    """

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))


class LoanRequest(BaseModel):
    """Loan parameters as submitted by a user."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    loan_amount: float = Field(..., ge=1000, le=100_000_000, description="Principal borrowed (CAD).")
    annual_interest_rate: float = Field(..., ge=0.01, le=50, description="Nominal annual rate in percent.")
    rate_term_months: int = Field(..., ge=1, le=600, description="Length of the fixed-rate term.")
    amortization_months: int = Field(..., ge=1, le=600, description="Full amortization period.")
    payments_per_year: int = Field(..., ge=1, le=365)
    start_date: date
    first_payment_date: Optional[date] = Field(None, description="Defaults to one month after start_date.")
    rate_term_maturity_date: Optional[date] = Field(
        None, description="Defaults to start_date plus rate_term_months."
    )
    compounding_frequency: int = Field(2, ge=1, le=365, description="Compounding periods per year.")
    payment_type: PaymentType = PaymentType.END

    @model_validator(mode="after")
    def _check_dates(self) -> "LoanRequest":
        if self.first_payment_date is None:
            self.first_payment_date = add_months(self.start_date, 1)
        if self.rate_term_maturity_date is None:
            self.rate_term_maturity_date = add_months(self.start_date, self.rate_term_months)
        if self.first_payment_date < self.start_date or self.rate_term_maturity_date <= self.start_date:
            raise ValueError(DATE_ORDER_MESSAGE)
        return self

    def to_loan_input(self) -> LoanInput:
        return LoanInput(
            loan_amount=self.loan_amount,
            annual_interest_rate=self.annual_interest_rate,
            rate_term_months=self.rate_term_months,
            amortization_months=self.amortization_months,
            payments_per_year=self.payments_per_year,
            start_date=self.start_date,
            first_payment_date=self.first_payment_date,
            rate_term_maturity_date=self.rate_term_maturity_date,
            compounding_frequency=self.compounding_frequency,
            payment_type=self.payment_type,
        )


def _error_items(exc: ValidationError) -> List[Dict[str, str]]:
    items = []
    for err in exc.errors():
        field = ".".join(to_snake(str(part)) for part in err["loc"]) or "dates"
        message = err["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        items.append({"field": field, "message": message})
    return items


def validate_loan_input(data: Mapping[str, Any]) -> LoanInput:
    """Validate raw input and return the engine's ``LoanInput``.

    Raises
    ------
    LoanValidationError
        With one entry per invalid field; the date-ordering rule is reported
        under the ``dates`` field. An amortization period too short for a
        single payment at the chosen frequency is reported under
        ``amortization_months``.
    """
    try:
        request = LoanRequest.model_validate(dict(data))
    except ValidationError as exc:
        raise LoanValidationError(_error_items(exc)) from exc
    loan = request.to_loan_input()
    if loan.total_payments < 1:
        raise LoanValidationError([{"field": "amortization_months", "message": PAYMENT_COUNT_MESSAGE}])
    return loan
