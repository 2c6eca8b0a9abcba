from datetime import date

import pytest

from term_loan_calc.data_models import PaymentType
from term_loan_calc.validation import (
    DATE_ORDER_MESSAGE,
    PAYMENT_COUNT_MESSAGE,
    LoanValidationError,
    validate_loan_input,
)


def _fields(exc_info):
    return {e["field"] for e in exc_info.value.errors}


class TestValidateLoanInput:
    def test_camel_case_payload(self, loan_payload, canonical_loan):
        assert validate_loan_input(loan_payload) == canonical_loan

    def test_snake_case_payload(self, canonical_loan):
        loan = validate_loan_input(
            {
                "loan_amount": 500000,
                "annual_interest_rate": 5.25,
                "rate_term_months": 60,
                "amortization_months": 300,
                "payments_per_year": 12,
                "start_date": "2024-01-15",
                "first_payment_date": "2024-02-15",
                "rate_term_maturity_date": "2029-01-15",
            }
        )
        assert loan == canonical_loan

    def test_defaults(self, loan_payload):
        for key in ("firstPaymentDate", "rateTermMaturityDate", "compoundingFrequency", "paymentType"):
            loan_payload.pop(key)
        loan = validate_loan_input(loan_payload)
        assert loan.first_payment_date == date(2024, 2, 15)
        assert loan.rate_term_maturity_date == date(2029, 1, 15)
        assert loan.compounding_frequency == 2
        assert loan.payment_type is PaymentType.END

    @pytest.mark.parametrize(
        "key, value, field",
        [
            ("loanAmount", 999, "loan_amount"),
            ("loanAmount", 100_000_001, "loan_amount"),
            ("annualInterestRate", 0, "annual_interest_rate"),
            ("annualInterestRate", 50.5, "annual_interest_rate"),
            ("rateTermMonths", 601, "rate_term_months"),
            ("amortizationMonths", 0, "amortization_months"),
            ("paymentsPerYear", 12.5, "payments_per_year"),
            ("paymentsPerYear", 366, "payments_per_year"),
            ("compoundingFrequency", 0, "compounding_frequency"),
            ("paymentType", "middle", "payment_type"),
            ("startDate", "not-a-date", "start_date"),
        ],
    )
    def test_field_errors(self, loan_payload, key, value, field):
        loan_payload[key] = value
        with pytest.raises(LoanValidationError) as exc_info:
            validate_loan_input(loan_payload)
        assert field in _fields(exc_info)

    def test_missing_required_field(self, loan_payload):
        del loan_payload["loanAmount"]
        with pytest.raises(LoanValidationError) as exc_info:
            validate_loan_input(loan_payload)
        assert "loan_amount" in _fields(exc_info)

    def test_first_payment_before_start(self, loan_payload):
        loan_payload["firstPaymentDate"] = "2024-01-14"
        with pytest.raises(LoanValidationError) as exc_info:
            validate_loan_input(loan_payload)
        assert exc_info.value.errors == [{"field": "dates", "message": DATE_ORDER_MESSAGE}]

    def test_maturity_on_start_date(self, loan_payload):
        loan_payload["rateTermMaturityDate"] = "2024-01-15"
        with pytest.raises(LoanValidationError):
            validate_loan_input(loan_payload)

    def test_first_payment_on_start_date_allowed(self, loan_payload):
        loan_payload["firstPaymentDate"] = "2024-01-15"
        assert validate_loan_input(loan_payload).first_payment_date == date(2024, 1, 15)

    def test_error_is_value_error(self, loan_payload):
        loan_payload["loanAmount"] = 1
        with pytest.raises(ValueError, match="loan_amount"):
            validate_loan_input(loan_payload)

    def test_amortization_too_short_for_one_payment(self, loan_payload):
        loan_payload["amortizationMonths"] = 1
        loan_payload["paymentsPerYear"] = 1
        with pytest.raises(LoanValidationError) as exc_info:
            validate_loan_input(loan_payload)
        assert exc_info.value.errors == [{"field": "amortization_months", "message": PAYMENT_COUNT_MESSAGE}]

    def test_single_payment_allowed(self, loan_payload):
        loan_payload["amortizationMonths"] = 12
        loan_payload["paymentsPerYear"] = 1
        assert validate_loan_input(loan_payload).total_payments == 1
