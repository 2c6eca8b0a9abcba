"""Canadian term loan amortization calculator."""

from .business_days import adjust_payment_date, get_days_between, is_business_day
from .data_models import AmortizationResult, LoanInput, LoanSummary, PaymentRow, PaymentType
from .engine import calculate_amortization_schedule, calculate_payment_amount
from .formatter import format_currency, format_percentage
from .holidays import get_canadian_holidays, is_canadian_holiday

__all__ = [
    "AmortizationResult",
    "LoanInput",
    "LoanSummary",
    "PaymentRow",
    "PaymentType",
    "adjust_payment_date",
    "calculate_amortization_schedule",
    "calculate_payment_amount",
    "format_currency",
    "format_percentage",
    "get_canadian_holidays",
    "get_days_between",
    "is_business_day",
    "is_canadian_holiday",
]
