"""Utility functions for the term loan calculator.

This module provides helpers for parsing user input into Python data types
and for handling dates: parsing ISO ``YYYY-MM-DD`` strings and adding calendar
months, which the input layer uses to derive default payment and maturity
dates.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date``.

    Raises
    ------
    ValueError
        If the string is not a valid calendar date.
    """
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {value}") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def parse_amount(value: str) -> float:
    """Parse a money amount with optional suffixes.

    Accepts plain numbers ("500000"), thousands separators and a leading
    dollar sign ("$500,000"), and shorthand with ``k``/``m`` suffixes
    (e.g., "500k" meaning 500_000).
    """
    cleaned = value.strip().lower().replace(",", "").lstrip("$")
    factor = 1.0
    if cleaned.endswith("k"):
        factor = 1_000.0
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = 1_000_000.0
        cleaned = cleaned[:-1]
    try:
        return float(cleaned) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def parse_rate(value: str) -> float:
    """Parse an annual rate in percent ("5.25" or "5.25%")."""
    cleaned = value.strip()
    if cleaned.endswith("%"):
        cleaned = cleaned[:-1]
    try:
        return float(cleaned)
    except ValueError as exc:
        raise ValueError(f"Invalid interest rate: {value}") from exc
