"""Output helpers for the term loan calculator.

This module provides display formatting for amounts and rates, the schedule
views offered to users (whole schedule, rate term only, a single calendar
year), pagination, and functions to render summaries and schedules as text
tables in the terminal.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

import click

from .data_models import LoanSummary, PaymentRow

VIEWS = ("all", "rate-term", "year")
DEFAULT_PAGE_SIZE = 12


def format_currency(amount: float) -> str:
    """Format an amount in Canadian-dollar style, e.g. ``$1,234.56``."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def format_percentage(rate: float) -> str:
    """Format a rate already expressed in percent, e.g. ``5.2500%``."""
    return f"{rate:.4f}%"


def filter_schedule(
    schedule: Iterable[PaymentRow],
    view: str,
    rate_term_maturity_date: date,
    year: Optional[int] = None,
) -> List[PaymentRow]:
    """Return the rows visible in ``view``.

    ``rate-term`` keeps payments made on or before the rate term maturity;
    ``year`` keeps payments in ``year`` (the current year when omitted).
    """
    if view == "all":
        return list(schedule)
    if view == "rate-term":
        return [row for row in schedule if row.payment_date <= rate_term_maturity_date]
    if view == "year":
        selected = year if year is not None else date.today().year
        return [row for row in schedule if row.payment_date.year == selected]
    raise ValueError(f"Unknown schedule view: {view!r} (expected one of {', '.join(VIEWS)})")


def paginate(
    rows: Sequence[PaymentRow], page: int, per_page: int = DEFAULT_PAGE_SIZE
) -> Tuple[List[PaymentRow], int, int]:
    """Return the rows on ``page`` (1-based), the page actually shown and the
    total number of pages.

    Pages outside the valid range are clamped to it.
    """
    if per_page <= 0:
        raise ValueError("per_page must be positive")
    total_pages = math.ceil(len(rows) / per_page)
    page = min(max(page, 1), max(total_pages, 1))
    start = (page - 1) * per_page
    return list(rows[start:start + per_page]), page, total_pages


def print_summary(summary: LoanSummary) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    click.echo("Summary")
    click.echo("-" * 72)
    click.echo(f"Periodic payment   : {format_currency(summary.monthly_payment)}")
    click.echo(f"Total interest     : {format_currency(summary.total_interest)}")
    click.echo(f"Total of payments  : {format_currency(summary.total_payments)}")
    click.echo(f"Rate term interest : {format_currency(summary.rate_term_interest)}")
    click.echo(f"Rate term principal: {format_currency(summary.rate_term_principal)}")
    click.echo(f"Number of payments : {summary.number_of_payments}")
    click.echo("-" * 72)


def print_schedule(schedule: Iterable[PaymentRow]) -> None:
    """Print the amortization schedule as a simple tab-separated table."""
    headers = [
        "No",
        "Date",
        "BeginBal",
        "Payment",
        "Principal",
        "Interest",
        "EndBal",
        "CumInterest",
        "Days",
    ]
    click.echo("\t".join(headers))
    for row in schedule:
        click.echo(
            "\t".join(
                [
                    str(row.payment_number),
                    row.payment_date.isoformat(),
                    f"{row.beginning_balance:.2f}",
                    f"{row.scheduled_payment:.2f}",
                    f"{row.principal_payment:.2f}",
                    f"{row.interest_payment:.2f}",
                    f"{row.ending_balance:.2f}",
                    f"{row.cumulative_interest:.2f}",
                    str(row.days_between_payments),
                ]
            )
        )
