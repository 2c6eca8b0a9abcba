"""Command-line interface for the term loan calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute full amortization schedules, view summaries,
list the Canadian statutory holidays of a year or check how a payment date is
adjusted. Schedules can be printed to the terminal or exported to CSV, JSON
or Excel files.
"""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import click

from .business_days import adjust_payment_date, is_business_day
from .data_models import LoanInput
from .engine import calculate_amortization_schedule
from .export import export_to_csv, export_to_excel, export_to_json
from .formatter import VIEWS, filter_schedule, print_schedule, print_summary
from .holidays import MAX_YEAR, MIN_YEAR, get_canadian_holidays
from .utils import parse_amount, parse_date, parse_rate
from .validation import LoanValidationError, validate_loan_input


def loan_options(command: Callable) -> Callable:
    """Attach the loan parameter options shared by ``schedule`` and ``summary``."""
    options = [
        click.option("--amount", "-a", "amount", default="500000", show_default=True, help="Loan amount (accepts 500k, 1.2m)"),
        click.option("--rate", "-r", "rate", default="5.25", show_default=True, help="Annual interest rate in percent"),
        click.option("--rate-term", "rate_term", type=int, default=60, show_default=True, help="Rate term in months"),
        click.option("--amortization", "amortization", type=int, default=300, show_default=True, help="Amortization period in months"),
        click.option("--payments-per-year", "-f", "payments_per_year", type=int, default=12, show_default=True, help="Payments per year (12 monthly, 26 bi-weekly, 52 weekly)"),
        click.option("--compounding", "compounding", type=int, default=2, show_default=True, help="Compounding periods per year"),
        click.option("--start-date", "-s", "start_date", required=True, help="Loan start date (YYYY-MM-DD)"),
        click.option("--first-payment-date", "first_payment_date", help="First payment date (YYYY-MM-DD); defaults to one month after start"),
        click.option("--maturity-date", "maturity_date", help="Rate term maturity date (YYYY-MM-DD); defaults to start plus rate term"),
        click.option("--payment-type", "payment_type", type=click.Choice(["end", "beginning"]), default="end", show_default=True, help="Payment timing"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def build_loan_from_options(
    amount: str,
    rate: str,
    rate_term: int,
    amortization: int,
    payments_per_year: int,
    compounding: int,
    start_date: str,
    first_payment_date: Optional[str],
    maturity_date: Optional[str],
    payment_type: str,
) -> LoanInput:
    data: Dict[str, Any] = {
        "rate_term_months": rate_term,
        "amortization_months": amortization,
        "payments_per_year": payments_per_year,
        "compounding_frequency": compounding,
        "payment_type": payment_type,
    }
    try:
        data["loan_amount"] = parse_amount(amount)
        data["annual_interest_rate"] = parse_rate(rate)
        data["start_date"] = parse_date(start_date)
        if first_payment_date:
            data["first_payment_date"] = parse_date(first_payment_date)
        if maturity_date:
            data["rate_term_maturity_date"] = parse_date(maturity_date)
        return validate_loan_input(data)
    except LoanValidationError as exc:
        raise click.BadParameter("\n".join(f"{e['field']}: {e['message']}" for e in exc.errors))
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def _loan_command(func: Callable) -> Callable:
    """Pop the loan options from the command kwargs and pass a ``LoanInput``."""

    @functools.wraps(func)
    def wrapper(**kwargs: Any) -> None:
        loan = build_loan_from_options(
            kwargs.pop("amount"),
            kwargs.pop("rate"),
            kwargs.pop("rate_term"),
            kwargs.pop("amortization"),
            kwargs.pop("payments_per_year"),
            kwargs.pop("compounding"),
            kwargs.pop("start_date"),
            kwargs.pop("first_payment_date"),
            kwargs.pop("maturity_date"),
            kwargs.pop("payment_type"),
        )
        func(loan, **kwargs)

    return wrapper


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """A Canadian term loan amortization calculator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@loan_options
@click.option("--view", "view", type=click.Choice(VIEWS), default="all", show_default=True, help="Rows to show or export")
@click.option("--year", "year", type=int, help="Calendar year for --view year (defaults to the current year)")
@click.option("--max-rows", "max_rows", type=int, default=120, show_default=True, help="Rows printed to the terminal")
@click.option("--output", "output", type=str, help="Output file path (.csv, .json or .xlsx)")
@_loan_command
def schedule(loan: LoanInput, view: str, year: Optional[int], max_rows: int, output: Optional[str]) -> None:
    """Compute and print the amortization schedule."""
    result = calculate_amortization_schedule(loan)
    rows = filter_schedule(result.schedule, view, loan.rate_term_maturity_date, year)
    if output:
        path = Path(output)
        suffix = path.suffix.lower()
        if suffix == ".csv":
            export_to_csv(path, rows)
        elif suffix == ".json":
            export_to_json(path, result, rows)
        elif suffix == ".xlsx":
            export_to_excel(path, loan, result, rows)
        else:
            raise click.BadParameter("Unsupported output format; use .csv, .json or .xlsx")
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(result.summary)
    # Limit schedule length printed to avoid flooding the terminal
    if len(rows) > max_rows:
        click.echo(f"Schedule has {len(rows)} rows; showing first {max_rows} rows.")
        rows = rows[:max_rows]
    print_schedule(rows)


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
@_loan_command
def summary(loan: LoanInput, output: Optional[str]) -> None:
    """Compute and print only the summary metrics for a loan."""
    result = calculate_amortization_schedule(loan)
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"loan": loan.to_dict(), "summary": result.summary.to_dict()}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(result.summary)


@cli.command()
@click.argument("year", type=click.IntRange(MIN_YEAR, MAX_YEAR))
def holidays(year: int) -> None:
    """List the observed Canadian statutory holidays of YEAR."""
    for holiday in get_canadian_holidays(year):
        click.echo(f"{holiday.date.isoformat()}  {holiday.date.strftime('%a')}  {holiday.name}")


@cli.command()
@click.argument("value")
def adjust(value: str) -> None:
    """Show the business day a payment due on VALUE (YYYY-MM-DD) is made."""
    try:
        day = parse_date(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    adjusted = adjust_payment_date(day)
    if is_business_day(day):
        click.echo(f"{day.isoformat()} is a business day")
    else:
        click.echo(f"{day.isoformat()} -> {adjusted.isoformat()} ({adjusted.strftime('%A')})")


if __name__ == "__main__":
    cli()
