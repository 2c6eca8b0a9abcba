"""Export of amortization schedules to CSV, JSON and Excel.

CSV and the Excel schedule sheet share the same nine columns. The Excel
workbook has a summary sheet (loan details and calculated results) and a
schedule sheet with currency-formatted amount cells.
"""

from __future__ import annotations

import csv
import io
import json
from datetime import date
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .data_models import AmortizationResult, LoanInput, PaymentRow

CSV_HEADERS = [
    "Payment #",
    "Payment Date",
    "Beginning Balance",
    "Scheduled Payment",
    "Principal",
    "Interest",
    "Ending Balance",
    "Cumulative Interest",
    "Days",
]

EXCEL_HEADERS = [
    "Payment #",
    "Payment Date",
    "Beginning Balance (CAD)",
    "Scheduled Payment (CAD)",
    "Principal Payment (CAD)",
    "Interest Payment (CAD)",
    "Ending Balance (CAD)",
    "Cumulative Interest (CAD)",
    "Days Between Payments",
]
SCHEDULE_WIDTHS = [12, 15, 20, 18, 18, 18, 20, 20, 15]
# 1-based columns holding amounts, Beginning Balance through Cumulative Interest
CURRENCY_COLUMNS = range(3, 9)
CURRENCY_FORMAT = '"$"#,##0.00'
TITLE = "Canadian Commercial Bank - Term Loan Calculator"

header_font = Font(bold=True, color="FFFFFF")
header_fill = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
border = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


def _csv_row(row: PaymentRow) -> List[object]:
    return [
        row.payment_number,
        row.payment_date.isoformat(),
        f"{row.beginning_balance:.2f}",
        f"{row.scheduled_payment:.2f}",
        f"{row.principal_payment:.2f}",
        f"{row.interest_payment:.2f}",
        f"{row.ending_balance:.2f}",
        f"{row.cumulative_interest:.2f}",
        row.days_between_payments,
    ]


def schedule_to_csv(schedule: Iterable[PaymentRow]) -> str:
    """Return the schedule as CSV text with a header row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for row in schedule:
        writer.writerow(_csv_row(row))
    return buffer.getvalue()


def export_to_csv(path: Path, schedule: Iterable[PaymentRow]) -> None:
    """Export schedule to a CSV file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        f.write(schedule_to_csv(schedule))


def export_to_json(path: Path, result: AmortizationResult, schedule: Optional[Sequence[PaymentRow]] = None) -> None:
    """Export summary and schedule to a JSON file.

    ``schedule`` overrides the rows written, e.g. a filtered view; the summary
    always covers the whole loan.
    """
    rows = result.schedule if schedule is None else schedule
    data = {
        "summary": result.summary.to_dict(),
        "schedule": [row.to_dict() for row in rows],
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def _style_header(ws, row: int, columns: int) -> None:
    for col in range(1, columns + 1):
        cell = ws.cell(row=row, column=col)
        cell.font = header_font
        cell.fill = header_fill
        cell.border = border


def _display_date(value: date) -> str:
    return value.strftime("%b %d, %Y")


def add_summary_sheet(wb: Workbook, loan: LoanInput, result: AmortizationResult, generated_on: date) -> None:
    ws = wb.create_sheet("Loan Summary")
    summary = result.summary
    ws.append([TITLE])
    ws["A1"].font = Font(bold=True, size=14)
    ws.append(["Generated on:", _display_date(generated_on)])
    ws.append([])

    ws.append(["Loan Details", "Values"])
    _style_header(ws, ws.max_row, 2)
    details = [
        ("Loan Amount (CAD)", loan.loan_amount),
        ("Annual Interest Rate (%)", loan.annual_interest_rate),
        ("Rate Term (months)", loan.rate_term_months),
        ("Amortization Period (months)", loan.amortization_months),
        ("Payments Per Year", loan.payments_per_year),
        ("Start Date", _display_date(loan.start_date)),
        ("First Payment Date", _display_date(loan.first_payment_date)),
        ("Rate Term Maturity Date", _display_date(loan.rate_term_maturity_date)),
        ("Compounding Frequency", loan.compounding_frequency),
    ]
    for label, value in details:
        ws.append([label, value])
    ws.cell(row=5, column=2).number_format = CURRENCY_FORMAT
    ws.append([])

    ws.append(["Calculated Results", "Values"])
    _style_header(ws, ws.max_row, 2)
    results = [
        ("Monthly Payment (CAD)", summary.monthly_payment),
        ("Total Interest (CAD)", summary.total_interest),
        ("Total of Payments (CAD)", summary.total_payments),
        ("Rate Term Interest (CAD)", summary.rate_term_interest),
        ("Rate Term Principal (CAD)", summary.rate_term_principal),
    ]
    for label, value in results:
        ws.append([label, value])
        ws.cell(row=ws.max_row, column=2).number_format = CURRENCY_FORMAT
    ws.append(["Number of Payments", summary.number_of_payments])

    ws.column_dimensions["A"].width = 30
    ws.column_dimensions["B"].width = 20


def add_schedule_sheet(wb: Workbook, schedule: Iterable[PaymentRow]) -> None:
    ws = wb.create_sheet("Amortization Schedule")
    ws.append(EXCEL_HEADERS)
    _style_header(ws, 1, len(EXCEL_HEADERS))
    for row in schedule:
        ws.append([
            row.payment_number,
            row.payment_date.isoformat(),
            row.beginning_balance,
            row.scheduled_payment,
            row.principal_payment,
            row.interest_payment,
            row.ending_balance,
            row.cumulative_interest,
            row.days_between_payments,
        ])
        for col in CURRENCY_COLUMNS:
            ws.cell(row=ws.max_row, column=col).number_format = CURRENCY_FORMAT
    for i, width in enumerate(SCHEDULE_WIDTHS, 1):
        ws.column_dimensions[get_column_letter(i)].width = width
    ws.freeze_panes = "A2"


def build_workbook(
    loan: LoanInput,
    result: AmortizationResult,
    schedule: Optional[Sequence[PaymentRow]] = None,
    generated_on: Optional[date] = None,
) -> Workbook:
    """Build the two-sheet workbook; ``schedule`` defaults to every row."""
    wb = Workbook()
    wb.remove(wb.active)
    add_summary_sheet(wb, loan, result, generated_on or date.today())
    add_schedule_sheet(wb, result.schedule if schedule is None else schedule)
    return wb


def workbook_bytes(wb: Workbook) -> bytes:
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def export_to_excel(
    path: Path,
    loan: LoanInput,
    result: AmortizationResult,
    schedule: Optional[Sequence[PaymentRow]] = None,
) -> None:
    """Export summary and schedule to an ``.xlsx`` workbook."""
    build_workbook(loan, result, schedule).save(path)
