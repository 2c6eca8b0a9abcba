import csv
import io
import json
from datetime import date

from openpyxl import load_workbook

from term_loan_calc.export import (
    CSV_HEADERS,
    CURRENCY_FORMAT,
    EXCEL_HEADERS,
    build_workbook,
    export_to_csv,
    export_to_excel,
    export_to_json,
    schedule_to_csv,
)


def test_csv_columns(canonical_result):
    text = schedule_to_csv(canonical_result.schedule[:3])
    rows = list(csv.reader(io.StringIO(text)))
    assert rows[0] == CSV_HEADERS
    assert len(rows) == 4
    first = rows[1]
    assert len(first) == 9
    assert first[0] == "1"
    assert first[1] == "2024-02-15"
    assert first[2] == "500000.00"
    assert first[8] == "31"


def test_export_to_csv_file(tmp_path, canonical_result):
    path = tmp_path / "schedule.csv"
    export_to_csv(path, canonical_result.schedule)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == len(canonical_result.schedule) + 1


def test_export_to_json(tmp_path, canonical_result):
    path = tmp_path / "schedule.json"
    export_to_json(path, canonical_result, canonical_result.schedule[:5])
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["summary"]["number_of_payments"] == canonical_result.summary.number_of_payments
    assert len(data["schedule"]) == 5
    assert data["schedule"][0]["payment_date"] == "2024-02-15"


def test_workbook_sheets(canonical_loan, canonical_result):
    wb = build_workbook(canonical_loan, canonical_result, generated_on=date(2024, 1, 10))
    assert wb.sheetnames == ["Loan Summary", "Amortization Schedule"]

    summary = wb["Loan Summary"]
    assert summary["B2"].value == "Jan 10, 2024"
    assert summary["A5"].value == "Loan Amount (CAD)"
    assert summary["B5"].value == 500_000.0
    labels = [cell.value for cell in summary["A"]]
    assert "Number of Payments" in labels

    schedule = wb["Amortization Schedule"]
    assert [cell.value for cell in schedule[1]] == EXCEL_HEADERS
    assert schedule.max_row == len(canonical_result.schedule) + 1
    assert schedule["C2"].number_format == CURRENCY_FORMAT
    assert schedule["A2"].number_format != CURRENCY_FORMAT
    assert schedule["I2"].value == 31


def test_export_to_excel_roundtrip(tmp_path, canonical_loan, canonical_result):
    path = tmp_path / "schedule.xlsx"
    export_to_excel(path, canonical_loan, canonical_result, canonical_result.schedule[:12])
    wb = load_workbook(path)
    ws = wb["Amortization Schedule"]
    assert ws.max_row == 13
    assert ws["B2"].value == "2024-02-15"
