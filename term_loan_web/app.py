import io
import logging
import os
from datetime import date, datetime, timezone

from flask import Flask, jsonify, request, send_file

from term_loan_calc.engine import calculate_amortization_schedule
from term_loan_calc.export import build_workbook, schedule_to_csv, workbook_bytes
from term_loan_calc.formatter import DEFAULT_PAGE_SIZE, filter_schedule, paginate
from term_loan_calc.holidays import MAX_YEAR, MIN_YEAR, get_canadian_holidays
from term_loan_calc.validation import LoanValidationError, validate_loan_input

app = Flask(__name__)
app.config["SCHEDULE_PAGE_SIZE"] = int(os.environ.get("SCHEDULE_PAGE_SIZE", DEFAULT_PAGE_SIZE))
app.config["DEFAULT_VIEW"] = os.environ.get("DEFAULT_VIEW", "rate-term")

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
log = logging.getLogger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _bad_request(errors):
    return jsonify({"errors": errors}), 400


def _view_args():
    """Read the schedule view and optional year from the query string."""
    view = request.args.get("view", app.config["DEFAULT_VIEW"])
    year = request.args.get("year", type=int)
    return view, year


def _run_calculation():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise LoanValidationError([{"field": "body", "message": "Expected a JSON object"}])
    loan = validate_loan_input(payload)
    result = calculate_amortization_schedule(loan)
    view, year = _view_args()
    try:
        rows = filter_schedule(result.schedule, view, loan.rate_term_maturity_date, year)
    except ValueError as exc:
        raise LoanValidationError([{"field": "view", "message": str(exc)}]) from exc
    return loan, result, view, rows


@app.errorhandler(LoanValidationError)
def handle_validation_error(exc):
    log.info("Rejected loan input: %s", exc)
    return _bad_request(exc.errors)


@app.get("/api/health")
def health():
    return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})


@app.post("/api/amortization")
def amortization():
    """Return the summary and one page of the schedule.

    ``?all=1`` returns every row of the selected view instead of a page.
    """
    loan, result, view, rows = _run_calculation()
    if request.args.get("all") == "1":
        page, total_pages, page_rows = 1, 1, rows
    else:
        page = request.args.get("page", 1, type=int)
        page_rows, page, total_pages = paginate(rows, page, app.config["SCHEDULE_PAGE_SIZE"])
    return jsonify(
        {
            "loan": loan.to_dict(),
            "summary": result.summary.to_dict(),
            "view": view,
            "page": page,
            "total_pages": total_pages,
            "total_rows": len(rows),
            "schedule": [row.to_dict() for row in page_rows],
        }
    )


@app.post("/api/amortization/export")
def export_schedule():
    fmt = request.args.get("format", "csv").lower()
    if fmt not in ("csv", "xlsx"):
        return _bad_request([{"field": "format", "message": "Unsupported format; use csv or xlsx"}])
    loan, result, _, rows = _run_calculation()
    stamp = date.today().isoformat()
    if fmt == "csv":
        return send_file(
            io.BytesIO(schedule_to_csv(rows).encode("utf-8")),
            mimetype="text/csv",
            as_attachment=True,
            download_name=f"amortization-schedule-{stamp}.csv",
        )
    workbook = build_workbook(loan, result, rows)
    return send_file(
        io.BytesIO(workbook_bytes(workbook)),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"loan-amortization-schedule-{stamp}.xlsx",
    )


@app.get("/api/holidays/<int:year>")
def holidays(year):
    if not MIN_YEAR <= year <= MAX_YEAR:
        return _bad_request([{"field": "year", "message": f"Year must be between {MIN_YEAR} and {MAX_YEAR}"}])
    return jsonify({"year": year, "holidays": [h.to_dict() for h in get_canadian_holidays(year)]})


if __name__ == "__main__":
    print("Starting Term Loan Calculator API...")
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 8710)), debug=True)
