from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import parse_iso_date
from ..common.decorators import admin_required
from ..common.http import error_response, uploaded_file
from ..common.validators import require_period
from ..container import Container
from ..spreadsheets.normalizer import read_rows


def register(app: Flask, container: Container) -> None:
    """Upload endpoints. A sheet with failing rows still answers 200 with the summary."""

    @app.route("/api/daily-reports/upload", methods=["POST"], endpoint="api_upload_daily_reports")
    @admin_required
    def upload_daily_reports():
        try:
            report_date = parse_iso_date(request.form.get("reportDate") or request.form.get("date", ""))
            content, filename = uploaded_file()
            rows = read_rows(content, filename)
            result = container.daily_report_ingestion.ingest(
                rows, report_date=report_date, uploaded_by=session.get("user_id")
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"message": f"Processed {result.total} rows.", **result.to_dict()})

    @app.route("/api/payroll/payout-reports/upload", methods=["POST"], endpoint="api_upload_payout_reports")
    @admin_required
    def upload_payout_reports():
        try:
            month, year = require_period(request.form.get("month"), request.form.get("year"))
            content, filename = uploaded_file()
            rows = read_rows(content, filename)
            result = container.payout_ingestion.ingest(rows, month, year)
        except Exception as e:
            return error_response(e)
        return jsonify({"message": f"Processed {result.total} rows.", **result.to_dict()})

    @app.route("/api/payroll/payslips/upload", methods=["POST"], endpoint="api_upload_payslips")
    @admin_required
    def upload_payslips():
        try:
            month, year = require_period(request.form.get("month"), request.form.get("year"))
            content, filename = uploaded_file()
            rows = read_rows(content, filename)
            result = container.payslip_ingestion.ingest(rows, month, year)
        except Exception as e:
            return error_response(e)
        return jsonify({"message": f"Generated {result.success} salary slips.", **result.to_dict(detailed=True)})
