from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import month_bounds, parse_iso_date
from ..common.decorators import admin_required, login_required
from ..common.http import error_response
from ..common.validators import require_period
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/daily-reports", endpoint="api_daily_reports")
    @admin_required
    def daily_reports():
        try:
            raw_date = request.args.get("date", "")
            report_date = parse_iso_date(raw_date) if raw_date else None
            data = container.daily_report_service.summary(report_date=report_date, hub_name=request.args.get("hub") or None)
        except Exception as e:
            return error_response(e)
        return jsonify(data)

    @app.route("/api/daily-reports/my", endpoint="api_my_daily_reports")
    @login_required
    def my_daily_reports():
        try:
            today = date.today()
            month, year = require_period(request.args.get("month", today.month), request.args.get("year", today.year))
            start, end = month_bounds(month, year)
            reports = container.daily_report_service.list_for_employee(
                user_id=int(session["user_id"]), start=start.date(), end=end.date()
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"reports": reports})
