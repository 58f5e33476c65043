from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file, session

from ..common.decorators import admin_required, is_admin_session, login_required
from ..common.http import error_response, json_body
from ..common.validators import require_period
from ..container import Container


def _optional_int(value):
    return int(value) if value not in (None, "") else None


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/payroll/salary-structure/<int:user_id>", methods=["GET"], endpoint="api_get_salary_structure")
    @admin_required
    def get_salary_structure(user_id: int):
        try:
            salary = payroll.get_salary_structure(user_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"salary": salary.to_dict()})

    @app.route("/api/payroll/salary-structure/<int:user_id>", methods=["POST"], endpoint="api_save_salary_structure")
    @admin_required
    def save_salary_structure(user_id: int):
        try:
            salary = payroll.save_salary_structure(user_id, json_body())
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Salary structure updated.", "salary": salary.to_dict()})

    @app.route("/api/payroll/preview/<int:user_id>", endpoint="api_preview_payout")
    @admin_required
    def preview_payout(user_id: int):
        try:
            month, year = require_period(request.args.get("month"), request.args.get("year"))
            payout = payroll.compute_monthly_payout(user_id, month, year)
        except Exception as e:
            return error_response(e)
        return jsonify({"payout": payout.to_record()})

    @app.route("/api/payroll/generate/<int:user_id>", methods=["POST"], endpoint="api_generate_payout")
    @admin_required
    def generate_payout(user_id: int):
        data = json_body()
        try:
            month, year = require_period(data.get("month"), data.get("year"))
            payout = payroll.generate_payout(user_id, month, year)
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Payout generated.", "payout": payout.to_record()})

    @app.route("/api/payroll/generate-bulk", methods=["POST"], endpoint="api_generate_bulk")
    @admin_required
    def generate_bulk():
        data = json_body()
        try:
            summary = payroll.generate_bulk(data.get("month"), data.get("year"))
        except Exception as e:
            return error_response(e)
        return jsonify(summary)

    @app.route("/api/payroll/payout", endpoint="api_list_payouts")
    @login_required
    def list_payouts():
        try:
            # Employees only ever see their own payouts.
            user_id = _optional_int(request.args.get("userId")) if is_admin_session() else int(session["user_id"])
            payouts = payroll.list_payouts(
                month=_optional_int(request.args.get("month")),
                year=_optional_int(request.args.get("year")),
                user_id=user_id,
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"payouts": [p.to_record() for p in payouts]})

    @app.route("/api/payroll/payout/excel", endpoint="api_export_payouts")
    @admin_required
    def export_payouts():
        try:
            month, year = require_period(request.args.get("month"), request.args.get("year"))
            content = payroll.export_payouts_excel(month, year)
        except Exception as e:
            return error_response(e)
        return send_file(
            io.BytesIO(content),
            mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            as_attachment=True,
            download_name=f"payout_{month}_{year}.xlsx",
        )

    @app.route("/api/payroll/payout/<int:payout_id>/status", methods=["PUT"], endpoint="api_payout_status")
    @admin_required
    def set_payout_status(payout_id: int):
        try:
            payout = payroll.set_payout_status(payout_id, json_body().get("status", ""))
        except Exception as e:
            return error_response(e)
        return jsonify({"payout": payout.to_record()})

    @app.route("/api/payroll/payout/<int:payout_id>/remark", methods=["PUT"], endpoint="api_payout_remark")
    @admin_required
    def set_payout_remark(payout_id: int):
        try:
            payout = payroll.set_payout_remark(payout_id, json_body().get("remark", ""))
        except Exception as e:
            return error_response(e)
        return jsonify({"payout": payout.to_record()})
