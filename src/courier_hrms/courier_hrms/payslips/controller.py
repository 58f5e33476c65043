from __future__ import annotations

from pathlib import Path

from flask import Flask, jsonify, request, send_file, session

from ..common.decorators import admin_required, is_admin_session, login_required
from ..common.http import error_response, json_body
from ..container import Container
from ..core.exceptions import NotFoundError


def register(app: Flask, container: Container) -> None:
    payslips = container.payslip_service

    @app.route("/api/payroll/payslips", endpoint="api_list_payslips")
    @login_required
    def list_payslips():
        try:
            month = request.args.get("month")
            year = request.args.get("year")
            user_id = None if is_admin_session() else int(session["user_id"])
            slips = payslips.list_slips(
                month=int(month) if month else None,
                year=int(year) if year else None,
                user_id=user_id,
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"payslips": [s.to_dict() for s in slips]})

    @app.route("/api/payroll/payslips/<int:payslip_id>/pdf", endpoint="api_payslip_pdf")
    @login_required
    def payslip_pdf(payslip_id: int):
        try:
            owner = None if is_admin_session() else int(session["user_id"])
            slip = payslips.get(payslip_id, user_id=owner)
            path = Path(slip.pdf_path) if slip.pdf_path else None
            if path is None or not path.is_file():
                raise NotFoundError("Salary slip PDF not found")
        except Exception as e:
            return error_response(e)
        return send_file(str(path.resolve()), mimetype="application/pdf", as_attachment=True, download_name=path.name)

    @app.route("/api/payroll/payslips/<int:payslip_id>/status", methods=["PUT"], endpoint="api_payslip_status")
    @admin_required
    def payslip_status(payslip_id: int):
        try:
            slip = payslips.set_status(payslip_id, json_body().get("status", ""))
        except Exception as e:
            return error_response(e)
        return jsonify({"payslip": slip.to_dict()})
