from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.decorators import admin_required, is_admin_session, login_required
from ..common.http import error_response, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    advances = container.advance_service

    @app.route("/api/advance-requests", methods=["POST"], endpoint="api_create_advance")
    @login_required
    def create_advance():
        data = json_body()
        try:
            req = advances.create(user_id=int(session["user_id"]), amount=data.get("amount"), reason=data.get("reason", ""))
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Advance request submitted.", "request": req.to_dict()}), 201

    @app.route("/api/advance-requests", methods=["GET"], endpoint="api_list_advances")
    @login_required
    def list_advances():
        try:
            user_id = None if is_admin_session() else int(session["user_id"])
            requests = advances.list_requests(user_id=user_id, status=request.args.get("status") or None)
        except Exception as e:
            return error_response(e)
        return jsonify({"requests": [r.to_dict() for r in requests]})

    @app.route("/api/advance-requests/<int:request_id>", methods=["PUT"], endpoint="api_decide_advance")
    @admin_required
    def decide_advance(request_id: int):
        data = json_body()
        try:
            req = advances.decide(
                request_id=request_id,
                status=data.get("status", ""),
                admin_remarks=data.get("adminRemarks", ""),
            )
        except Exception as e:
            return error_response(e)
        return jsonify({"message": f"Advance request {req.status.value.lower()}.", "request": req.to_dict()})
