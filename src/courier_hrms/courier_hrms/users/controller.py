from __future__ import annotations

from flask import Flask, current_app, jsonify, session

from ..common.decorators import admin_required, login_required
from ..common.http import error_response, json_body
from ..core.enums import Role
from ..container import Container
from .model import Employee
from .service import SessionUser


def _start_session(s_user: SessionUser) -> None:
    session.clear()
    session["user_id"] = s_user.user_id
    session["name"] = s_user.full_name
    session["role"] = s_user.role.value
    session["fhr_id"] = s_user.fhr_id


def _session_payload(s_user: SessionUser) -> dict:
    return {
        "id": s_user.user_id,
        "fullName": s_user.full_name,
        "role": s_user.role.value,
        "fhrId": s_user.fhr_id,
    }


def _employee_payload(user: Employee) -> dict:
    return {
        "id": user.user_id,
        "fullName": user.full_name,
        "mobile": user.mobile,
        "role": user.role.value,
        "status": user.status.value,
        "fhrId": user.fhr_id,
        "employeeId": user.employee_id,
        "hubName": user.hub_name,
        "designation": user.designation,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="api_login")
    def login():
        data = json_body()
        try:
            s_user = container.auth_service.authenticate(data.get("mobile", ""), data.get("password", ""))
        except Exception as e:
            return error_response(e)
        _start_session(s_user)
        return jsonify({"user": _session_payload(s_user)})

    @app.route("/api/auth/send-otp", methods=["POST"], endpoint="api_send_otp")
    def send_otp():
        try:
            code = container.auth_service.request_otp(json_body().get("mobile", ""))
        except Exception as e:
            return error_response(e)
        body = {"message": "OTP sent successfully."}
        # No SMS gateway in development; hand the code back to the caller.
        if current_app.config.get("DEBUG"):
            body["otp"] = code
        return jsonify(body)

    @app.route("/api/auth/verify-otp", methods=["POST"], endpoint="api_verify_otp")
    def verify_otp():
        data = json_body()
        try:
            s_user = container.auth_service.authenticate_otp(data.get("mobile", ""), data.get("otp", ""))
        except Exception as e:
            return error_response(e)
        _start_session(s_user)
        return jsonify({"user": _session_payload(s_user)})

    @app.route("/api/auth/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out."})

    @app.route("/api/auth/me", endpoint="api_me")
    @login_required
    def me():
        try:
            user = container.user_service.get(int(session["user_id"]))
        except Exception as e:
            return error_response(e)
        return jsonify(_employee_payload(user))

    @app.route("/api/employees/<int:user_id>", methods=["DELETE"], endpoint="api_deactivate_employee")
    @admin_required
    def deactivate_employee(user_id: int):
        try:
            container.user_service.deactivate(current_role=Role(session["role"]), user_id=user_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Employee deactivated."})

    @app.route("/api/joining-requests", endpoint="api_list_joining_requests")
    @admin_required
    def list_joining_requests():
        try:
            pending = container.user_service.list_pending()
        except Exception as e:
            return error_response(e)
        return jsonify({"requests": [_employee_payload(u) for u in pending]})

    @app.route("/api/joining-requests/<int:user_id>/approve", methods=["PUT"], endpoint="api_approve_joiner")
    @admin_required
    def approve_joiner(user_id: int):
        try:
            user = container.user_service.approve(current_role=Role(session["role"]), user_id=user_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Joining request approved. Employee activated.", "employee": _employee_payload(user)})

    @app.route("/api/joining-requests/<int:user_id>/reject", methods=["PUT"], endpoint="api_reject_joiner")
    @admin_required
    def reject_joiner(user_id: int):
        try:
            user = container.user_service.reject(current_role=Role(session["role"]), user_id=user_id)
        except Exception as e:
            return error_response(e)
        return jsonify({"message": "Joining request rejected.", "employee": _employee_payload(user)})
