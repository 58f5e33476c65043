from __future__ import annotations

from functools import wraps

from flask import jsonify, session

from ..core.enums import Role

# HR accounts exist in the identity store but get no admin surface.
ADMIN_ROLES = {Role.ADMIN.value}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required."}), 401
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return jsonify({"error": "Authentication required."}), 401
        if session.get("role") not in ADMIN_ROLES:
            return jsonify({"error": "Access denied."}), 403
        return view(*args, **kwargs)

    return wrapper


def is_admin_session() -> bool:
    return session.get("role") in ADMIN_ROLES
