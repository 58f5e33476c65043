from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.decorators import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    notifications = container.notification_service

    @app.route("/api/notifications", endpoint="api_notifications")
    @login_required
    def list_notifications():
        unread_only = request.args.get("unread") in {"1", "true"}
        items = notifications.list_for_user(int(session["user_id"]), unread_only=unread_only)
        return jsonify({"notifications": [n.to_dict() for n in items]})

    @app.route("/api/notifications/<int:notification_id>/read", methods=["PUT"], endpoint="api_notification_read")
    @login_required
    def mark_read(notification_id: int):
        # False when the row is missing, foreign, or already read.
        changed = notifications.mark_read(notification_id=notification_id, user_id=int(session["user_id"]))
        return jsonify({"message": "Marked as read.", "changed": changed})
