from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Notification
from .repository import NotificationRepository


def _to_notification(r: dict) -> Notification:
    return Notification(
        notification_id=int(r["notification_id"]),
        user_id=int(r["user_id"]),
        title=r["title"],
        message=r["message"],
        is_read=bool(r.get("is_read")),
        created_at=r.get("created_at"),
    )


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, title: str, message: str) -> Notification:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO notifications(user_id, title, message) VALUES(%s,%s,%s)",
                (int(user_id), title, message),
            )
            notification_id = int(cur.lastrowid)
            cur.execute(
                """
                SELECT notification_id, user_id, title, message, is_read, created_at
                FROM notifications
                WHERE notification_id=%s
                """,
                (notification_id,),
            )
            return _to_notification(fetchone(cur))

    def list_for_user(self, user_id: int, *, unread_only: bool = False, limit: int = 50) -> Sequence[Notification]:
        clauses = ["user_id=%s"]
        if unread_only:
            clauses.append("is_read=0")
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT notification_id, user_id, title, message, is_read, created_at
                FROM notifications
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_notification(r) for r in fetchall(cur)]

    def mark_read(self, *, notification_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE notifications SET is_read=1 WHERE notification_id=%s AND user_id=%s",
                (int(notification_id), int(user_id)),
            )
            return cur.rowcount > 0
