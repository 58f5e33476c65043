from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import AdvanceRequest
from .repository import AdvanceRepository

_SELECT = """
    SELECT request_id, user_id, amount, reason, status, created_at,
           admin_remarks, approved_at, hub_name
    FROM advance_requests
"""


def _to_request(r: dict) -> AdvanceRequest:
    return AdvanceRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        amount=as_float(r.get("amount")),
        reason=r.get("reason") or "",
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        admin_remarks=r.get("admin_remarks"),
        approved_at=r.get("approved_at"),
        hub_name=r.get("hub_name"),
    )


class MySQLAdvanceRepository(AdvanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, amount: float, reason: str, hub_name: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO advance_requests(user_id, amount, reason, status, hub_name)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), float(amount), reason, RequestStatus.PENDING.value, hub_name),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[AdvanceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_requests(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[AdvanceRequest]:
        clauses = ["1=1"]
        params: list[object] = []
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE {' AND '.join(clauses)} ORDER BY created_at DESC LIMIT %s",
                tuple(params),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        admin_remarks: Optional[str],
        approved_at: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE advance_requests
                SET status=%s, admin_remarks=%s, approved_at=%s
                WHERE request_id=%s
                """,
                (status.value, admin_remarks, approved_at, int(request_id)),
            )
            return cur.rowcount > 0

    def list_approved_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AdvanceRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE user_id=%s AND status=%s AND approved_at BETWEEN %s AND %s",
                (int(user_id), RequestStatus.APPROVED.value, start, end),
            )
            return [_to_request(r) for r in fetchall(cur)]
