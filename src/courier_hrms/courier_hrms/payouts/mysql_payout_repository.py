from __future__ import annotations

from dataclasses import fields
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, upsert_sql
from .model import PayoutReport
from .repository import PayoutReportRepository

_COLUMNS = tuple(f.name for f in fields(PayoutReport) if f.name != "payout_report_id")
_KEY_COLUMNS = ("fhr_id", "month", "year")
_INT_COLUMNS = {"user_id", "month", "year"}
_TEXT_COLUMNS = {"fhr_id", "profile_id", "full_name", "hub_name", "account_number", "ifsc_code", "conversion", "remark"}


def _to_report(r: dict) -> PayoutReport:
    values: dict = {}
    for c in _COLUMNS:
        if c in _INT_COLUMNS:
            values[c] = int(r[c])
        elif c in _TEXT_COLUMNS:
            values[c] = r.get(c) or ""
        else:
            values[c] = as_float(r.get(c))
    return PayoutReport(payout_report_id=int(r["payout_report_id"]), **values)


class MySQLPayoutReportRepository(PayoutReportRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, report: PayoutReport) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                upsert_sql("payout_reports", _COLUMNS, key_columns=_KEY_COLUMNS),
                tuple(getattr(report, c) for c in _COLUMNS),
            )

    def list_reports(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[PayoutReport]:
        clauses = ["1=1"]
        params: list[object] = []
        if month is not None:
            clauses.append("month=%s")
            params.append(int(month))
        if year is not None:
            clauses.append("year=%s")
            params.append(int(year))
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT payout_report_id, {", ".join(_COLUMNS)}
                FROM payout_reports
                WHERE {where}
                ORDER BY year DESC, month DESC, fhr_id ASC
                """,
                tuple(params),
            )
            return [_to_report(r) for r in fetchall(cur)]
