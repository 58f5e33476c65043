from __future__ import annotations

from dataclasses import fields
from typing import Optional, Sequence

from ..core.enums import PayoutStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, upsert_sql
from .model import Payslip
from .repository import PayslipRepository

_COLUMNS = tuple(f.name for f in fields(Payslip) if f.name != "payslip_id")
# Re-uploading a slip replaces its figures but keeps the approval state.
_UPSERT_COLUMNS = tuple(c for c in _COLUMNS if c not in {"status", "remark"})
_KEY_COLUMNS = ("fhr_id", "month", "year")
_INT_COLUMNS = {"user_id", "month", "year"}
_TEXT_COLUMNS = {
    "fhr_id", "employee_name", "designation", "doj", "pay_period", "pay_date",
    "account_number", "ifsc_code", "pdf_path", "remark",
}


def _to_payslip(r: dict) -> Payslip:
    values: dict = {}
    for c in _COLUMNS:
        if c == "status":
            values[c] = PayoutStatus(r.get("status") or PayoutStatus.GENERATED.value)
        elif c in _INT_COLUMNS:
            values[c] = int(r[c])
        elif c in _TEXT_COLUMNS:
            values[c] = r.get(c) or ""
        else:
            values[c] = as_float(r.get(c))
    return Payslip(payslip_id=int(r["payslip_id"]), **values)


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, payslip: Payslip) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                upsert_sql("payslips", _UPSERT_COLUMNS, key_columns=_KEY_COLUMNS),
                tuple(getattr(payslip, c) for c in _UPSERT_COLUMNS),
            )

    def get(self, payslip_id: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT payslip_id, {', '.join(_COLUMNS)} FROM payslips WHERE payslip_id=%s",
                (int(payslip_id),),
            )
            r = fetchone(cur)
            return _to_payslip(r) if r else None

    def list_slips(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[Payslip]:
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
                SELECT payslip_id, {", ".join(_COLUMNS)}
                FROM payslips
                WHERE {where}
                ORDER BY year DESC, month DESC
                """,
                tuple(params),
            )
            return [_to_payslip(r) for r in fetchall(cur)]

    def set_status(self, payslip_id: int, *, status: PayoutStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE payslips SET status=%s WHERE payslip_id=%s", (status.value, int(payslip_id)))
            return cur.rowcount > 0
