from __future__ import annotations

from dataclasses import asdict, fields
from typing import Optional, Sequence

from ..core.enums import PayoutStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone, upsert_sql
from ..users.model import EmployeeSnapshot
from .model import MonthlyPayout, PayoutBreakdown, SalaryStructure
from .repository import MonthlyPayoutRepository, SalaryStructureRepository

_SALARY_COLUMNS = tuple(f.name for f in fields(SalaryStructure))

# Snapshot fields are stored under explicit column names.
_SNAPSHOT_COLUMNS = {
    "name": "employee_name",
    "hub": "hub_name",
    "profile_id": "profile_id",
    "employee_id": "employee_id",
    "fhr_id": "fhr_id",
    "designation": "designation",
    "department": "department",
}
_BREAKDOWN_COLUMNS = tuple(f.name for f in fields(PayoutBreakdown))
_INT_BREAKDOWN = {"working_days", "lop_days", "paid_days"}
_PAYOUT_COLUMNS = (
    ("user_id", "month", "year")
    + tuple(_SNAPSHOT_COLUMNS.values())
    + _BREAKDOWN_COLUMNS
    + ("status", "remark")
)
# Recomputing a month refreshes the figures but keeps its workflow state.
_PAYOUT_UPSERT_COLUMNS = tuple(c for c in _PAYOUT_COLUMNS if c not in {"status", "remark"})


def _payout_values(p: MonthlyPayout) -> dict:
    snapshot = asdict(p.employee)
    values = {"user_id": p.user_id, "month": p.month, "year": p.year}
    values.update({col: snapshot[attr] for attr, col in _SNAPSHOT_COLUMNS.items()})
    values.update(asdict(p.breakdown))
    values["status"] = p.status.value
    values["remark"] = p.remark
    return values


def _to_payout(r: dict) -> MonthlyPayout:
    breakdown = PayoutBreakdown(
        **{c: int(r.get(c) or 0) if c in _INT_BREAKDOWN else as_float(r.get(c)) for c in _BREAKDOWN_COLUMNS}
    )
    snapshot = EmployeeSnapshot(**{attr: r.get(col) or "" for attr, col in _SNAPSHOT_COLUMNS.items()})
    return MonthlyPayout(
        user_id=int(r["user_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        employee=snapshot,
        breakdown=breakdown,
        status=PayoutStatus(r.get("status") or PayoutStatus.GENERATED.value),
        remark=r.get("remark") or "",
        payout_id=int(r["payout_id"]),
    )


class MySQLSalaryStructureRepository(SalaryStructureRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: int) -> Optional[SalaryStructure]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {', '.join(_SALARY_COLUMNS)} FROM salary_structures WHERE user_id=%s",
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return SalaryStructure(
                user_id=int(r["user_id"]),
                **{c: as_float(r.get(c)) for c in _SALARY_COLUMNS if c != "user_id"},
            )

    def upsert(self, structure: SalaryStructure) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                upsert_sql("salary_structures", _SALARY_COLUMNS, key_columns=("user_id",)),
                tuple(getattr(structure, c) for c in _SALARY_COLUMNS),
            )


class MySQLMonthlyPayoutRepository(MonthlyPayoutRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, payout: MonthlyPayout) -> None:
        values = _payout_values(payout)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                upsert_sql("monthly_payouts", _PAYOUT_UPSERT_COLUMNS, key_columns=("user_id", "month", "year")),
                tuple(values[c] for c in _PAYOUT_UPSERT_COLUMNS),
            )

    def get(self, payout_id: int) -> Optional[MonthlyPayout]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT payout_id, {', '.join(_PAYOUT_COLUMNS)} FROM monthly_payouts WHERE payout_id=%s",
                (int(payout_id),),
            )
            r = fetchone(cur)
            return _to_payout(r) if r else None

    def list_payouts(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[MonthlyPayout]:
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

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT payout_id, {", ".join(_PAYOUT_COLUMNS)}
                FROM monthly_payouts
                WHERE {" AND ".join(clauses)}
                ORDER BY year DESC, month DESC, employee_name ASC
                """,
                tuple(params),
            )
            return [_to_payout(r) for r in fetchall(cur)]

    def set_status(self, payout_id: int, *, status: PayoutStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE monthly_payouts SET status=%s WHERE payout_id=%s", (status.value, int(payout_id)))
            return cur.rowcount > 0

    def set_remark(self, payout_id: int, *, remark: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE monthly_payouts SET remark=%s WHERE payout_id=%s", (remark, int(payout_id)))
            return cur.rowcount > 0
