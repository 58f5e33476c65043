from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import AccountStatus, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, fetchone
from .model import Employee
from .repository import UserRepository

_COLUMNS = """
    user_id, full_name, mobile, role, status, employee_id, fhr_id, ehr_id,
    profile_id, hub_name, designation, department, base_rate, conveyance,
    password_hash, is_account_activated, is_approved, is_profile_completed, fcm_token
"""


def _to_employee(row: dict) -> Employee:
    return Employee(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        mobile=row["mobile"],
        role=Role(row["role"]),
        status=AccountStatus(row["status"]),
        employee_id=row.get("employee_id"),
        fhr_id=row.get("fhr_id"),
        ehr_id=row.get("ehr_id"),
        profile_id=row.get("profile_id"),
        hub_name=row.get("hub_name"),
        designation=row.get("designation"),
        department=row.get("department"),
        base_rate=as_float(row.get("base_rate")),
        conveyance=as_float(row.get("conveyance")),
        password_hash=row.get("password_hash") or "",
        is_account_activated=bool(row.get("is_account_activated")),
        is_approved=bool(row.get("is_approved")),
        is_profile_completed=bool(row.get("is_profile_completed")),
        fcm_token=row.get("fcm_token"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _one(self, where: str, params: tuple) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {where}", params)
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self._one("user_id=%s", (int(user_id),))

    def get_by_mobile(self, mobile: str) -> Optional[Employee]:
        return self._one("mobile=%s", (mobile.strip(),))

    def find_by_fhr_id(self, fhr_id: str) -> Optional[Employee]:
        return self._one("LOWER(fhr_id)=LOWER(%s)", (fhr_id.strip(),))

    def list_active_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE role=%s AND status=%s ORDER BY user_id",
                (Role.EMPLOYEE.value, AccountStatus.ACTIVE.value),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def list_admins(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s", (Role.ADMIN.value,))
            return [_to_employee(r) for r in fetchall(cur)]

    def set_status(self, user_id: int, *, status: AccountStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET status=%s WHERE user_id=%s", (status.value, int(user_id)))
            return cur.rowcount > 0

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY user_id", (role.value,))
            return [_to_employee(r) for r in fetchall(cur)]

    def set_lifecycle(self, user_id: int, *, role: Role, status: AccountStatus, approved: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET role=%s, status=%s, is_approved=%s, is_account_activated=%s
                WHERE user_id=%s
                """,
                (role.value, status.value, int(approved), int(approved), int(user_id)),
            )
            return cur.rowcount > 0
