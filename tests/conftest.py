from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

import pytest

from src.courier_hrms.courier_hrms.core.enums import AccountStatus, Role
from src.courier_hrms.courier_hrms.users.model import Employee


class InMemoryUsers:
    """UserRepository over a dict; FHR ID lookup is case-insensitive and exact."""

    def __init__(self, users=()):
        self._by_id: dict[int, Employee] = {u.user_id: u for u in users}

    def add(self, user: Employee) -> Employee:
        self._by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self._by_id.get(int(user_id))

    def get_by_mobile(self, mobile: str) -> Optional[Employee]:
        return next((u for u in self._by_id.values() if u.mobile == mobile), None)

    def find_by_fhr_id(self, fhr_id: str) -> Optional[Employee]:
        key = (fhr_id or "").strip().lower()
        return next((u for u in self._by_id.values() if (u.fhr_id or "").lower() == key), None)

    def list_active_employees(self):
        return [u for u in self._by_id.values() if u.role == Role.EMPLOYEE and u.status == AccountStatus.ACTIVE]

    def list_admins(self):
        return [u for u in self._by_id.values() if u.role == Role.ADMIN]

    def set_status(self, user_id: int, *, status: AccountStatus) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(user, status=status)
        return True

    def list_by_role(self, role: Role):
        return [u for u in self._by_id.values() if u.role == role]

    def set_lifecycle(self, user_id: int, *, role: Role, status: AccountStatus, approved: bool) -> bool:
        user = self._by_id.get(int(user_id))
        if not user:
            return False
        self._by_id[user.user_id] = replace(
            user, role=role, status=status, is_approved=approved, is_account_activated=approved
        )
        return True


class RecordingNotifier:
    def __init__(self):
        self.sent: list[tuple[int, str, str]] = []

    def notify(self, user_id, title, message):
        self.sent.append((user_id, title, message))
        return None


class RaisingNotifier:
    def __init__(self):
        self.calls = 0

    def notify(self, user_id, title, message):
        self.calls += 1
        raise RuntimeError("push gateway down")


def _employee(user_id: int, fhr_id: Optional[str] = None, **kwargs) -> Employee:
    values = dict(
        user_id=user_id,
        full_name=f"Rider {user_id}",
        mobile=f"90000000{user_id:02d}",
        role=Role.EMPLOYEE,
        status=AccountStatus.ACTIVE,
        employee_id=f"EMP{user_id:03d}",
        fhr_id=fhr_id if fhr_id is not None else f"FHR{user_id:03d}",
        hub_name="Varanasi Hub",
        designation="Delivery Associate",
        department="Operations",
        is_account_activated=True,
        is_approved=True,
    )
    values.update(kwargs)
    return Employee(**values)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 10, 9, 30, 0)


@pytest.fixture
def make_employee():
    return _employee


@pytest.fixture
def users() -> InMemoryUsers:
    """Five active riders FHR001..FHR005 plus one admin."""
    repo = InMemoryUsers(_employee(i) for i in range(1, 6))
    repo.add(_employee(100, fhr_id="", full_name="Admin", role=Role.ADMIN, employee_id="ADMIN001"))
    return repo


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def raising_notifier() -> RaisingNotifier:
    return RaisingNotifier()
