from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import AccountStatus, Role


@dataclass(frozen=True)
class EmployeeSnapshot:
    """Identity fields frozen onto payout/payslip records at computation time.

    Payroll history must keep the name/hub/designation of that month even if
    the employee record is edited later, so these are copied, never joined.
    """

    name: str
    hub: str
    profile_id: str
    employee_id: str
    fhr_id: str
    designation: str
    department: str


@dataclass(frozen=True)
class Employee:
    """Domain entity: a person (employee, HR or admin).

    Note: Plain data object (no DB access code).
    """

    user_id: int
    full_name: str
    mobile: str
    role: Role
    status: AccountStatus
    employee_id: Optional[str] = None
    fhr_id: Optional[str] = None
    ehr_id: Optional[str] = None
    profile_id: Optional[str] = None
    hub_name: Optional[str] = None
    designation: Optional[str] = None
    department: Optional[str] = None
    base_rate: float = 0.0
    conveyance: float = 0.0
    password_hash: str = ""
    is_account_activated: bool = False
    is_approved: bool = False
    is_profile_completed: bool = False
    fcm_token: Optional[str] = None

    @property
    def can_login(self) -> bool:
        if self.role == Role.ADMIN:
            return True
        return self.is_account_activated and self.status == AccountStatus.ACTIVE

    def snapshot(self) -> EmployeeSnapshot:
        return EmployeeSnapshot(
            name=self.full_name,
            hub=self.hub_name or "",
            profile_id=self.profile_id or self.employee_id or "",
            employee_id=self.employee_id or "",
            fhr_id=self.fhr_id or "",
            designation=self.designation or "",
            department=self.department or "",
        )
