from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_INCENTIVE_RATE, DEFAULT_TDS_RATE
from ..core.enums import PayoutStatus
from ..users.model import Employee, EmployeeSnapshot


@dataclass(frozen=True)
class SalaryStructure:
    """Per-employee pay parameters. Rates are per delivered unit / percent."""

    user_id: int
    base_rate: float = 0.0
    conveyance: float = 0.0
    other_allowances: float = 0.0
    incentive_rate: float = DEFAULT_INCENTIVE_RATE
    tds_rate: float = DEFAULT_TDS_RATE

    @classmethod
    def defaults_for(cls, employee: Employee) -> "SalaryStructure":
        """Fallback when no structure is stored: the employee's own rate and conveyance."""
        return cls(
            user_id=employee.user_id,
            base_rate=float(employee.base_rate or 0),
            conveyance=float(employee.conveyance or 0),
        )

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "baseRate": self.base_rate,
            "conveyance": self.conveyance,
            "otherAllowances": self.other_allowances,
            "incentiveRate": self.incentive_rate,
            "tdsRate": self.tds_rate,
        }


@dataclass(frozen=True)
class PayrollInputs:
    """Month aggregates fed to a calculator."""

    working_days: int
    days_in_month: int
    delivered: float
    picked: float
    ofd: float
    advance: float
    salary: SalaryStructure


@dataclass(frozen=True)
class PayoutBreakdown:
    working_days: int
    lop_days: int
    paid_days: int
    delivered_count: float
    picked_count: float
    ofd_count: float
    base_rate: float
    basic: float
    conveyance: float
    incentives: float
    final_base_amount: float
    tds: float
    advance: float
    gross_earnings: float
    total_deductions: float
    net_payable: float


@dataclass(frozen=True)
class MonthlyPayout:
    """Computed payout for (user_id, month, year) with the identity frozen at computation time."""

    user_id: int
    month: int
    year: int
    employee: EmployeeSnapshot
    breakdown: PayoutBreakdown
    status: PayoutStatus = PayoutStatus.GENERATED
    remark: str = ""
    payout_id: Optional[int] = None

    def to_record(self) -> dict:
        b = self.breakdown
        e = self.employee
        return {
            "id": self.payout_id,
            "userId": self.user_id,
            "month": self.month,
            "year": self.year,
            "profileId": e.profile_id,
            "name": e.name,
            "hub": e.hub,
            "fhrId": e.fhr_id,
            "workingDays": b.working_days,
            "deliveredCount": b.delivered_count,
            "pickedCount": b.picked_count,
            "baseRate": b.base_rate,
            "basic": b.basic,
            "conveyance": b.conveyance,
            "incentives": b.incentives,
            "finalBaseAmount": b.final_base_amount,
            "tds": b.tds,
            "advance": b.advance,
            "grossEarnings": b.gross_earnings,
            "totalDeductions": b.total_deductions,
            "netPayable": b.net_payable,
            "paidDays": b.paid_days,
            "lopDays": b.lop_days,
            "employeeName": e.name,
            "employeeId": e.employee_id,
            "designation": e.designation,
            "department": e.department,
            "status": self.status.value,
            "remark": self.remark,
        }
