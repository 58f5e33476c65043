from __future__ import annotations

import io
import logging
from dataclasses import replace
from typing import Optional, Sequence

import pandas as pd

from ..advances.repository import AdvanceRepository
from ..common.datetime_utils import days_in_month, month_bounds
from ..common.validators import require_period
from ..core.constants import PAYSLIP_GENERATED_TITLE, SALARY_PUBLISHED_TITLE
from ..core.enums import PayoutStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.repository import NotificationSink
from ..notifications.service import safe_notify
from ..payslips.service import check_transition
from ..reports.repository import DailyReportRepository
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import MonthlyPayout, PayrollInputs, SalaryStructure
from .repository import MonthlyPayoutRepository, SalaryStructureRepository

logger = logging.getLogger(__name__)

# Column header -> MonthlyPayout.to_record() key, in sheet order.
EXPORT_COLUMNS = (
    ("Profile ID", "profileId"),
    ("Employee Name", "employeeName"),
    ("Hub Name", "hub"),
    ("Working Days", "workingDays"),
    ("LOP Days", "lopDays"),
    ("Delivered", "deliveredCount"),
    ("Picked", "pickedCount"),
    ("Base Rate", "baseRate"),
    ("Basic Pay", "basic"),
    ("Conveyance", "conveyance"),
    ("Incentives", "incentives"),
    ("Final Base", "finalBaseAmount"),
    ("TDS", "tds"),
    ("Advance", "advance"),
    ("Gross Earnings", "grossEarnings"),
    ("Total Deductions", "totalDeductions"),
    ("Net Payable", "netPayable"),
    ("Status", "status"),
    ("Remark", "remark"),
)


class PayrollService:
    """Monthly payout computation from daily reports, approved advances and salary structure."""

    def __init__(
        self,
        users: UserRepository,
        reports: DailyReportRepository,
        advances: AdvanceRepository,
        salary_structures: SalaryStructureRepository,
        payouts: MonthlyPayoutRepository,
        notifier: Optional[NotificationSink] = None,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._users = users
        self._reports = reports
        self._advances = advances
        self._salary_structures = salary_structures
        self._payouts = payouts
        self._notifier = notifier
        self._calculator = calculator or StandardPayrollCalculator()

    def compute_monthly_payout(self, user_id: int, month: int, year: int) -> MonthlyPayout:
        """Compute one employee's payout for a calendar month.

        Working days are the days that have a daily report; every other day
        of the month is loss of pay. Only advances approved inside the month
        are deducted. Raises NotFoundError when the employee does not exist.
        """
        m, y = require_period(month, year)
        employee = self._users.get_by_id(int(user_id))
        if not employee:
            raise NotFoundError(f"User {user_id} not found")

        start, end = month_bounds(m, y)
        reports = self._reports.list_for_user_between(user_id=employee.user_id, start=start.date(), end=end.date())
        advances = self._advances.list_approved_between(user_id=employee.user_id, start=start, end=end)
        salary = self._salary_structures.get(employee.user_id) or SalaryStructure.defaults_for(employee)

        inputs = PayrollInputs(
            working_days=len(reports),
            days_in_month=days_in_month(m, y),
            delivered=float(sum(r.delivered or 0 for r in reports)),
            picked=float(sum(r.picked or 0 for r in reports)),
            ofd=float(sum(r.ofd or 0 for r in reports)),
            advance=float(sum(a.amount or 0 for a in advances)),
            salary=salary,
        )
        breakdown = self._calculator.compute(inputs)
        return MonthlyPayout(
            user_id=employee.user_id,
            month=m,
            year=y,
            employee=employee.snapshot(),
            breakdown=breakdown,
        )

    def generate_payout(self, user_id: int, month: int, year: int) -> MonthlyPayout:
        payout = self.compute_monthly_payout(user_id, month, year)
        self._payouts.upsert(payout)
        logger.info("Payout generated for user %s %s/%s: net %.2f", payout.user_id, payout.month, payout.year, payout.breakdown.net_payable)
        safe_notify(
            self._notifier,
            payout.user_id,
            PAYSLIP_GENERATED_TITLE,
            f"Your payslip for {payout.month}/{payout.year} is ready. Net Payable: Rs.{payout.breakdown.net_payable:.2f}",
        )
        return payout

    def generate_bulk(self, month: int, year: int) -> dict:
        """Generate payouts for every active employee; one failure never stops the rest."""
        m, y = require_period(month, year)
        results: list[dict] = []
        errors: list[dict] = []

        for emp in self._users.list_active_employees():
            try:
                payout = self.compute_monthly_payout(emp.user_id, m, y)
                self._payouts.upsert(payout)
            except Exception as e:
                logger.warning("Bulk payout failed for user %s: %s", emp.user_id, e)
                errors.append({"employeeId": emp.employee_id or emp.fhr_id, "error": str(e)})
                continue

            safe_notify(
                self._notifier,
                emp.user_id,
                SALARY_PUBLISHED_TITLE,
                f"Your payout for {m}/{y} has been processed. Total: Rs.{payout.breakdown.net_payable:.2f}",
            )
            results.append(
                {
                    "employeeId": emp.employee_id or emp.fhr_id,
                    "name": emp.full_name,
                    "netPayable": payout.breakdown.net_payable,
                }
            )

        logger.info("Bulk payout %s/%s: %s processed, %s errors", m, y, len(results), len(errors))
        return {
            "message": f"Bulk payout generated for {len(results)} employees.",
            "processed": len(results),
            "errors": len(errors),
            "results": results,
            "errorDetails": errors,
        }

    # Salary structure
    def get_salary_structure(self, user_id: int) -> SalaryStructure:
        stored = self._salary_structures.get(int(user_id))
        if stored:
            return stored
        employee = self._users.get_by_id(int(user_id))
        if not employee:
            raise NotFoundError(f"User {user_id} not found")
        return SalaryStructure.defaults_for(employee)

    def save_salary_structure(self, user_id: int, data: dict) -> SalaryStructure:
        current = self.get_salary_structure(user_id)
        changes: dict = {}
        for key, attr in (
            ("baseRate", "base_rate"),
            ("conveyance", "conveyance"),
            ("otherAllowances", "other_allowances"),
            ("incentiveRate", "incentive_rate"),
            ("tdsRate", "tds_rate"),
        ):
            if data.get(key) is None:
                continue
            try:
                value = float(data[key])
            except (TypeError, ValueError):
                raise ValidationError(f"{key} must be a number")
            if value < 0:
                raise ValidationError(f"{key} cannot be negative")
            changes[attr] = value

        structure = replace(current, **changes)
        self._salary_structures.upsert(structure)
        logger.info("Salary structure saved for user %s", structure.user_id)
        return structure

    # Payout records
    def list_payouts(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[MonthlyPayout]:
        return self._payouts.list_payouts(month=month, year=year, user_id=user_id)

    def set_payout_status(self, payout_id: int, status: str) -> MonthlyPayout:
        try:
            target = PayoutStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown status {status!r}")
        payout = self._get_payout(payout_id)
        check_transition(payout.status, target)
        self._payouts.set_status(int(payout_id), status=target)
        logger.info("Payout %s moved %s -> %s", payout_id, payout.status.value, target.value)
        return self._get_payout(payout_id)

    def set_payout_remark(self, payout_id: int, remark: str) -> MonthlyPayout:
        self._get_payout(payout_id)
        self._payouts.set_remark(int(payout_id), remark=(remark or "").strip())
        return self._get_payout(payout_id)

    def export_payouts_excel(self, month: int, year: int) -> bytes:
        m, y = require_period(month, year)
        records = [p.to_record() for p in self._payouts.list_payouts(month=m, year=y)]
        df = pd.DataFrame(
            [[r[key] for _, key in EXPORT_COLUMNS] for r in records],
            columns=[header for header, _ in EXPORT_COLUMNS],
        )
        output = io.BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            df.to_excel(writer, index=False, sheet_name=f"Payout {m:02d}-{y}")
        return output.getvalue()

    def _get_payout(self, payout_id: int) -> MonthlyPayout:
        payout = self._payouts.get(int(payout_id))
        if not payout:
            raise NotFoundError("Payout not found")
        return payout
