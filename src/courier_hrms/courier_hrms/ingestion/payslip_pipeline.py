from __future__ import annotations

import calendar
import logging
from pathlib import Path
from typing import Iterable, Optional

from ..common.money import round2
from ..common.validators import require_period
from ..core.enums import FailureReason
from ..payslips.model import Payslip
from ..payslips.repository import PayslipRenderer, PayslipRepository
from ..spreadsheets import headers as h
from ..spreadsheets.normalizer import Row, has_value, resolve_number, resolve_text
from ..users.model import Employee
from ..users.repository import UserRepository
from .base import IngestionResult, RowIngestionPipeline
from .payout_pipeline import Period

logger = logging.getLogger(__name__)


class PayslipSheetIngestion(RowIngestionPipeline[Payslip]):
    """Salary slip upload: each stored row gets a rendered PDF.

    The PDF is rendered before the upsert; a row whose PDF fails is not
    stored at all, and a row whose upsert fails leaves no PDF behind.
    """

    identity_headers = h.SLIP_IDENTITY

    def __init__(self, users: UserRepository, payslips: PayslipRepository, renderer: PayslipRenderer):
        super().__init__(users)
        self._payslips = payslips
        self._renderer = renderer

    def ingest(self, rows: Iterable[Row], month, year) -> IngestionResult:
        m, y = require_period(month, year)
        return self.run(rows, Period(month=m, year=y))

    def skipped_label(self, identifier: str, reason: FailureReason) -> Optional[str]:
        return f"{identifier} ({reason.value})"

    def build_record(self, row: Row, employee: Employee, context: Period) -> Payslip:
        basic = resolve_number(row, h.SLIP_BASIC)
        conveyance = resolve_number(row, h.SLIP_CONVEYANCE)
        incentives = resolve_number(row, h.SLIP_INCENTIVES)
        other_allowances = resolve_number(row, h.SLIP_OTHER_ALLOWANCES)
        tds = resolve_number(row, h.SLIP_TDS)
        advance = resolve_number(row, h.SLIP_ADVANCE)
        other_deductions = resolve_number(row, h.SLIP_OTHER_DEDUCTIONS)

        if has_value(row, h.SLIP_GROSS):
            gross = resolve_number(row, h.SLIP_GROSS)
        else:
            gross = basic + conveyance + incentives + other_allowances
        if has_value(row, h.SLIP_TOTAL_DEDUCTIONS):
            deductions = resolve_number(row, h.SLIP_TOTAL_DEDUCTIONS)
        else:
            deductions = tds + advance + other_deductions
        if has_value(row, h.SLIP_NET_PAYABLE):
            net = resolve_number(row, h.SLIP_NET_PAYABLE)
        else:
            net = round2(gross - deductions)

        return Payslip(
            user_id=employee.user_id,
            fhr_id=employee.fhr_id or resolve_text(row, self.identity_headers),
            month=context.month,
            year=context.year,
            employee_name=resolve_text(row, h.SLIP_NAME) or employee.full_name,
            designation=resolve_text(row, h.SLIP_DESIGNATION) or employee.designation or "",
            doj=resolve_text(row, h.SLIP_DOJ),
            pay_period=resolve_text(row, h.SLIP_PAY_PERIOD) or f"{calendar.month_name[context.month]} {context.year}",
            pay_date=resolve_text(row, h.SLIP_PAY_DATE),
            account_number=resolve_text(row, h.SLIP_ACCOUNT_NUMBER),
            ifsc_code=resolve_text(row, h.SLIP_IFSC),
            paid_days=resolve_number(row, h.SLIP_PAID_DAYS),
            lop_days=resolve_number(row, h.SLIP_LOP_DAYS),
            basic=basic,
            conveyance=conveyance,
            incentives=incentives,
            other_allowances=other_allowances,
            gross_earnings=gross,
            tds=tds,
            advance=advance,
            other_deductions=other_deductions,
            total_deductions=deductions,
            net_payable=net,
        )

    def before_persist(self, record: Payslip) -> Payslip:
        return record.with_pdf(str(self._renderer.render(record)))

    def persist(self, record: Payslip) -> None:
        try:
            self._payslips.upsert(record)
        except Exception:
            self._discard_pdf(record)
            raise

    def _discard_pdf(self, record: Payslip) -> None:
        if not record.pdf_path:
            return
        try:
            Path(record.pdf_path).unlink(missing_ok=True)
        except OSError:
            logger.warning("Could not remove %s", record.pdf_path, exc_info=True)
