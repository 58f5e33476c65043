from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..common.validators import require_period
from ..payouts.model import PayoutReport
from ..payouts.repository import PayoutReportRepository
from ..spreadsheets import headers as h
from ..spreadsheets.normalizer import Row, resolve_number, resolve_text
from ..users.model import Employee
from ..users.repository import UserRepository
from .base import IngestionResult, RowIngestionPipeline


@dataclass(frozen=True)
class Period:
    month: int
    year: int


class PayoutSheetIngestion(RowIngestionPipeline[PayoutReport]):
    identity_headers = h.PAYOUT_IDENTITY

    def __init__(self, users: UserRepository, payouts: PayoutReportRepository):
        super().__init__(users)
        self._payouts = payouts

    def ingest(self, rows: Iterable[Row], month, year) -> IngestionResult:
        m, y = require_period(month, year)
        return self.run(rows, Period(month=m, year=y))

    def build_record(self, row: Row, employee: Employee, context: Period) -> PayoutReport:
        return PayoutReport(
            user_id=employee.user_id,
            fhr_id=employee.fhr_id or resolve_text(row, self.identity_headers),
            month=context.month,
            year=context.year,
            profile_id=resolve_text(row, h.PAYOUT_PROFILE_ID),
            full_name=resolve_text(row, h.PAYOUT_NAME),
            hub_name=resolve_text(row, h.PAYOUT_HUB),
            account_number=resolve_text(row, h.PAYOUT_ACCOUNT_NUMBER),
            ifsc_code=resolve_text(row, h.PAYOUT_IFSC),
            working_days=resolve_number(row, h.PAYOUT_WORKING_DAYS),
            total_assigned=resolve_number(row, h.PAYOUT_TOTAL_ASSIGNED),
            total_normal_delivery=resolve_number(row, h.PAYOUT_NORMAL_DELIVERY),
            sopsy_delivered=resolve_number(row, h.PAYOUT_SOPSY_DELIVERED),
            gtnl_delivered=resolve_number(row, h.PAYOUT_GTNL_DELIVERED),
            u2s_shipment=resolve_number(row, h.PAYOUT_U2S_SHIPMENT),
            total_delivery_count=resolve_number(row, h.PAYOUT_TOTAL_DELIVERY),
            conversion=resolve_text(row, h.PAYOUT_CONVERSION),
            lma_base_rate=resolve_number(row, h.PAYOUT_LMA_BASE_RATE),
            lma_base_pay_amt=resolve_number(row, h.PAYOUT_LMA_BASE_PAY),
            lma_pay_amt_10p=resolve_number(row, h.PAYOUT_LMA_PAY_10P),
            sopsy_base_pay_amt_18p=resolve_number(row, h.PAYOUT_SOPSY_PAY_18P),
            gtnl_base_pay_amt_6p=resolve_number(row, h.PAYOUT_GTNL_PAY_6P),
            u25_base_amt=resolve_number(row, h.PAYOUT_U25_BASE),
            final_base_pay_amt=resolve_number(row, h.PAYOUT_FINAL_BASE_PAY),
            tds=resolve_number(row, h.PAYOUT_TDS),
            final_base_amount=resolve_number(row, h.PAYOUT_FINAL_BASE_AMOUNT),
            advance=resolve_number(row, h.PAYOUT_ADVANCE),
            total_pay_amount=resolve_number(row, h.PAYOUT_TOTAL_PAY),
            remark=resolve_text(row, h.PAYOUT_REMARK),
        )

    def persist(self, record: PayoutReport) -> None:
        self._payouts.upsert(record)
