from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import format_report_date
from ..core.constants import DAILY_REPORT_TITLE
from ..notifications.repository import NotificationSink
from ..notifications.service import safe_notify
from ..reports.model import DailyReport
from ..reports.repository import DailyReportRepository
from ..spreadsheets import headers as h
from ..spreadsheets.normalizer import Row, resolve_int, resolve_text
from ..users.model import Employee
from ..users.repository import UserRepository
from .base import IngestionResult, RowIngestionPipeline


@dataclass(frozen=True)
class DailyUpload:
    report_date: date
    uploaded_by: Optional[int] = None


class DailyReportIngestion(RowIngestionPipeline[DailyReport]):
    identity_headers = h.DAILY_IDENTITY

    def __init__(self, users: UserRepository, reports: DailyReportRepository, notifier: Optional[NotificationSink] = None):
        super().__init__(users)
        self._reports = reports
        self._notifier = notifier

    def ingest(self, rows: Iterable[Row], report_date: date, uploaded_by: Optional[int] = None) -> IngestionResult:
        return self.run(rows, DailyUpload(report_date=report_date, uploaded_by=uploaded_by))

    def build_record(self, row: Row, employee: Employee, context: DailyUpload) -> DailyReport:
        return DailyReport(
            user_id=employee.user_id,
            fhr_id=employee.fhr_id or resolve_text(row, self.identity_headers),
            report_date=context.report_date,
            hub_name=resolve_text(row, h.DAILY_HUB) or employee.hub_name or "",
            ofd=resolve_int(row, h.DAILY_OFD),
            ofp=resolve_int(row, h.DAILY_OFP),
            delivered=resolve_int(row, h.DAILY_DELIVERED),
            picked=resolve_int(row, h.DAILY_PICKED),
            uploaded_by=context.uploaded_by,
        )

    def persist(self, record: DailyReport) -> None:
        self._reports.upsert(record)

    def after_persist(self, record: DailyReport, employee: Employee, context: DailyUpload) -> None:
        safe_notify(
            self._notifier,
            employee.user_id,
            DAILY_REPORT_TITLE,
            f"Your performance report for {format_report_date(record.report_date)} has been uploaded. "
            f"Delivered: {record.delivered}, OFD: {record.ofd}.",
        )
