from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyReport, DailyReportTotals


class DailyReportRepository(Protocol):
    def upsert(self, report: DailyReport) -> None:
        """Insert or overwrite the report for (fhr_id, report_date)."""

        raise NotImplementedError

    def list_for_user_between(self, *, user_id: int, start: date, end: date) -> Sequence[DailyReport]:
        raise NotImplementedError

    def list_for_date(self, *, report_date: Optional[date] = None, hub_name: Optional[str] = None) -> Sequence[DailyReport]:
        raise NotImplementedError

    def totals(self, *, report_date: Optional[date] = None, hub_name: Optional[str] = None) -> DailyReportTotals:
        raise NotImplementedError
