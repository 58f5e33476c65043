from __future__ import annotations

from datetime import date
from typing import Optional

from .repository import DailyReportRepository


class DailyReportService:
    """Read side of daily reports (the write side is the upload pipeline)."""

    def __init__(self, reports: DailyReportRepository):
        self._reports = reports

    def list_for_employee(self, *, user_id: int, start: date, end: date) -> list[dict]:
        return [r.to_dict() for r in self._reports.list_for_user_between(user_id=int(user_id), start=start, end=end)]

    def summary(self, *, report_date: Optional[date] = None, hub_name: Optional[str] = None) -> dict:
        reports = self._reports.list_for_date(report_date=report_date, hub_name=hub_name)
        totals = self._reports.totals(report_date=report_date, hub_name=hub_name)
        return {
            "reports": [r.to_dict() for r in reports],
            "summary": {
                "totalOFD": totals.ofd,
                "totalOFP": totals.ofp,
                "totalDEL": totals.delivered,
                "totalPICK": totals.picked,
                "deliverySuccess": totals.delivery_success,
            },
        }
