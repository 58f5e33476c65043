from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class DailyReport:
    """One employee's delivery/pickup counters for one calendar day.

    Unique per (fhr_id, report_date); re-uploading the same day overwrites it.
    """

    user_id: int
    fhr_id: str
    report_date: date
    hub_name: str = ""
    ofd: int = 0
    ofp: int = 0
    delivered: int = 0
    picked: int = 0
    uploaded_by: Optional[int] = None
    report_id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.report_id,
            "userId": self.user_id,
            "fhrId": self.fhr_id,
            "reportDate": self.report_date.isoformat(),
            "hubName": self.hub_name,
            "ofd": self.ofd,
            "ofp": self.ofp,
            "delivered": self.delivered,
            "picked": self.picked,
        }


@dataclass(frozen=True)
class DailyReportTotals:
    ofd: int
    ofp: int
    delivered: int
    picked: int

    @property
    def delivery_success(self) -> str:
        rate = (self.delivered / self.ofd * 100) if self.ofd > 0 else 0
        return f"{rate:.2f}%"
