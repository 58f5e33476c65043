from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PayoutReport


class PayoutReportRepository(Protocol):
    def upsert(self, report: PayoutReport) -> None:
        """Insert or overwrite the sheet row for (fhr_id, month, year)."""

        raise NotImplementedError

    def list_reports(self, *, month: Optional[int] = None, year: Optional[int] = None, user_id: Optional[int] = None) -> Sequence[PayoutReport]:
        raise NotImplementedError
