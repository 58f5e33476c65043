from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, Sequence

from ..core.enums import PayoutStatus
from .model import Payslip


class PayslipRepository(Protocol):
    def upsert(self, payslip: Payslip) -> None:
        """Insert or overwrite the slip for (fhr_id, month, year)."""

        raise NotImplementedError

    def get(self, payslip_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def list_slips(self, *, month: Optional[int] = None, year: Optional[int] = None, user_id: Optional[int] = None) -> Sequence[Payslip]:
        raise NotImplementedError

    def set_status(self, payslip_id: int, *, status: PayoutStatus) -> bool:
        raise NotImplementedError


class PayslipRenderer(Protocol):
    """Produces the PDF for a slip and returns where it was written."""

    def render(self, payslip: Payslip) -> Path:
        raise NotImplementedError
