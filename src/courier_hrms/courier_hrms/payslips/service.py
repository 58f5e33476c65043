from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.enums import PayoutStatus
from ..core.exceptions import NotFoundError, ValidationError
from .model import Payslip
from .repository import PayslipRepository

logger = logging.getLogger(__name__)


def check_transition(current: PayoutStatus, target: PayoutStatus) -> None:
    """Payout/payslip status only moves one step forward: Generated -> Approved -> Paid."""
    if current.next_allowed() != target:
        raise ValidationError(f"Cannot move from {current.value} to {target.value}")


class PayslipService:
    def __init__(self, payslips: PayslipRepository):
        self._payslips = payslips

    def list_slips(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[Payslip]:
        return self._payslips.list_slips(month=month, year=year, user_id=user_id)

    def get(self, payslip_id: int, *, user_id: Optional[int] = None) -> Payslip:
        slip = self._payslips.get(int(payslip_id))
        # Employees only see their own slips.
        if not slip or (user_id is not None and slip.user_id != int(user_id)):
            raise NotFoundError("Payslip not found")
        return slip

    def set_status(self, payslip_id: int, status: str) -> Payslip:
        try:
            target = PayoutStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown status {status!r}")
        slip = self.get(payslip_id)
        check_transition(slip.status, target)
        self._payslips.set_status(int(payslip_id), status=target)
        logger.info("Payslip %s moved %s -> %s", payslip_id, slip.status.value, target.value)
        return self.get(payslip_id)
