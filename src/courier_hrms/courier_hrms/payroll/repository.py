from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import PayoutStatus
from .model import MonthlyPayout, SalaryStructure


class SalaryStructureRepository(Protocol):
    def get(self, user_id: int) -> Optional[SalaryStructure]:
        raise NotImplementedError

    def upsert(self, structure: SalaryStructure) -> None:
        raise NotImplementedError


class MonthlyPayoutRepository(Protocol):
    def upsert(self, payout: MonthlyPayout) -> None:
        """Insert or overwrite the figures for (user_id, month, year)."""

        raise NotImplementedError

    def get(self, payout_id: int) -> Optional[MonthlyPayout]:
        raise NotImplementedError

    def list_payouts(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[MonthlyPayout]:
        raise NotImplementedError

    def set_status(self, payout_id: int, *, status: PayoutStatus) -> bool:
        raise NotImplementedError

    def set_remark(self, payout_id: int, *, remark: str) -> bool:
        raise NotImplementedError
