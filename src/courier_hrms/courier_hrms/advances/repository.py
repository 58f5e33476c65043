from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import AdvanceRequest


class AdvanceRepository(Protocol):
    def create(self, *, user_id: int, amount: float, reason: str, hub_name: Optional[str] = None) -> int:
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[AdvanceRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 200,
    ) -> Sequence[AdvanceRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        admin_remarks: Optional[str],
        approved_at: Optional[datetime],
    ) -> bool:
        raise NotImplementedError

    def list_approved_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AdvanceRequest]:
        """Approved requests with ``start <= approved_at <= end``."""

        raise NotImplementedError
