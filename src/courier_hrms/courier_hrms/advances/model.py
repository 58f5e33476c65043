from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class AdvanceRequest:
    """An employee's ask for a salary advance.

    Only Approved requests whose ``approved_at`` falls inside a payout month
    are deducted from that month's payout.
    """

    request_id: int
    user_id: int
    amount: float
    reason: str
    status: RequestStatus
    created_at: datetime
    admin_remarks: Optional[str] = None
    approved_at: Optional[datetime] = None
    hub_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "userId": self.user_id,
            "amount": self.amount,
            "reason": self.reason,
            "status": self.status.value,
            "adminRemarks": self.admin_remarks,
            "approvedAt": self.approved_at.isoformat() if self.approved_at else None,
            "hubName": self.hub_name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
