from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_positive_amount
from ..core.constants import ADVANCE_DECIDED_TITLE, ADVANCE_REQUEST_TITLE
from ..core.enums import RequestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..notifications.repository import NotificationSink
from ..notifications.service import safe_notify
from ..users.repository import UserRepository
from .model import AdvanceRequest
from .repository import AdvanceRepository

logger = logging.getLogger(__name__)


class AdvanceService:
    def __init__(self, advances: AdvanceRepository, users: UserRepository, notifier: Optional[NotificationSink] = None):
        self._advances = advances
        self._users = users
        self._notifier = notifier

    def create(self, *, user_id: int, amount, reason: str = "") -> AdvanceRequest:
        value = require_positive_amount(amount)
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("User not found")

        request_id = self._advances.create(
            user_id=user.user_id,
            amount=value,
            reason=(reason or "").strip(),
            hub_name=user.hub_name,
        )
        logger.info("Advance request %s created by user %s for %.2f", request_id, user.user_id, value)

        for admin in self._users.list_admins():
            safe_notify(
                self._notifier,
                admin.user_id,
                ADVANCE_REQUEST_TITLE,
                f"{user.full_name} requested an advance of Rs.{value:g}.",
            )
        return self._get(request_id)

    def decide(
        self,
        *,
        request_id: int,
        status: str,
        admin_remarks: str = "",
        now: Optional[datetime] = None,
    ) -> AdvanceRequest:
        try:
            decision = RequestStatus(status)
        except ValueError:
            raise ValidationError("Status must be Approved or Rejected")
        if decision == RequestStatus.PENDING:
            raise ValidationError("Status must be Approved or Rejected")

        req = self._get(request_id)
        remarks = (admin_remarks or "").strip() or None
        approved_at = (now or now_local()) if decision == RequestStatus.APPROVED else None

        self._advances.decide(
            request_id=req.request_id,
            status=decision,
            admin_remarks=remarks,
            approved_at=approved_at,
        )
        logger.info("Advance request %s %s", req.request_id, decision.value.lower())

        message = f"Your advance request of Rs.{req.amount:g} has been {decision.value.lower()}."
        if remarks:
            message += f" Remarks: {remarks}"
        safe_notify(self._notifier, req.user_id, ADVANCE_DECIDED_TITLE.format(status=decision.value), message)
        return self._get(req.request_id)

    def list_requests(self, *, user_id: Optional[int] = None, status: Optional[str] = None) -> Sequence[AdvanceRequest]:
        try:
            status_filter = RequestStatus(status) if status else None
        except ValueError:
            raise ValidationError(f"Unknown status {status!r}")
        return self._advances.list_requests(user_id=user_id, status=status_filter)

    def _get(self, request_id: int) -> AdvanceRequest:
        req = self._advances.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("Advance request not found")
        return req
