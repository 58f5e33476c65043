from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    HR = "hr"
    EMPLOYEE = "employee"
    PENDING = "pending"
    REJECTED = "rejected"


class AccountStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    PENDING = "Pending"
    SUSPENDED = "Suspended"
    REJECTED = "Rejected"


class RequestStatus(str, Enum):
    """Approval workflow state of an advance request."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class PayoutStatus(str, Enum):
    """Lifecycle of a persisted payout/payslip: Generated -> Approved -> Paid."""

    GENERATED = "Generated"
    APPROVED = "Approved"
    PAID = "Paid"

    def next_allowed(self) -> "PayoutStatus | None":
        order = [PayoutStatus.GENERATED, PayoutStatus.APPROVED, PayoutStatus.PAID]
        idx = order.index(self)
        return order[idx + 1] if idx + 1 < len(order) else None


class FailureReason(str, Enum):
    """Per-row failure tags reported by the salary slip upload."""

    NOT_FOUND = "Not Found"
    DUPLICATE_ENTRY = "Duplicate Entry"
    GENERATION_ERROR = "Generation Error"
    MISSING_IDENTIFIER = "Missing Identifier"
    PERSISTENCE_ERROR = "Persistence Error"
