from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from werkzeug.security import check_password_hash

from ..common.otp_store import OtpStore
from ..common.validators import require_non_empty
from ..core.enums import AccountStatus, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import Employee
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role
    fhr_id: Optional[str]

    @classmethod
    def of(cls, user: Employee) -> "SessionUser":
        return cls(user_id=user.user_id, full_name=user.full_name, role=user.role, fhr_id=user.fhr_id)


class AuthService:
    """Use case: authenticate user (password or one-time code)."""

    def __init__(
        self,
        users: UserRepository,
        *,
        otp_store: Optional[OtpStore] = None,
        otp_sender: Optional[Callable[[str, str], None]] = None,
    ):
        self._users = users
        self._otp_store = otp_store if otp_store is not None else OtpStore()
        self._otp_sender = otp_sender

    def authenticate(self, mobile: str, password: str) -> SessionUser:
        mobile = require_non_empty(mobile, "Mobile")
        user = self._users.get_by_mobile(mobile)
        if not user:
            raise AuthenticationError("Invalid mobile number or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except Exception:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False
        if not ok:
            raise AuthenticationError("Invalid mobile number or password")

        if not user.can_login:
            raise AuthenticationError("Account is not active yet")

        return SessionUser.of(user)

    def request_otp(self, mobile: str) -> str:
        """Issue a one-time login code for a known mobile number."""
        mobile = require_non_empty(mobile, "Mobile")
        if not self._users.get_by_mobile(mobile):
            raise NotFoundError("No account found with this mobile number")

        code = self._otp_store.issue(mobile)
        if self._otp_sender:
            self._otp_sender(mobile, code)
        logger.info("OTP issued for mobile ending %s", mobile[-4:])
        return code

    def authenticate_otp(self, mobile: str, code: str) -> SessionUser:
        mobile = require_non_empty(mobile, "Mobile")
        if not self._otp_store.verify(mobile, code):
            raise AuthenticationError("Invalid or expired OTP")

        user = self._users.get_by_mobile(mobile)
        if not user:
            raise NotFoundError("User not found")
        if not user.can_login:
            raise AuthenticationError("Account is not active yet")
        return SessionUser.of(user)


class UserService:
    """Use case: manage identities (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get(self, user_id: int) -> Employee:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def deactivate(self, *, current_role: Role, user_id: int) -> None:
        """Soft delete. Payout and payslip history keeps its snapshot rows."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Access denied")

        user = self.get(user_id)
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deactivated")

        if not self._users.set_status(user.user_id, status=AccountStatus.INACTIVE):
            raise ValidationError("Deactivation failed")
        logger.info("Deactivated user %s (%s)", user.user_id, user.fhr_id or "-")

    def list_pending(self) -> Sequence[Employee]:
        return self._users.list_by_role(Role.PENDING)

    def approve(self, *, current_role: Role, user_id: int) -> Employee:
        """Pending joiner becomes an active employee who can log in."""
        user = self._pending(current_role, user_id)
        self._users.set_lifecycle(user.user_id, role=Role.EMPLOYEE, status=AccountStatus.ACTIVE, approved=True)
        logger.info("Approved joiner %s (%s)", user.user_id, user.fhr_id or "-")
        return self.get(user.user_id)

    def reject(self, *, current_role: Role, user_id: int) -> Employee:
        user = self._pending(current_role, user_id)
        self._users.set_lifecycle(user.user_id, role=Role.REJECTED, status=AccountStatus.REJECTED, approved=False)
        logger.info("Rejected joiner %s", user.user_id)
        return self.get(user.user_id)

    def _pending(self, current_role: Role, user_id: int) -> Employee:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Access denied")
        user = self.get(user_id)
        if user.role != Role.PENDING:
            raise ValidationError("Request already processed")
        return user
