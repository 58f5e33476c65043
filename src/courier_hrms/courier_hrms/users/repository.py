from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AccountStatus, Role
from .model import Employee


class UserRepository(Protocol):
    """Repository interface for the identity store.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_mobile(self, mobile: str) -> Optional[Employee]:
        raise NotImplementedError

    def find_by_fhr_id(self, fhr_id: str) -> Optional[Employee]:
        """Case-insensitive exact match on the stored FHR ID. Never a substring match."""

        raise NotImplementedError

    def list_active_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def list_admins(self) -> Sequence[Employee]:
        raise NotImplementedError

    def set_status(self, user_id: int, *, status: AccountStatus) -> bool:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        raise NotImplementedError

    def set_lifecycle(self, user_id: int, *, role: Role, status: AccountStatus, approved: bool) -> bool:
        """Move an account between pending, employee and rejected in one write."""

        raise NotImplementedError
