from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Notification


class NotificationRepository(Protocol):
    def create(self, *, user_id: int, title: str, message: str) -> Notification:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, unread_only: bool = False, limit: int = 50) -> Sequence[Notification]:
        raise NotImplementedError

    def mark_read(self, *, notification_id: int, user_id: int) -> bool:
        raise NotImplementedError


class NotificationSink(Protocol):
    """The one operation ingestion and payroll need from the fan-out."""

    def notify(self, user_id: int, title: str, message: str) -> Optional[Notification]:
        raise NotImplementedError


class PushGateway(Protocol):
    def push(self, *, token: str, title: str, body: str, data: Optional[dict] = None) -> bool:
        raise NotImplementedError


class RealtimeGateway(Protocol):
    def emit(self, user_id: int, notification: Notification) -> None:
        raise NotImplementedError
