from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..users.repository import UserRepository
from .model import Notification
from .repository import NotificationRepository, NotificationSink, PushGateway, RealtimeGateway

logger = logging.getLogger(__name__)


class NotificationService(NotificationSink):
    """In-app storage, then real-time and push fan-out.

    ``notify`` never raises: a failed delivery must not fail the business
    operation that triggered it, so errors are logged and None is returned.
    """

    def __init__(
        self,
        notifications: NotificationRepository,
        users: UserRepository,
        *,
        push: Optional[PushGateway] = None,
        realtime: Optional[RealtimeGateway] = None,
    ):
        self._notifications = notifications
        self._users = users
        self._push = push
        self._realtime = realtime

    def notify(self, user_id: int, title: str, message: str) -> Optional[Notification]:
        try:
            notification = self._notifications.create(user_id=int(user_id), title=title, message=message)
        except Exception:
            logger.exception("Failed to store notification for user %s", user_id)
            return None

        if self._realtime:
            try:
                self._realtime.emit(int(user_id), notification)
            except Exception:
                logger.warning("Real-time delivery failed for user %s", user_id, exc_info=True)

        if self._push:
            try:
                user = self._users.get_by_id(int(user_id))
                if user and user.fcm_token:
                    self._push.push(token=user.fcm_token, title=title, body=message)
            except Exception:
                logger.warning("Push delivery failed for user %s", user_id, exc_info=True)

        return notification

    def list_for_user(self, user_id: int, *, unread_only: bool = False) -> Sequence[Notification]:
        return self._notifications.list_for_user(int(user_id), unread_only=unread_only)

    def mark_read(self, *, notification_id: int, user_id: int) -> bool:
        return self._notifications.mark_read(notification_id=int(notification_id), user_id=int(user_id))


def safe_notify(sink: Optional[NotificationSink], user_id: int, title: str, message: str) -> Optional[Notification]:
    """Call any sink without letting its failure escape to the caller."""
    if sink is None:
        return None
    try:
        return sink.notify(user_id, title, message)
    except Exception:
        logger.warning("Notification to user %s dropped: %s", user_id, title, exc_info=True)
        return None
