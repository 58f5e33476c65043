from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..core.constants import DEFAULT_OTP_TTL_SECONDS, OTP_LENGTH
from .datetime_utils import now_local


@dataclass(frozen=True)
class OtpEntry:
    code: str
    expires_at: datetime


class OtpStore:
    """Keyed one-time codes with TTL eviction.

    Injected through the container instead of living in a module-level dict, so
    tests can own a store and a clock. An entry is dropped once verified or once
    ``expires_at`` has passed.
    """

    def __init__(
        self,
        *,
        ttl_seconds: int = DEFAULT_OTP_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._ttl = timedelta(seconds=int(ttl_seconds))
        self._clock = clock or now_local
        self._entries: dict[str, OtpEntry] = {}
        self._lock = threading.Lock()

    def issue(self, key: str) -> str:
        code = "".join(secrets.choice("0123456789") for _ in range(OTP_LENGTH))
        with self._lock:
            self._entries[key] = OtpEntry(code=code, expires_at=self._clock() + self._ttl)
        return code

    def peek(self, key: str) -> Optional[OtpEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry and entry.expires_at <= self._clock():
                del self._entries[key]
                return None
            return entry

    def verify(self, key: str, code: str) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if not entry:
                return False
            if entry.expires_at <= self._clock():
                del self._entries[key]
                return False
            if not secrets.compare_digest(entry.code, str(code or "").strip()):
                return False
            del self._entries[key]
            return True

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [k for k, e in self._entries.items() if e.expires_at <= now]
            for k in expired:
                del self._entries[k]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
