from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Dict, Optional

from vinheria.core.config import settings
from vinheria.core.exceptions import InvalidSession
from vinheria.core.security import new_session_handle
from vinheria.services.credential_verifier import VerifiedIdentity

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SessionRecord:
    subject: VerifiedIdentity
    issued_at: datetime
    expires_at: datetime


class SessionManager:
    """Process-scoped table of live sessions keyed by random handles.

    Lifetimes are fixed: validating a session never pushes back its expiry.
    Expired entries are rejected on every lookup, so purge_expired() only
    reclaims memory.
    """

    def __init__(
        self,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._ttl = ttl if ttl is not None else timedelta(minutes=settings.SESSION_TTL_MINUTES)
        self._clock = clock
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = Lock()

    def create(self, identity: VerifiedIdentity) -> str:
        issued_at = self._clock()
        record = SessionRecord(
            subject=identity,
            issued_at=issued_at,
            expires_at=issued_at + self._ttl,
        )
        with self._lock:
            handle = new_session_handle()
            while handle in self._sessions:
                handle = new_session_handle()
            self._sessions[handle] = record
        logger.info(f"Session opened for user {identity.user_id}")
        return handle

    def get(self, handle: Optional[str]) -> SessionRecord:
        """Return the live record behind a handle"""
        if not handle:
            raise InvalidSession()
        now = self._clock()
        with self._lock:
            record = self._sessions.get(handle)
            if record is None:
                raise InvalidSession()
            if now >= record.expires_at:
                self._sessions.pop(handle, None)
                raise InvalidSession()
        return record

    def validate(self, handle: Optional[str]) -> VerifiedIdentity:
        return self.get(handle).subject

    def destroy(self, handle: Optional[str]) -> None:
        if not handle:
            return
        with self._lock:
            record = self._sessions.pop(handle, None)
        if record is not None:
            logger.info(f"Session closed for user {record.subject.user_id}")

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [key for key, record in self._sessions.items() if now >= record.expires_at]
            for key in expired:
                del self._sessions[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


session_manager = SessionManager()
