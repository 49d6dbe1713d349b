"""
Signed-in sessions.

Sessions live in process memory, keyed by an opaque random token. The store
is created once by the host application and injected into the credentials
provider and the authorization gate.
"""

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Session:
    token: str
    user_id: str
    email: str
    name: str
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or _utcnow()) >= self.expires_at


class SessionStore:
    def __init__(
        self, ttl_seconds: int, clock: Callable[[], datetime] = _utcnow
    ) -> None:
        self.ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._sessions: Dict[str, Session] = {}
        self._lock = threading.Lock()

    def create(self, user_id: str, email: str, name: str) -> Session:
        session = Session(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            email=email,
            name=name,
            expires_at=self._clock() + self.ttl,
        )
        with self._lock:
            self._sessions[session.token] = session
        return session

    def get(self, token: Optional[str]) -> Optional[Session]:
        """Return the live session for `token`; expired ones are dropped."""
        if not token:
            return None
        with self._lock:
            session = self._sessions.get(token)
            if session is not None and session.is_expired(self._clock()):
                del self._sessions[token]
                return None
        return session

    def revoke(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["Session", "SessionStore"]
