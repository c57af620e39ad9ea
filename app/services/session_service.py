"""
app/services/session_service.py

Purpose: Login session management

- Issues opaque session tokens after login/registration
- Tracks last activity time per session
- Handles session expiry and periodic pruning
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from app.core.config import settings
from app.core.logging import get_logger
from app.core.security import generate_session_token
from utils.time_utils import utcnow, is_session_expired

logger = get_logger(__name__)


@dataclass
class Session:
    user_id: int
    created_at: datetime
    last_seen: datetime


class SessionStore:
    """
    In-memory token -> Session map. Sessions expire after
    ``timeout_minutes`` of inactivity.
    """

    def __init__(self, timeout_minutes: Optional[int] = None):
        self.timeout_minutes = timeout_minutes or settings.SESSION_TIMEOUT_MINUTES
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, user_id: int) -> str:
        """
        Starts a session for a user.

        Returns:
            The session token
        """
        token = generate_session_token()
        now = utcnow()
        self._sessions[token] = Session(user_id=user_id, created_at=now, last_seen=now)
        logger.debug("Session created", extra={"user_id": user_id})
        return token

    def resolve(self, token: Optional[str]) -> Optional[int]:
        """
        Returns the user id behind a live session and refreshes its activity
        time. Expired sessions are dropped.
        """
        if not token:
            return None

        session = self._sessions.get(token)
        if not session:
            return None

        now = utcnow()
        if is_session_expired(session.last_seen, self.timeout_minutes, now=now):
            del self._sessions[token]
            logger.info("Session expired", extra={"user_id": session.user_id})
            return None

        session.last_seen = now
        return session.user_id

    def destroy(self, token: Optional[str]) -> bool:
        if not token:
            return False
        return self._sessions.pop(token, None) is not None

    def prune_expired(self) -> int:
        """
        Removes every expired session.

        Returns:
            Number of sessions removed
        """
        now = utcnow()
        expired = [
            token for token, session in self._sessions.items()
            if is_session_expired(session.last_seen, self.timeout_minutes, now=now)
        ]
        for token in expired:
            del self._sessions[token]

        if expired:
            logger.info(f"Pruned {len(expired)} expired sessions")
        return len(expired)


_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    global _session_store
    if _session_store is None:
        _session_store = SessionStore()
    return _session_store


def reset_session_store():
    """Drops all sessions (startup and tests)."""
    global _session_store
    _session_store = SessionStore()


async def prune_sessions_periodically(interval_seconds: float = 24 * 60 * 60):
    """
    Background loop that prunes expired sessions every ``interval_seconds``.
    Runs until cancelled.
    """
    while True:
        await asyncio.sleep(interval_seconds)
        get_session_store().prune_expired()
