"""
utils/time_utils.py

Purpose: Time and expiry helpers

- Timezone-aware "now"
- Session TTL calculations
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Current UTC time (timezone-aware).
    """
    return datetime.now(timezone.utc)


def is_session_expired(last_seen: Optional[datetime], timeout_minutes: int = 30, now: Optional[datetime] = None) -> bool:
    """
    Checks if a session has expired based on its last activity time.
    """
    if not last_seen:
        return True

    expiry_time = last_seen + timedelta(minutes=timeout_minutes)
    return (now or utcnow()) > expiry_time
