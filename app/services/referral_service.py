"""
app/services/referral_service.py

Purpose: Referral links and reward accounting

- Builds shareable sign-up links from an origin and a referral code
- Credits the referrer when a referred user registers
- Summarizes a user's referral standing
"""

from typing import Optional

from app.core.config import settings
from app.core.logging import get_logger, LogContext
from app.db.storage import Storage
from app.models.user import User
from utils.constants import REFERRAL_PATH, REFERRAL_QUERY_PARAM

logger = get_logger(__name__)


def build_referral_link(origin: str, referral_code: Optional[str]) -> str:
    """
    Builds "{origin}/auth?ref={code}".

    The origin loses any trailing slash; the code is embedded exactly as
    given (codes are uppercase alphanumeric, so no escaping is needed).
    """
    origin = origin.rstrip("/")
    return f"{origin}{REFERRAL_PATH}?{REFERRAL_QUERY_PARAM}={referral_code or ''}"


async def find_referrer(storage: Storage, referral_code: Optional[str]) -> Optional[User]:
    """
    Looks up the owner of a referral code. Unknown or empty codes give None.
    """
    if not referral_code:
        return None

    referrer = await storage.get_user_by_referral_code(referral_code.strip().upper())
    if not referrer:
        logger.warning(f"Unknown referral code used at sign-up: {referral_code}")
    return referrer


async def credit_referrer(storage: Storage, referrer_id: int, referred_user_id: int) -> Optional[User]:
    """
    Adds REFERRAL_REWARD_AMOUNT to the referrer's rewards.

    Returns:
        Updated referrer, or None if the referrer no longer exists
    """
    with LogContext(user_id=referrer_id):
        referrer = await storage.add_referral_reward(referrer_id, settings.REFERRAL_REWARD_AMOUNT)
        if referrer:
            logger.info(
                f"Referral reward of {settings.REFERRAL_REWARD_AMOUNT} credited "
                f"for new user {referred_user_id}"
            )
        else:
            logger.warning(f"Referrer {referrer_id} not found, no reward credited")
        return referrer


async def count_referred_users(storage: Storage, user_id: int) -> int:
    users = await storage.get_users()
    return sum(1 for u in users if u.referred_by == user_id)
