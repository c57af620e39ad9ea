"""
app/clients/referral_card.py

Purpose: Refer & Earn component

- Builds the shareable link {origin}/auth?ref={code}
- Copies it to a clipboard with a transient "copied" flag
- Shows rewards earned so far
"""

import asyncio
from typing import Any, Dict, Optional, Protocol

from app.clients.notifications import NotificationCenter
from app.core.logging import get_logger
from app.services.referral_service import build_referral_link
from utils.constants import (
    COPIED_RESET_SECONDS,
    CURRENCY_SYMBOL,
    REFERRAL_COPIED_TITLE,
    REFERRAL_COPIED_MESSAGE,
    REFERRAL_COPY_FAILED_TITLE,
    REFERRAL_COPY_FAILED_MESSAGE,
)

logger = get_logger(__name__)


class Clipboard(Protocol):
    async def write_text(self, text: str) -> None: ...


class ReferralCard:
    def __init__(
        self,
        user: Optional[Dict[str, Any]],
        origin: str,
        clipboard: Clipboard,
        notifier: NotificationCenter,
        reset_after: float = COPIED_RESET_SECONDS,
    ):
        self.user: Dict[str, Any] = dict(user or {})
        self.origin = origin
        self.clipboard = clipboard
        self.notifier = notifier
        self.reset_after = reset_after
        self.copied = False
        self._reset_handle: Optional[asyncio.TimerHandle] = None

    @property
    def referral_code(self) -> Optional[str]:
        return self.user.get("referral_code")

    @property
    def referral_link(self) -> str:
        return build_referral_link(self.origin, self.referral_code)

    @property
    def rewards_display(self) -> str:
        return f"{CURRENCY_SYMBOL}{self.user.get('referral_rewards') or 0}"

    async def copy_to_clipboard(self) -> bool:
        """
        Writes the referral link to the clipboard.

        Returns:
            True if the link was copied
        """
        try:
            await self.clipboard.write_text(self.referral_link)
        except Exception as e:
            logger.warning(f"Clipboard write failed: {e}", exc_info=True)
            self.notifier.notify(
                REFERRAL_COPY_FAILED_TITLE,
                REFERRAL_COPY_FAILED_MESSAGE,
                variant="destructive",
            )
            return False

        self.copied = True
        self.notifier.notify(REFERRAL_COPIED_TITLE, REFERRAL_COPIED_MESSAGE)
        self._schedule_reset()
        return True

    def _schedule_reset(self):
        if self._reset_handle is not None:
            self._reset_handle.cancel()
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(self.reset_after, self._clear_copied)

    def _clear_copied(self):
        self.copied = False
        self._reset_handle = None
