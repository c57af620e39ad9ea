"""
app/clients/profile_card.py

Purpose: Profile editor component

- Holds an editable copy of name, email and phone
- Saves with a single PUT /api/user/profile
- Success: notify, leave edit mode, show the saved values
- Failure: notify, keep edit mode open and the displayed values unchanged
"""

from typing import Any, Dict, Optional

import httpx

from app.clients.notifications import NotificationCenter
from app.core.logging import get_logger
from utils.constants import (
    PROFILE_ENDPOINT,
    PHONE_NOT_PROVIDED,
    PROFILE_UPDATED_TITLE,
    PROFILE_UPDATED_MESSAGE,
    PROFILE_UPDATE_FAILED_TITLE,
    PROFILE_UPDATE_FAILED_MESSAGE,
)

logger = get_logger(__name__)

FORM_FIELDS = ("name", "email", "phone")


class ProfileCard:
    """
    Profile details card.

    ``user`` is the logged-in user as returned by ``GET /api/user``;
    ``client`` is an httpx.AsyncClient pointed at the site origin.
    """

    def __init__(self, user: Optional[Dict[str, Any]], client: httpx.AsyncClient, notifier: NotificationCenter):
        self.user: Dict[str, Any] = dict(user or {})
        self.client = client
        self.notifier = notifier
        self.is_editing = False
        self.form_data = self._form_from_user()

    def _form_from_user(self) -> Dict[str, str]:
        return {name: self.user.get(name) or "" for name in FORM_FIELDS}

    def display_values(self) -> Dict[str, str]:
        """What the card shows when not editing."""
        return {
            "name": self.user.get("name") or "",
            "email": self.user.get("email") or "",
            "phone": self.user.get("phone") or PHONE_NOT_PROVIDED,
        }

    def start_editing(self):
        self.is_editing = True

    def update_field(self, field: str, value: str):
        if field not in FORM_FIELDS:
            raise KeyError(f"Unknown profile field: {field}")
        self.form_data = {**self.form_data, field: value}

    def cancel(self):
        """Leave edit mode and discard unsaved edits."""
        self.is_editing = False
        self.form_data = self._form_from_user()

    async def save(self) -> bool:
        """
        Sends the form to the API once. No retry.

        Returns:
            True if the profile was saved
        """
        try:
            response = await self.client.put(PROFILE_ENDPOINT, json=dict(self.form_data))
        except httpx.HTTPError as e:
            logger.warning(f"Profile update request failed: {e}")
            return self._save_failed()

        if not response.is_success:
            logger.warning(f"Profile update rejected with status {response.status_code}")
            return self._save_failed()

        try:
            saved = response.json()
        except ValueError:
            saved = None

        if isinstance(saved, dict):
            self.user = saved
        else:
            self.user = {**self.user, **self.form_data}

        self.form_data = self._form_from_user()
        self.is_editing = False
        self.notifier.notify(PROFILE_UPDATED_TITLE, PROFILE_UPDATED_MESSAGE)
        return True

    def _save_failed(self) -> bool:
        self.notifier.notify(
            PROFILE_UPDATE_FAILED_TITLE,
            PROFILE_UPDATE_FAILED_MESSAGE,
            variant="destructive",
        )
        return False
