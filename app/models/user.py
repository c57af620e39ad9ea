"""
app/models/user.py

Purpose: User record model

- Login credentials (username + password hash)
- Contact details shown on the profile card
- Role used for admin-only operations
- Referral code and accumulated referral rewards
"""

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime

from utils.constants import ROLE_ADMIN
from utils.time_utils import utcnow

Role = Literal["user", "admin"]


class NewUser(BaseModel):
    """Fields accepted by Storage.create_user."""
    username: str
    password: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    referral_code: Optional[str] = None
    referred_by: Optional[int] = None


class User(BaseModel):
    id: int
    username: str
    password: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Role = "user"
    referral_code: str
    referral_rewards: int = 0
    referred_by: Optional[int] = None
    created_at: datetime = Field(default_factory=utcnow)

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
