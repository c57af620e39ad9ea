"""
app/schemas/user.py

Purpose: Request/response schemas for auth and profile endpoints

- Registration and login payloads
- Profile update payload (name, email, phone)
- Public user view (never exposes the password hash)
"""

from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime

from app.models.user import Role
from utils.validation_utils import (
    validate_email,
    validate_username,
    validate_phone_number,
    normalize_phone_number,
    sanitize_input,
)


def _check_email(v: str) -> str:
    v = v.strip()
    if not validate_email(v):
        raise ValueError("Invalid email address")
    return v


def _clean_name(v: str) -> str:
    v = sanitize_input(v, max_length=80)
    if len(v) < 2:
        raise ValueError("Name must be at least 2 characters")
    return v


def _check_phone(v: Optional[str]) -> Optional[str]:
    v = normalize_phone_number(v)
    if v is not None and not validate_phone_number(v):
        raise ValueError("Invalid Indian mobile number")
    return v


class RegisterRequest(BaseModel):
    username: str
    password: str = Field(..., min_length=6, max_length=128)
    name: str = Field(..., min_length=2, max_length=80)
    email: str
    phone: Optional[str] = None
    address: Optional[str] = Field(None, max_length=300)
    referral_code: Optional[str] = Field(
        None,
        description="Referral code of the user who invited this one"
    )

    @validator("username")
    def check_username(cls, v):
        if not validate_username(v):
            raise ValueError("Username must be 3-32 letters, digits, '_', '.' or '-'")
        return v

    @validator("name")
    def clean_name(cls, v):
        return _clean_name(v)

    @validator("email")
    def check_email(cls, v):
        return _check_email(v)

    @validator("phone")
    def check_phone(cls, v):
        return _check_phone(v)

    class Config:
        json_schema_extra = {
            "example": {
                "username": "ramesh",
                "password": "secret123",
                "name": "Ramesh Kumar",
                "email": "ramesh@example.com",
                "phone": "9876543210",
                "referral_code": "AB12CD34"
            }
        }


class LoginRequest(BaseModel):
    username: str
    password: str


class ProfileUpdate(BaseModel):
    """
    Body of PUT /api/user/profile. The profile card always sends all three
    fields; an empty phone clears it.
    """
    name: str = Field(..., min_length=2, max_length=80)
    email: str
    phone: Optional[str] = None

    @validator("name")
    def clean_name(cls, v):
        return _clean_name(v)

    @validator("email")
    def check_email(cls, v):
        return _check_email(v)

    @validator("phone")
    def check_phone(cls, v):
        return _check_phone(v)


class PublicUser(BaseModel):
    id: int
    username: str
    name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    role: Role
    referral_code: str
    referral_rewards: int
    created_at: datetime
