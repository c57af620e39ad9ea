"""
utils/validation_utils.py

Purpose: Input validation

- Email and Indian mobile number formats
- Username rules
- Input sanitization
"""

import re
from typing import Optional


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{3,32}$")


def validate_email(email: str) -> bool:
    """
    Validates basic email format (local@domain.tld).

    Args:
        email: Email address

    Returns:
        True if the address looks valid
    """
    if not email:
        return False

    return bool(EMAIL_PATTERN.match(email.strip()))


def validate_username(username: str) -> bool:
    """
    3-32 characters: letters, digits, underscore, dot or hyphen.
    """
    if not username:
        return False

    return bool(USERNAME_PATTERN.match(username))


def normalize_phone_number(phone: Optional[str]) -> Optional[str]:
    """
    Strips separators and an Indian country code.

    Returns:
        10-digit number, or None for empty input
    """
    if not phone or not phone.strip():
        return None

    phone = re.sub(r"[\s\-\(\)\+]", "", phone)

    if len(phone) == 12 and phone.startswith("91"):
        phone = phone[2:]

    return phone


def validate_phone_number(phone: str) -> bool:
    """
    Validates Indian phone number format.

    Args:
        phone: Phone number string

    Returns:
        True if valid Indian mobile number
    """
    phone = normalize_phone_number(phone)
    if not phone:
        return False

    # Indian mobile format (starts with 6-9, 10 digits total)
    return bool(re.match(r"^[6-9]\d{9}$", phone))


def sanitize_input(text: str, max_length: int = 1000) -> str:
    """
    Sanitizes user input to prevent injection attacks.

    Args:
        text: Input text
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    if not text:
        return ""

    text = text[:max_length]

    # Remove potentially dangerous characters
    text = re.sub(r"[<>{}\[\]]", "", text)

    # Normalize whitespace
    text = " ".join(text.split())

    return text.strip()
