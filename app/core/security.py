"""
app/core/security.py

Purpose: Credential and token helpers

- scrypt password hashing (stored as "<hash>.<salt>" hex)
- Constant-time password verification
- Referral code and session token generation
"""

import hashlib
import hmac
import secrets
import string

SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 1
KEY_LENGTH = 64

REFERRAL_ALPHABET = string.ascii_uppercase + string.digits


def _scrypt(password: str, salt: bytes) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=SCRYPT_N,
        r=SCRYPT_R,
        p=SCRYPT_P,
        dklen=KEY_LENGTH,
    )


def hash_password(password: str) -> str:
    """
    Hashes a password with a fresh 16-byte salt.

    Args:
        password: Plain text password

    Returns:
        "<hash hex>.<salt hex>"
    """
    salt = secrets.token_bytes(16)
    return f"{_scrypt(password, salt).hex()}.{salt.hex()}"


def verify_password(password: str, stored: str) -> bool:
    """
    Checks a plain password against a stored "<hash>.<salt>" string.
    Malformed stored values never verify.
    """
    if not stored or "." not in stored:
        return False

    hashed_hex, salt_hex = stored.split(".", 1)
    try:
        expected = bytes.fromhex(hashed_hex)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False

    return hmac.compare_digest(_scrypt(password, salt), expected)


def generate_referral_code(length: int = 8) -> str:
    """Random uppercase alphanumeric referral code."""
    return "".join(secrets.choice(REFERRAL_ALPHABET) for _ in range(length))


def generate_session_token() -> str:
    return secrets.token_urlsafe(32)
