"""
app/services/user_service.py

Purpose: User account management

- Registration with uniqueness checks and referral attribution
- Credential verification for login
- Profile updates (name, email, phone)
- Public (password-free) user views
"""

from typing import Optional

from app.core.exceptions import AuthenticationError, ConflictError, ResourceNotFoundError
from app.core.logging import get_logger, LogContext
from app.core.security import hash_password, verify_password
from app.db.storage import Storage
from app.models.user import NewUser, User
from app.schemas.user import RegisterRequest, ProfileUpdate, PublicUser
from app.services import referral_service

logger = get_logger(__name__)


def to_public(user: User) -> PublicUser:
    return PublicUser.model_validate(user.model_dump(exclude={"password"}))


async def register_user(storage: Storage, payload: RegisterRequest) -> User:
    """
    Creates a new account.

    Args:
        storage: Active storage
        payload: Validated registration payload

    Returns:
        The created user

    Raises:
        ConflictError: If the username or email is already registered
    """
    if await storage.get_user_by_username(payload.username):
        raise ConflictError("Username already exists")

    if await storage.get_user_by_email(payload.email):
        raise ConflictError("Email already registered")

    referrer = await referral_service.find_referrer(storage, payload.referral_code)

    user = await storage.create_user(NewUser(
        username=payload.username,
        password=hash_password(payload.password),
        name=payload.name,
        email=payload.email,
        phone=payload.phone,
        address=payload.address,
        referred_by=referrer.id if referrer else None,
    ))

    with LogContext(user_id=user.id, username=user.username):
        logger.info("New user registered")

        if referrer:
            await referral_service.credit_referrer(storage, referrer.id, user.id)

    return user


async def authenticate(storage: Storage, username: str, password: str) -> User:
    """
    Verifies a username/password pair.

    Raises:
        AuthenticationError: On unknown user or wrong password
    """
    user = await storage.get_user_by_username(username)
    if not user or not verify_password(password, user.password):
        logger.info("Failed login attempt", extra={"username": username})
        raise AuthenticationError("Invalid username or password")

    logger.info("User logged in", extra={"user_id": user.id})
    return user


async def update_profile(storage: Storage, user_id: int, payload: ProfileUpdate) -> User:
    """
    Replaces the user's name, email and phone.

    Raises:
        ConflictError: If the email belongs to another account
        ResourceNotFoundError: If the user disappeared
    """
    with LogContext(user_id=user_id):
        owner: Optional[User] = await storage.get_user_by_email(payload.email)
        if owner and owner.id != user_id:
            raise ConflictError("Email already registered")

        user = await storage.update_user(
            user_id,
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
        )
        if not user:
            raise ResourceNotFoundError("User not found")

        logger.info("Profile updated")
        return user
