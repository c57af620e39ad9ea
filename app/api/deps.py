"""
app/api/deps.py

Purpose: Shared FastAPI dependencies

- Session token extraction (cookie or Bearer header)
- Current-user resolution
- Admin guard
"""

from typing import Optional

from fastapi import Depends, Request

from app.core.config import settings
from app.core.exceptions import AuthenticationError, PermissionDeniedError
from app.db.provider import get_storage
from app.db.storage import Storage
from app.models.user import User
from app.services.session_service import get_session_store


def get_session_token(request: Request) -> Optional[str]:
    """
    Reads the session token from an ``Authorization: Bearer <token>``
    header, falling back to the session cookie.
    """
    auth_header = request.headers.get("Authorization", "")
    scheme, _, credentials = auth_header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()

    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    storage: Storage = Depends(get_storage),
) -> User:
    user_id = get_session_store().resolve(token)
    if user_id is None:
        raise AuthenticationError("Not authenticated")

    user = await storage.get_user(user_id)
    if not user:
        # Account removed while the session was alive
        get_session_store().destroy(token)
        raise AuthenticationError("Not authenticated")

    return user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise PermissionDeniedError("Admin privileges required")
    return user
