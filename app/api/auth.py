"""
app/api/auth.py

Purpose: Registration, login and session endpoints

- POST /register  creates an account (optionally referred) and logs in
- POST /login     verifies credentials and starts a session
- POST /logout    ends the current session
- GET  /user      returns the logged-in user
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_current_user, get_session_token
from app.core.config import settings
from app.core.logging import get_logger
from app.db.provider import get_storage
from app.db.storage import Storage
from app.models.user import User
from app.schemas.response import MessageResponse
from app.schemas.user import RegisterRequest, LoginRequest, PublicUser
from app.services import user_service
from app.services.session_service import get_session_store

logger = get_logger(__name__)
router = APIRouter()


def _start_session(response: Response, user: User) -> str:
    token = get_session_store().create(user.id)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TIMEOUT_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    response.headers["X-Session-Token"] = token
    return token


@router.post("/register", response_model=PublicUser, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
):
    """
    Creates an account and logs the new user in.

    A ``referral_code`` in the body credits the referring user.
    """
    user = await user_service.register_user(storage, payload)
    _start_session(response, user)
    return user_service.to_public(user)


@router.post("/login", response_model=PublicUser)
async def login(
    payload: LoginRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
):
    user = await user_service.authenticate(storage, payload.username, payload.password)
    _start_session(response, user)
    return user_service.to_public(user)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, token: Optional[str] = Depends(get_session_token)):
    get_session_store().destroy(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out")


@router.get("/user", response_model=PublicUser)
async def current_user(user: User = Depends(get_current_user)):
    return user_service.to_public(user)
