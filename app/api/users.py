"""
app/api/users.py

Purpose: Profile endpoint used by the profile card

- PUT /user/profile  replaces name, email and phone of the current user
"""

from fastapi import APIRouter, Depends

from app.api.deps import get_current_user
from app.db.provider import get_storage
from app.db.storage import Storage
from app.models.user import User
from app.schemas.user import ProfileUpdate, PublicUser
from app.services import user_service

router = APIRouter()


@router.put("/user/profile", response_model=PublicUser)
async def update_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    updated = await user_service.update_profile(storage, user.id, payload)
    return user_service.to_public(updated)
