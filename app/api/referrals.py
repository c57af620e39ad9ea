"""
app/api/referrals.py

Purpose: Referral summary for the referral card

- GET /referral  code, shareable link, rewards earned, users referred
"""

from fastapi import APIRouter, Depends, Request

from app.api.deps import get_current_user
from app.core.config import settings
from app.db.provider import get_storage
from app.db.storage import Storage
from app.models.user import User
from app.schemas.referral import ReferralSummary
from app.services import referral_service

router = APIRouter()


@router.get("/referral", response_model=ReferralSummary)
async def referral_summary(
    request: Request,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    origin = settings.PUBLIC_ORIGIN or str(request.base_url)
    return ReferralSummary(
        referral_code=user.referral_code,
        referral_link=referral_service.build_referral_link(origin, user.referral_code),
        referral_rewards=user.referral_rewards,
        referred_users=await referral_service.count_referred_users(storage, user.id),
    )
