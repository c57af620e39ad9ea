from pydantic import BaseModel


class ReferralSummary(BaseModel):
    referral_code: str
    referral_link: str
    referral_rewards: int
    referred_users: int
