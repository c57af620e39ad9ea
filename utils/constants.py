"""
utils/constants.py

Purpose: Centralized static content

- Order and payment status vocabularies
- User-facing notification texts (profile and referral cards)
- Role names

(Prevents hardcoding across the codebase)
"""

# ============================================================
# ROLES
# ============================================================

ROLE_USER = "user"
ROLE_ADMIN = "admin"

# ============================================================
# ORDER LIFECYCLE
# ============================================================

ORDER_STATUS_PENDING = "pending"
ORDER_STATUSES = ("pending", "processing", "completed", "cancelled")

PAYMENT_STATUS_PENDING = "pending"
PAYMENT_STATUSES = ("pending", "paid", "failed", "refunded")

# ============================================================
# PROFILE CARD
# ============================================================

PROFILE_ENDPOINT = "/api/user/profile"
PHONE_NOT_PROVIDED = "Not provided"

PROFILE_UPDATED_TITLE = "Profile Updated"
PROFILE_UPDATED_MESSAGE = "Your profile has been successfully updated."

PROFILE_UPDATE_FAILED_TITLE = "Update Failed"
PROFILE_UPDATE_FAILED_MESSAGE = "Failed to update profile. Please try again."

# ============================================================
# REFERRAL CARD
# ============================================================

REFERRAL_PATH = "/auth"
REFERRAL_QUERY_PARAM = "ref"
CURRENCY_SYMBOL = "₹"

COPIED_RESET_SECONDS = 2.0

REFERRAL_COPIED_TITLE = "Copied!"
REFERRAL_COPIED_MESSAGE = "Referral link copied to clipboard"

REFERRAL_COPY_FAILED_TITLE = "Error"
REFERRAL_COPY_FAILED_MESSAGE = "Failed to copy referral link"
