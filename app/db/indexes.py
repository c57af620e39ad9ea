"""
app/db/indexes.py

Purpose: Database index management (mongo backend)

- Unique indexes on login and referral identifiers
- Lookup indexes for category and per-user order queries
"""

from pymongo import ASCENDING, DESCENDING

from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(database):
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = database["users"]
        services = database["services"]
        orders = database["orders"]

        logger.info("Creating database indexes...")

        # ==============================================
        # USERS COLLECTION INDEXES
        # ==============================================

        await users.create_index("username_lower", unique=True, name="username_unique")
        logger.debug("Created unique index on users.username_lower")

        await users.create_index("email_lower", unique=True, name="email_unique")
        logger.debug("Created unique index on users.email_lower")

        await users.create_index("referral_code", unique=True, name="referral_code_unique")
        logger.debug("Created unique index on users.referral_code")

        # ==============================================
        # SERVICES COLLECTION INDEXES
        # ==============================================

        await services.create_index(
            [("category", ASCENDING), ("id", ASCENDING)],
            name="category_idx"
        )
        logger.debug("Created compound index on services.category + id")

        # ==============================================
        # ORDERS COLLECTION INDEXES
        # ==============================================

        await orders.create_index(
            [("user_id", ASCENDING), ("id", ASCENDING)],
            name="user_orders_idx"
        )
        logger.debug("Created compound index on orders.user_id + id")

        await orders.create_index(
            [("status", ASCENDING), ("updated_at", DESCENDING)],
            name="status_idx"
        )
        logger.debug("Created compound index on orders.status + updated_at")

        logger.info("All database indexes created successfully")

    except Exception as e:
        logger.error(f"Error creating indexes: {str(e)}", exc_info=True)
        raise
