"""
Database initialization script - MongoDB backend

Creates indexes and seeds the service catalog and demo users:
    python scripts/init_db.py
    python scripts/init_db.py --no-demo-users
"""

import argparse
import asyncio
import sys
from pathlib import Path
import os
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables
load_dotenv()

from motor.motor_asyncio import AsyncIOMotorClient
import logging

from app.db.indexes import create_indexes
from app.db.mongo_storage import MongoStorage
from app.db.seed import seed_services, seed_demo_users

logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
logger = logging.getLogger(__name__)


MONGODB_URL = os.getenv("MONGODB_URL")
MONGODB_DB_NAME = os.getenv("MONGODB_DB_NAME")


async def init_db(with_demo_users: bool = True):
    """Create indexes, then seed catalog (and optionally demo accounts)"""

    logger.info(f"Connecting to MongoDB: {MONGODB_DB_NAME}")
    client = AsyncIOMotorClient(MONGODB_URL, tz_aware=True)
    db = client[MONGODB_DB_NAME]

    try:
        await client.admin.command('ping')
        logger.info("Connected successfully")

        await create_indexes(db)

        storage = MongoStorage(db)

        inserted = await seed_services(storage)
        logger.info(f"Services inserted: {inserted}")

        if with_demo_users:
            created = await seed_demo_users(storage)
            logger.info("Demo users created" if created else "Demo users already present")

        for name in ("users", "services", "orders"):
            count = await db[name].count_documents({})
            logger.info(f"  {name}: {count} documents")

    finally:
        client.close()
        logger.info("Connection closed")


def main():
    parser = argparse.ArgumentParser(description="Initialize the QuickTech MongoDB database")
    parser.add_argument("--no-demo-users", action="store_true", help="Skip demo user accounts")
    args = parser.parse_args()

    if not MONGODB_URL or not MONGODB_DB_NAME:
        raise SystemExit("MONGODB_URL and MONGODB_DB_NAME must be set in .env file")

    asyncio.run(init_db(with_demo_users=not args.no_demo_users))


if __name__ == "__main__":
    main()
