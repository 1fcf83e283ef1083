"""
Database initialization script

Run once to create collections and indexes:
    python scripts/init_db.py
"""

import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load environment variables before settings are read
load_dotenv()

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.indexes import create_indexes
from app.db.mongo import (
    ACCOUNTS_COLLECTION,
    SERVICES_COLLECTION,
    CLICKS_COLLECTION,
    connect_to_mongo,
    close_mongo_connection,
    get_database,
)

setup_logging(level="INFO")
logger = get_logger("scripts.init_db")


async def main():
    """Create indexes and report what the database holds"""
    logger.info("=" * 60)
    logger.info("  ServiPro Database Setup")
    logger.info("=" * 60)

    logger.info(f"🔌 Connecting to MongoDB: {settings.MONGODB_DB_NAME}")
    await connect_to_mongo()

    try:
        await create_indexes()
        db = get_database()

        logger.info("🔍 Verifying indexes...")
        for collection_name in (ACCOUNTS_COLLECTION, SERVICES_COLLECTION, CLICKS_COLLECTION):
            collection = db[collection_name]
            indexes = await collection.index_information()
            count = await collection.count_documents({})
            logger.info(f"  {collection_name}: {count} documents")
            for idx_name in indexes:
                if idx_name != "_id_":
                    logger.info(f"    ✅ {idx_name}")

        logger.info("✅ Database initialization complete!")

    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    asyncio.run(main())
