"""
app/db/indexes.py

Purpose: Database index management

- Creates unique and performance indexes
- Ensures fast lookups and data integrity
"""

from pymongo import ASCENDING, DESCENDING

from app.db.mongo import (
    get_accounts_collection,
    get_services_collection,
    get_clicks_collection
)
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes():
    """
    Creates all necessary database indexes for optimal performance.
    This function is idempotent - safe to run multiple times.
    """
    try:
        accounts = get_accounts_collection()
        services = get_services_collection()
        clicks = get_clicks_collection()

        logger.info("Creating database indexes...")

        # ==============================================
        # ACCOUNTS COLLECTION INDEXES
        # ==============================================

        # Exactly one account per phone
        await accounts.create_index("phone", unique=True, name="phone_unique")
        logger.debug("Created unique index on accounts.phone")

        # Expired-code cleanup sweep
        await accounts.create_index("code_expires_at", name="code_expires_at_idx")
        logger.debug("Created index on accounts.code_expires_at")

        # ==============================================
        # SERVICES COLLECTION INDEXES
        # ==============================================

        for field in ("name", "category", "service_type", "locality"):
            await services.create_index(field, name=f"{field}_idx")
            logger.debug(f"Created index on services.{field}")

        # Profile lookups by owner phone
        await services.create_index(
            [("phone", ASCENDING), ("deleted", ASCENDING)],
            name="phone_deleted_idx"
        )
        logger.debug("Created compound index on services.phone + deleted")

        # Soft-delete purge
        await services.create_index(
            [("deleted", ASCENDING), ("deleted_at", ASCENDING)],
            name="deleted_at_idx"
        )
        logger.debug("Created compound index on services.deleted + deleted_at")

        # ==============================================
        # CLICKS COLLECTION INDEXES
        # ==============================================

        await clicks.create_index(
            [("service_id", ASCENDING), ("clicked_at", DESCENDING)],
            name="service_clicks_idx"
        )
        logger.debug("Created compound index on clicks.service_id + clicked_at")

        await clicks.create_index([("clicked_at", DESCENDING)], name="clicked_at_idx")
        logger.debug("Created index on clicks.clicked_at")

        logger.info("✅ All database indexes created successfully")

        # Log index statistics
        account_indexes = await accounts.index_information()
        service_indexes = await services.index_information()
        click_indexes = await clicks.index_information()

        logger.info(
            f"Index summary: Accounts={len(account_indexes)}, "
            f"Services={len(service_indexes)}, "
            f"Clicks={len(click_indexes)}"
        )

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise


if __name__ == "__main__":
    """
    Run this script directly to create indexes manually.
    """
    import asyncio
    from app.db.mongo import connect_to_mongo, close_mongo_connection

    async def main():
        await connect_to_mongo()
        await create_indexes()
        await close_mongo_connection()

    asyncio.run(main())
