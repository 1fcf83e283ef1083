"""
Maintenance sweep

Clears expired verification codes and, with --purge-profiles, permanently
removes listings soft-deleted more than PROFILE_PURGE_AFTER_DAYS ago.
Meant to be run from cron:

    python scripts/cleanup_codes.py [--purge-profiles]
"""

import argparse
import asyncio
import sys
from pathlib import Path
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent))

load_dotenv()

from app.core.config import settings
from app.core.logging import setup_logging, get_logger
from app.db.account_store import AccountStore
from app.db.mongo import (
    connect_to_mongo,
    close_mongo_connection,
    get_accounts_collection,
    get_services_collection,
)
from app.db.provider_store import ProviderStore
from app.services.profile_service import ProfileService
from app.services.verification_service import VerificationService

setup_logging(level="INFO")
logger = get_logger("scripts.cleanup_codes")


async def main(purge_profiles: bool):
    await connect_to_mongo()
    try:
        verification = VerificationService(
            AccountStore(get_accounts_collection()),
            code_ttl_minutes=settings.VERIFICATION_CODE_TTL_MINUTES,
            code_length=settings.VERIFICATION_CODE_LENGTH,
        )
        cleared = await verification.cleanup_expired()
        logger.info(f"🧹 Expired codes cleared: {cleared}")

        if purge_profiles:
            profiles = ProfileService(
                ProviderStore(get_services_collection()),
                purge_after_days=settings.PROFILE_PURGE_AFTER_DAYS,
            )
            removed = await profiles.purge_deleted()
            logger.info(f"🗑️ Soft-deleted profiles purged: {removed}")
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Clear expired verification codes")
    parser.add_argument(
        "--purge-profiles",
        action="store_true",
        help="Also purge old soft-deleted provider listings",
    )
    args = parser.parse_args()
    asyncio.run(main(args.purge_profiles))
