"""
app/db/account_store.py

Purpose: Account persistence

- Lookup by phone (the identity key)
- Full-document upsert with store-maintained timestamps
- Bulk clearing of expired verification codes

Writes are read-modify-write from the caller's point of view: two concurrent
register calls for the same phone, or a verify racing a cleanup sweep, can
interleave and the last write wins. Every write increments `version`, so a
lost update is at least visible in the stored document.
"""

from datetime import datetime
from typing import Optional, Callable

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from app.core.logging import get_logger
from app.models.account import Account
from utils.time_utils import utc_now

logger = get_logger(__name__)


class AccountStore:
    """Repository over the accounts collection."""

    def __init__(self, collection: AsyncIOMotorCollection, clock: Callable[[], datetime] = utc_now):
        self.collection = collection
        self.clock = clock

    async def find_by_phone(self, phone: str) -> Optional[Account]:
        """
        Retrieves the account for a phone.

        Returns:
            Account or None if not found
        """
        doc = await self.collection.find_one({"phone": phone})
        return Account.from_document(doc) if doc else None

    async def upsert(self, account: Account) -> Account:
        """
        Writes every mutable field of the account, creating it if needed.

        Returns:
            The stored account (with id, version and timestamps)
        """
        now = self.clock()
        doc = await self.collection.find_one_and_update(
            {"phone": account.phone},
            {
                "$set": {**account.to_document(), "updated_at": now},
                "$setOnInsert": {"created_at": now},
                "$inc": {"version": 1},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return Account.from_document(doc)

    async def bulk_clear_expired_codes(self, now: datetime) -> int:
        """
        Clears code fields of every account whose code expired before `now`.
        The verified flag is left untouched.

        Returns:
            Number of accounts modified
        """
        result = await self.collection.update_many(
            {"code_expires_at": {"$lt": now}},
            {
                "$set": {
                    "pending_code": None,
                    "code_expires_at": None,
                    "updated_at": self.clock(),
                },
                "$inc": {"version": 1},
            },
        )
        return result.modified_count
