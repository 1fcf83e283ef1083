"""
app/db/provider_store.py

Purpose: Service provider persistence

- Filtered, sorted and paginated listing
- CRUD by ObjectId
- Profile lookups by phone and soft-delete purge
"""

from datetime import datetime
from typing import Optional, List, Dict, Any, Tuple, Callable

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from app.models.provider import ServiceProvider
from utils.time_utils import utc_now


class ProviderStore:
    """Repository over the services collection."""

    def __init__(self, collection: AsyncIOMotorCollection, clock: Callable[[], datetime] = utc_now):
        self.collection = collection
        self.clock = clock

    async def find(
        self,
        query: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> List[ServiceProvider]:
        cursor = self.collection.find(query)
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        docs = await cursor.to_list(length=limit or None)
        return [ServiceProvider.from_document(doc) for doc in docs]

    async def get(self, provider_id: str) -> Optional[ServiceProvider]:
        doc = await self.collection.find_one({"_id": ObjectId(provider_id)})
        return ServiceProvider.from_document(doc) if doc else None

    async def find_active_by_phone(self, phone: str) -> Optional[ServiceProvider]:
        """The non-deleted listing owned by `phone`, if any."""
        doc = await self.collection.find_one({"phone": phone, "deleted": False})
        return ServiceProvider.from_document(doc) if doc else None

    async def create(self, data: Dict[str, Any]) -> ServiceProvider:
        now = self.clock()
        doc = {
            **data,
            "deleted": False,
            "deleted_at": None,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return ServiceProvider.from_document(doc)

    async def update(self, provider_id: str, changes: Dict[str, Any]) -> Optional[ServiceProvider]:
        """
        Applies `changes` and returns the updated provider, or None if absent.
        """
        doc = await self.collection.find_one_and_update(
            {"_id": ObjectId(provider_id)},
            {"$set": {**changes, "updated_at": self.clock()}},
            return_document=ReturnDocument.AFTER,
        )
        return ServiceProvider.from_document(doc) if doc else None

    async def delete(self, provider_id: str) -> bool:
        result = await self.collection.delete_one({"_id": ObjectId(provider_id)})
        return result.deleted_count > 0

    async def purge_deleted_before(self, cutoff: datetime) -> int:
        """
        Hard-deletes providers soft-deleted at or before `cutoff`.
        """
        result = await self.collection.delete_many({
            "deleted": True,
            "deleted_at": {"$lte": cutoff},
        })
        return result.deleted_count
