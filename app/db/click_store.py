"""
app/db/click_store.py

Purpose: Contact click persistence
"""

from datetime import datetime
from typing import Optional, List, Callable

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING

from app.models.click import Click
from utils.time_utils import utc_now


class ClickStore:
    """Repository over the clicks collection."""

    def __init__(self, collection: AsyncIOMotorCollection, clock: Callable[[], datetime] = utc_now):
        self.collection = collection
        self.clock = clock

    async def record(self, service_id: str, kind: str) -> Click:
        now = self.clock()
        doc = {
            "service_id": ObjectId(service_id),
            "kind": kind,
            "clicked_at": now,
            "created_at": now,
        }
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return Click.from_document(doc)

    async def list(self, service_id: Optional[str] = None) -> List[Click]:
        """Clicks newest first, optionally for a single provider."""
        query = {"service_id": ObjectId(service_id)} if service_id else {}
        cursor = self.collection.find(query).sort([("clicked_at", DESCENDING)])
        docs = await cursor.to_list(length=None)
        return [Click.from_document(doc) for doc in docs]
