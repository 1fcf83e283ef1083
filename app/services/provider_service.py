"""
app/services/provider_service.py

Purpose: Public service provider directory

- Builds MongoDB queries from search parameters
- Caches search results for a short TTL
- Create / read / update / delete listings by id
"""

from typing import Any, Dict, List, Optional, Tuple

from pymongo import ASCENDING, DESCENDING

from app.core.cache import TTLCache
from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.core.logging import get_logger
from app.db.provider_store import ProviderStore
from app.models.provider import ServiceProvider
from app.schemas.provider import (
    SORTABLE_FIELDS,
    ServiceProviderCreate,
    ServiceProviderUpdate,
    ServiceSearch,
)
from utils.constants import INVALID_ID_MESSAGE, SERVICE_NOT_FOUND_MESSAGE
from utils.validation_utils import contains_pattern, is_valid_object_id, split_csv

logger = get_logger(__name__)


def parse_sort(value: Optional[str]) -> List[Tuple[str, int]]:
    """
    Parses "name,-created_at" into [("name", 1), ("created_at", -1)].

    Raises:
        ValidationError: If a field is not sortable
    """
    sort = []
    for item in split_csv(value):
        direction = DESCENDING if item.startswith("-") else ASCENDING
        field = item.lstrip("-+")
        if field not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{field}'",
                details={"sortable": list(SORTABLE_FIELDS)}
            )
        sort.append((field, direction))
    return sort


def build_provider_query(search: ServiceSearch) -> Dict[str, Any]:
    """
    Translates search parameters into a MongoDB filter.
    Soft-deleted listings are never returned.
    """
    query: Dict[str, Any] = {"deleted": {"$ne": True}}

    if search.category:
        query["category"] = search.category
    if search.categories:
        query["category"] = {"$in": search.categories}

    if search.service_type:
        query["service_type"] = search.service_type
    if search.service_type_like:
        query["service_type"] = {"$regex": contains_pattern(search.service_type_like), "$options": "i"}

    if search.name:
        query["name"] = {"$regex": contains_pattern(search.name), "$options": "i"}

    if search.urgent_24h is not None:
        query["urgent_24h"] = search.urgent_24h
    if search.nearby_localities is not None:
        query["nearby_localities"] = search.nearby_localities

    if search.locality:
        query["locality"] = search.locality

    # Open at the given hour: hour_from <= hour < hour_to
    if search.hour is not None:
        query["hour_from"] = {"$lte": search.hour}
        query["hour_to"] = {"$gt": search.hour}

    return query


class ProviderService:
    """Directory operations over the provider store."""

    def __init__(self, store: ProviderStore, cache: TTLCache):
        self.store = store
        self.cache = cache

    async def search(self, search: ServiceSearch) -> List[ServiceProvider]:
        query = build_provider_query(search)
        cache_key = TTLCache.make_key(query=query, limit=search.limit, skip=search.skip, sort=search.sort)

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.debug("Provider search cache hit")
            return cached

        providers = await self.store.find(
            query,
            sort=search.sort or None,
            skip=search.skip or 0,
            limit=search.limit or 0,
        )
        self.cache.set(cache_key, providers)
        return providers

    async def get(self, provider_id: str) -> ServiceProvider:
        if not is_valid_object_id(provider_id):
            raise ValidationError(INVALID_ID_MESSAGE)

        provider = await self.store.get(provider_id)
        if provider is None:
            raise ResourceNotFoundError(SERVICE_NOT_FOUND_MESSAGE)
        return provider

    async def create(self, payload: ServiceProviderCreate) -> ServiceProvider:
        provider = await self.store.create(payload.model_dump())
        self.cache.clear()
        logger.info(f"Service provider created: {provider.id}", extra={"service_id": provider.id})
        return provider

    async def update(self, provider_id: str, payload: ServiceProviderUpdate) -> ServiceProvider:
        changes = payload.changes()
        current = await self.get(provider_id)

        hour_from = changes.get("hour_from", current.hour_from)
        hour_to = changes.get("hour_to", current.hour_to)
        if hour_to <= hour_from:
            raise ValidationError(
                f"hour_to ({hour_to}) must be greater than hour_from ({hour_from})",
                details={"field": "hour_to"}
            )

        if not changes:
            return current

        updated = await self.store.update(provider_id, changes)
        if updated is None:
            raise ResourceNotFoundError(SERVICE_NOT_FOUND_MESSAGE)

        self.cache.clear()
        logger.info(f"Service provider updated: {provider_id}", extra={"service_id": provider_id})
        return updated

    async def delete(self, provider_id: str) -> None:
        if not is_valid_object_id(provider_id):
            raise ValidationError(INVALID_ID_MESSAGE)

        if not await self.store.delete(provider_id):
            raise ResourceNotFoundError(SERVICE_NOT_FOUND_MESSAGE)

        self.cache.clear()
        logger.info(f"Service provider deleted: {provider_id}", extra={"service_id": provider_id})
