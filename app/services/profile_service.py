"""
app/services/profile_service.py

Purpose: Provider self-service profile

- The profile is the non-deleted listing whose phone matches the
  authenticated account
- Partial updates, soft delete, and purge of old soft-deleted listings
"""

from datetime import datetime, timedelta
from typing import Callable, Optional

from app.core.cache import TTLCache
from app.core.exceptions import ResourceNotFoundError, ValidationError
from app.core.logging import get_logger, LogContext
from app.db.provider_store import ProviderStore
from app.models.provider import ServiceProvider
from app.schemas.provider import ProfileUpdate
from utils.constants import PROFILE_NOT_FOUND_MESSAGE
from utils.time_utils import utc_now

logger = get_logger(__name__)


class ProfileService:
    def __init__(
        self,
        store: ProviderStore,
        purge_after_days: int = 30,
        clock: Callable[[], datetime] = utc_now,
        cache: Optional[TTLCache] = None,
    ):
        self.store = store
        self.cache = cache
        self.purge_after_days = purge_after_days
        self.clock = clock

    def _invalidate_search(self):
        if self.cache is not None:
            self.cache.clear()

    async def get(self, phone: str) -> ServiceProvider:
        with LogContext(phone=phone):
            profile = await self.store.find_active_by_phone(phone)
            if profile is None:
                logger.warning("Profile not found")
                raise ResourceNotFoundError(PROFILE_NOT_FOUND_MESSAGE)

            logger.debug("Profile retrieved")
            return profile

    async def update(self, phone: str, payload: ProfileUpdate) -> ServiceProvider:
        with LogContext(phone=phone):
            profile = await self.get(phone)
            changes = payload.changes()

            hour_from = changes.get("hour_from", profile.hour_from)
            hour_to = changes.get("hour_to", profile.hour_to)
            if hour_to <= hour_from:
                raise ValidationError(
                    f"hour_to ({hour_to}) must be greater than hour_from ({hour_from})",
                    details={"field": "hour_to"}
                )

            if not changes:
                return profile

            updated = await self.store.update(profile.id, changes)
            if updated is None:
                raise ResourceNotFoundError(PROFILE_NOT_FOUND_MESSAGE)

            self._invalidate_search()
            logger.info(f"Profile updated: {', '.join(sorted(changes))}")
            return updated

    async def soft_delete(self, phone: str) -> ServiceProvider:
        with LogContext(phone=phone):
            profile = await self.get(phone)
            deleted = await self.store.update(
                profile.id,
                {"deleted": True, "deleted_at": self.clock()}
            )
            if deleted is None:
                raise ResourceNotFoundError(PROFILE_NOT_FOUND_MESSAGE)

            self._invalidate_search()
            logger.info("Profile soft deleted")
            return deleted

    async def purge_deleted(self) -> int:
        """
        Permanently removes listings soft-deleted more than purge_after_days ago.

        Returns:
            Number of listings removed
        """
        cutoff = self.clock() - timedelta(days=self.purge_after_days)
        removed = await self.store.purge_deleted_before(cutoff)
        if removed:
            self._invalidate_search()
        logger.info(f"Profile purge executed, listings removed: {removed}")
        return removed
