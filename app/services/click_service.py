"""
app/services/click_service.py

Purpose: Contact click tracking

- Records phone/WhatsApp button presses
- Lists clicks newest first, optionally per provider
"""

from typing import List, Optional

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.db.click_store import ClickStore
from app.models.click import Click
from app.schemas.click import ClickCreate
from utils.constants import INVALID_SERVICE_ID_MESSAGE
from utils.validation_utils import is_valid_object_id

logger = get_logger(__name__)


class ClickService:
    def __init__(self, store: ClickStore):
        self.store = store

    async def record(self, payload: ClickCreate) -> Click:
        if not is_valid_object_id(payload.service_id):
            raise ValidationError(INVALID_SERVICE_ID_MESSAGE, details={"field": "service_id"})

        click = await self.store.record(payload.service_id, payload.kind)
        logger.info(f"Click recorded: {payload.kind}", extra={"service_id": payload.service_id})
        return click

    async def list(self, service_id: Optional[str] = None) -> List[Click]:
        if service_id is not None and not is_valid_object_id(service_id):
            raise ValidationError(INVALID_SERVICE_ID_MESSAGE, details={"field": "service_id"})
        return await self.store.list(service_id)
