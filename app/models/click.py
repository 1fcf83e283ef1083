"""
app/models/click.py

Purpose: Contact click document model

- One document per phone/WhatsApp button press on a listing
- Used for provider analytics
"""

from datetime import datetime
from typing import Literal, Optional, Dict, Any

from pydantic import BaseModel

from utils.time_utils import ensure_aware


class Click(BaseModel):
    id: Optional[str] = None
    service_id: str
    kind: Literal["phone", "whatsapp"]
    clicked_at: datetime
    created_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Click":
        return cls(
            id=str(doc["_id"]) if doc.get("_id") is not None else None,
            service_id=str(doc["service_id"]),
            kind=doc["kind"],
            clicked_at=ensure_aware(doc["clicked_at"]),
            created_at=ensure_aware(doc.get("created_at")),
        )
