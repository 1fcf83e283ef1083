"""
app/models/provider.py

Purpose: Service provider document model

- Listing shown in the public directory
- Contact phone, category, locality and working hours
- Soft-delete markers used by the provider profile
"""

from datetime import datetime
from typing import Optional, Dict, Any

from pydantic import BaseModel

from utils.time_utils import ensure_aware


class ServiceProvider(BaseModel):
    id: Optional[str] = None
    name: str
    phone: str
    category: str
    service_type: str
    locality: str
    hour_from: int
    hour_to: int
    urgent_24h: bool = False
    nearby_localities: bool = False
    photo_url: Optional[str] = None
    description: Optional[str] = None
    deleted: bool = False
    deleted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ServiceProvider":
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = str(doc["_id"]) if doc.get("_id") is not None else None
        for field in ("deleted_at", "created_at", "updated_at"):
            data[field] = ensure_aware(data.get(field))
        return cls(**data)
