"""
app/models/account.py

Purpose: Account document model

- One document per phone number (the identity key)
- Pending verification code and its expiry
- Verified flag and store-maintained timestamps
"""

from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel

from utils.time_utils import ensure_aware


class VerificationState(str, Enum):
    """
    Verification lifecycle of an account.
    EXPIRED is derived: the code is still stored until the cleanup sweep.
    """

    NO_PENDING = "NO_PENDING"
    PENDING = "PENDING"
    EXPIRED = "EXPIRED"


class Account(BaseModel):
    id: Optional[str] = None
    phone: str
    pending_code: Optional[str] = None
    code_expires_at: Optional[datetime] = None
    verified: bool = False
    version: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def state(self, now: datetime) -> VerificationState:
        """Current verification state relative to `now`."""
        if self.pending_code is None:
            return VerificationState.NO_PENDING
        if self.code_expires_at is None or ensure_aware(self.code_expires_at) < now:
            return VerificationState.EXPIRED
        return VerificationState.PENDING

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Account":
        data = {k: v for k, v in doc.items() if k != "_id"}
        data["id"] = str(doc["_id"]) if doc.get("_id") is not None else None
        for field in ("code_expires_at", "created_at", "updated_at"):
            data[field] = ensure_aware(data.get(field))
        return cls(**data)

    def to_document(self) -> Dict[str, Any]:
        """Fields written by the store (identity and timestamps excluded)."""
        return {
            "phone": self.phone,
            "pending_code": self.pending_code,
            "code_expires_at": self.code_expires_at,
            "verified": self.verified,
        }
