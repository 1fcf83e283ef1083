from typing import Literal

from pydantic import BaseModel, Field


class ClickCreate(BaseModel):
    """
    A contact button press on a provider listing.
    """
    service_id: str = Field(..., description="Provider ObjectId")
    kind: Literal["phone", "whatsapp"]

    class Config:
        json_schema_extra = {
            "example": {"service_id": "65f1c2a9e4b0a1b2c3d4e5f6", "kind": "whatsapp"}
        }
