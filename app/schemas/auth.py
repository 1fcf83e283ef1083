"""
app/schemas/auth.py

Purpose: SMS authentication request/response schemas

Field constraints (phone format, code length) are checked by the
verification service so every malformed input maps to the same
VALIDATION_ERROR response.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    phone: str = Field(..., description="Phone in international format: '+' followed by 8-15 digits")

    class Config:
        json_schema_extra = {
            "example": {"phone": "+34600000000"}
        }


class VerifyRequest(BaseModel):
    phone: str = Field(..., description="Phone the code was sent to")
    code: str = Field(..., description="6-digit verification code")

    class Config:
        json_schema_extra = {
            "example": {"phone": "+34600000000", "code": "042917"}
        }


class RegisterResponse(BaseModel):
    success: bool = True
    message: str
    phone: str
    expires_at: datetime
    code: Optional[str] = Field(
        default=None,
        description="Only present when EXPOSE_VERIFICATION_CODE is enabled"
    )


class VerifyResponse(BaseModel):
    success: bool = True
    message: str
    token: str


class CleanupResponse(BaseModel):
    success: bool = True
    message: str
    cleared: int
