"""
app/schemas/provider.py

Purpose: Service provider schemas

- Create / partial update payloads with field-level rules
- Profile update payload (owner phone is not editable)
- Search parameters for the public directory
"""

from typing import Optional, List, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from utils.constants import VALID_CATEGORIES
from utils.validation_utils import (
    validate_listing_phone,
    validate_photo_url,
    validate_provider_name,
)

SORTABLE_FIELDS = (
    "name",
    "category",
    "service_type",
    "locality",
    "hour_from",
    "hour_to",
    "created_at",
    "updated_at",
)


def _check_name(v):
    if v is not None and not validate_provider_name(v):
        raise ValueError(f"{v} is not a valid name")
    return v


def _check_phone(v):
    if v is not None and not validate_listing_phone(v):
        raise ValueError(f"{v} is not a valid phone number")
    return v


def _check_category(v):
    if v is not None and v not in VALID_CATEGORIES:
        raise ValueError(f"{v} is not a valid category")
    return v


def _check_photo_url(v):
    if v is not None and not validate_photo_url(v):
        raise ValueError(f"The URL {v} is not a valid image URL")
    return v


class _ProviderFields(BaseModel):
    """Rules shared by every payload that edits a listing."""

    @field_validator("name", check_fields=False)
    @classmethod
    def validate_name(cls, v):
        return _check_name(v)

    @field_validator("category", check_fields=False)
    @classmethod
    def validate_category(cls, v):
        return _check_category(v)

    @field_validator("photo_url", check_fields=False)
    @classmethod
    def validate_photo(cls, v):
        return _check_photo_url(v)

    @model_validator(mode="after")
    def validate_hours(self):
        hour_from = getattr(self, "hour_from", None)
        hour_to = getattr(self, "hour_to", None)
        if hour_from is not None and hour_to is not None and hour_to <= hour_from:
            raise ValueError(f"hour_to ({hour_to}) must be greater than hour_from ({hour_from})")
        return self


class ServiceProviderCreate(_ProviderFields):
    name: str = Field(..., min_length=3, max_length=100)
    phone: str
    category: str
    service_type: str = Field(..., min_length=5, max_length=150)
    locality: str = Field(..., min_length=2, max_length=100)
    hour_from: int = Field(..., ge=0, le=23)
    hour_to: int = Field(..., ge=0, le=23)
    urgent_24h: bool
    nearby_localities: bool
    photo_url: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _check_phone(v)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Juan Pérez",
                "phone": "+5491155550000",
                "category": "Plomería",
                "service_type": "Reparación de cañerías",
                "locality": "Palermo",
                "hour_from": 8,
                "hour_to": 18,
                "urgent_24h": True,
                "nearby_localities": False,
                "photo_url": "https://example.com/juan.jpg"
            }
        }


class ProfileUpdate(_ProviderFields):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    category: Optional[str] = None
    service_type: Optional[str] = Field(default=None, min_length=5, max_length=150)
    locality: Optional[str] = Field(default=None, min_length=2, max_length=100)
    hour_from: Optional[int] = Field(default=None, ge=0, le=23)
    hour_to: Optional[int] = Field(default=None, ge=0, le=23)
    urgent_24h: Optional[bool] = None
    nearby_localities: Optional[bool] = None
    photo_url: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=500)

    def changes(self) -> dict:
        """Fields the caller actually sent, without explicit nulls."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class ServiceProviderUpdate(ProfileUpdate):
    phone: Optional[str] = None

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return _check_phone(v)


class ServiceSearch(BaseModel):
    category: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    service_type: Optional[str] = None
    service_type_like: Optional[str] = None
    name: Optional[str] = None
    urgent_24h: Optional[bool] = None
    nearby_localities: Optional[bool] = None
    locality: Optional[str] = None
    hour: Optional[int] = Field(default=None, ge=0, le=23)
    limit: Optional[int] = Field(default=None, ge=1, le=100)
    skip: Optional[int] = Field(default=None, ge=0)
    sort: List[Tuple[str, int]] = Field(default_factory=list)
