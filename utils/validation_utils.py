"""
utils/validation_utils.py

Purpose: Input validation

- International phone number formats (account vs. provider listing)
- Verification code format
- MongoDB ObjectId strings
- Provider name and photo URL formats
- Regex-safe search terms
"""

import re
from typing import List, Optional

from bson import ObjectId

# Accounts: canonical "+" followed by 8-15 digits
ACCOUNT_PHONE_PATTERN = r"^\+\d{8,15}$"

# Provider listings are looser: optional "+" and 7-15 digits
LISTING_PHONE_PATTERN = r"^\+?\d{7,15}$"

PROVIDER_NAME_PATTERN = r"^[A-Za-zÁÉÍÓÚáéíóúÑñÜü\s]+$"
PHOTO_URL_PATTERN = r"^https?://.+\.(jpg|jpeg|png|webp)$"


def validate_account_phone(phone: str) -> bool:
    """
    Validates the phone format used as account identity.

    Example: +34600000000

    Args:
        phone: Phone number string

    Returns:
        True if valid international number
    """
    if not phone:
        return False
    return bool(re.fullmatch(ACCOUNT_PHONE_PATTERN, phone))


def validate_listing_phone(phone: str) -> bool:
    """
    Validates the contact phone shown on a provider listing.
    """
    if not phone:
        return False
    return bool(re.fullmatch(LISTING_PHONE_PATTERN, phone))


def validate_code_format(code: str, length: int = 6) -> bool:
    """
    Validates verification code format (exactly `length` digits).

    Args:
        code: Code string
        length: Expected number of digits

    Returns:
        True if valid
    """
    if not code:
        return False
    return bool(re.fullmatch(rf"[0-9]{{{length}}}", code))


def is_valid_object_id(value: Optional[str]) -> bool:
    """
    Checks a 24-hex-character MongoDB ObjectId string.
    """
    if not value or not isinstance(value, str):
        return False
    return bool(re.fullmatch(r"[0-9a-fA-F]{24}", value)) and ObjectId.is_valid(value)


def validate_provider_name(name: str) -> bool:
    """
    Letters (accented Spanish letters included) and spaces only.
    """
    if not name:
        return False
    return bool(re.match(PROVIDER_NAME_PATTERN, name))


def validate_photo_url(url: str) -> bool:
    """
    http(s) URL ending in a supported image extension.
    """
    if not url:
        return False
    return bool(re.match(PHOTO_URL_PATTERN, url, re.IGNORECASE))


def split_csv(value: Optional[str]) -> List[str]:
    """
    Splits a comma-separated query value, dropping empty items.

    Example: "Gas, Plomería," -> ["Gas", "Plomería"]
    """
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def contains_pattern(term: str) -> str:
    """
    Builds a regex that matches `term` literally anywhere in a string.
    User input is escaped so it cannot inject regex syntax.
    """
    return re.escape(term.strip())
