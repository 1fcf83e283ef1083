"""
utils/time_utils.py

Purpose: Time and expiry helpers

- Timezone-aware UTC clock
- Verification code expiry checks
- Duration strings ("7d", "12h") used by token expiry
"""

import re
from datetime import datetime, timedelta, timezone
from typing import Optional

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
}


def utc_now() -> datetime:
    """
    Returns the current time as a timezone-aware UTC datetime.
    """
    return datetime.now(timezone.utc)


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Treats naive datetimes (as stored by older documents) as UTC.
    """
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)


def calculate_code_expiry(issued_at: datetime, validity_minutes: int = 10) -> datetime:
    """
    Calculates the expiry timestamp of a verification code.
    """
    return issued_at + timedelta(minutes=validity_minutes)


def is_code_expired(expires_at: Optional[datetime], now: datetime) -> bool:
    """
    A code without expiry is treated as expired.
    """
    if expires_at is None:
        return True
    return ensure_aware(expires_at) < now


def parse_duration(value: str) -> timedelta:
    """
    Parses a duration like "7d", "12h", "30m", "45s" or "3600".

    Raises:
        ValueError: If the value is not a recognised duration
    """
    match = _DURATION_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit]: int(amount)})

