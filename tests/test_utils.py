import json
import logging
from datetime import datetime, timedelta, timezone

import pytest

from app.core.logging import StructuredFormatter, mask_phone
from utils.time_utils import ensure_aware, is_code_expired, parse_duration
from utils.validation_utils import (
    contains_pattern,
    is_valid_object_id,
    split_csv,
    validate_account_phone,
    validate_code_format,
    validate_listing_phone,
    validate_photo_url,
    validate_provider_name,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value, expected", [
    ("7d", timedelta(days=7)),
    ("12h", timedelta(hours=12)),
    ("30m", timedelta(minutes=30)),
    ("45s", timedelta(seconds=45)),
    ("3600", timedelta(seconds=3600)),
])
def test_parse_duration(value, expected):
    assert parse_duration(value) == expected


@pytest.mark.parametrize("value", ["", "7w", "d7", "-1d", "soon"])
def test_parse_duration_rejects_garbage(value):
    with pytest.raises(ValueError):
        parse_duration(value)


def test_naive_datetimes_are_treated_as_utc():
    assert ensure_aware(datetime(2024, 5, 1, 12, 0)) == NOW
    assert ensure_aware(None) is None


def test_is_code_expired():
    assert is_code_expired(None, NOW)
    assert not is_code_expired(NOW, NOW)
    assert is_code_expired(NOW - timedelta(seconds=1), NOW)
    assert not is_code_expired(datetime(2024, 5, 1, 12, 5), NOW)


def test_phone_formats():
    assert validate_account_phone("+34600000000")
    assert not validate_account_phone("34600000000")
    assert not validate_account_phone("+3460000")
    assert not validate_account_phone("+34600000000\n")

    assert validate_listing_phone("1155550")
    assert not validate_listing_phone("115555")


def test_code_format():
    assert validate_code_format("012345")
    assert validate_code_format("01234567", length=8)
    assert not validate_code_format("12345")
    assert not validate_code_format("１２３４５６")


def test_object_ids():
    assert is_valid_object_id("65f1c2a9e4b0a1b2c3d4e5f6")
    assert not is_valid_object_id("65f1c2a9e4b0a1b2c3d4e5f")
    assert not is_valid_object_id("zzzzzzzzzzzzzzzzzzzzzzzz")
    assert not is_valid_object_id(None)


def test_names_and_photos():
    assert validate_provider_name("José Núñez")
    assert not validate_provider_name("R2D2")
    assert validate_photo_url("https://cdn.example.com/a.WEBP")
    assert not validate_photo_url("https://cdn.example.com/a.gif")


def test_split_csv_and_contains_pattern():
    assert split_csv(" Gas, ,Plomería,") == ["Gas", "Plomería"]
    assert split_csv(None) == []
    assert contains_pattern("a.b") == r"a\.b"


def test_structured_logs_mask_phone_numbers():
    assert mask_phone("+34600000000") == "+34*******00"
    assert mask_phone(None) is None

    record = logging.LogRecord("servipro.test", logging.INFO, __file__, 1, "Code issued", None, None)
    record.phone = "+34600000000"
    entry = json.loads(StructuredFormatter().format(record))
    assert entry["phone"] == "+34*******00"
    assert entry["message"] == "Code issued"
