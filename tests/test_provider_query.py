import pytest
from pymongo import ASCENDING, DESCENDING

from app.core.exceptions import ValidationError
from app.schemas.provider import ServiceSearch
from app.services.provider_service import build_provider_query, parse_sort


def test_empty_search_only_excludes_deleted():
    assert build_provider_query(ServiceSearch()) == {"deleted": {"$ne": True}}


def test_categories_take_precedence_over_category():
    query = build_provider_query(ServiceSearch(category="Gas", categories=["Gas", "Electricidad"]))
    assert query["category"] == {"$in": ["Gas", "Electricidad"]}


def test_substring_filters_are_escaped_and_case_insensitive():
    query = build_provider_query(ServiceSearch(name="a+b", service_type_like="(x)"))

    assert query["name"] == {"$regex": r"a\+b", "$options": "i"}
    assert query["service_type"] == {"$regex": r"\(x\)", "$options": "i"}


def test_hour_filter_selects_open_providers():
    query = build_provider_query(ServiceSearch(hour=9))
    assert query["hour_from"] == {"$lte": 9}
    assert query["hour_to"] == {"$gt": 9}


def test_boolean_filters_keep_false():
    query = build_provider_query(ServiceSearch(urgent_24h=False, nearby_localities=True))
    assert query["urgent_24h"] is False
    assert query["nearby_localities"] is True


def test_parse_sort():
    assert parse_sort(None) == []
    assert parse_sort("name, -created_at") == [("name", ASCENDING), ("created_at", DESCENDING)]


def test_parse_sort_rejects_unknown_fields():
    with pytest.raises(ValidationError) as exc_info:
        parse_sort("name,password")
    assert "password" in exc_info.value.message
