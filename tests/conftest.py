import os

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("JWT_SECRET", "test-secret-with-enough-length-for-hs256")
os.environ.setdefault("SMS_PROVIDER", "console")
os.environ.setdefault("EXPOSE_VERIFICATION_CODE", "false")

import copy
import re
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument

from app.core.security import get_token_issuer
from app.db.account_store import AccountStore
from app.db.click_store import ClickStore
from app.db.provider_store import ProviderStore
from app.dependencies import get_account_store, get_click_store, get_provider_store
from app.main import create_app
from app.services.sms_service import SmsSender, get_sms_sender


def _matches_condition(value, condition):
    if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
        for op, operand in condition.items():
            if op == "$ne":
                if value == operand:
                    return False
            elif op == "$in":
                if value not in operand:
                    return False
            elif op == "$lt":
                if value is None or not value < operand:
                    return False
            elif op == "$lte":
                if value is None or not value <= operand:
                    return False
            elif op == "$gt":
                if value is None or not value > operand:
                    return False
            elif op == "$gte":
                if value is None or not value >= operand:
                    return False
            elif op == "$regex":
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if value is None or not re.search(operand, value, flags):
                    return False
            elif op == "$options":
                continue
            else:
                raise NotImplementedError(op)
        return True
    return value == condition


def _matches(doc, query):
    return all(_matches_condition(doc.get(key), condition) for key, condition in query.items())


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs
        self._skip = 0
        self._limit = 0

    def sort(self, key_or_list, direction=None):
        keys = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction or 1)]
        for field, order in reversed(keys):
            self._docs.sort(
                key=lambda d: (d.get(field) is not None, d.get(field)),
                reverse=order < 0,
            )
        return self

    def skip(self, count):
        self._skip = count
        return self

    def limit(self, count):
        self._limit = count
        return self

    async def to_list(self, length=None):
        docs = self._docs[self._skip:]
        if self._limit:
            docs = docs[:self._limit]
        if length:
            docs = docs[:length]
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    """
    In-memory stand-in for an AsyncIOMotorCollection covering the calls the stores make.
    """

    def __init__(self):
        self.docs = []

    def _apply_update(self, doc, update, inserting=False):
        for key, value in update.get("$set", {}).items():
            doc[key] = value
        if inserting:
            for key, value in update.get("$setOnInsert", {}).items():
                doc[key] = value
        for key, amount in update.get("$inc", {}).items():
            doc[key] = doc.get(key, 0) + amount

    def _first(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return doc
        return None

    async def find_one(self, query):
        doc = self._first(query)
        return copy.deepcopy(doc) if doc is not None else None

    def find(self, query=None):
        return FakeCursor([d for d in self.docs if _matches(d, query or {})])

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one_and_update(self, query, update, upsert=False, return_document=ReturnDocument.BEFORE):
        doc = self._first(query)
        if doc is None:
            if not upsert:
                return None
            doc = {k: v for k, v in query.items() if not isinstance(v, dict)}
            doc["_id"] = ObjectId()
            self._apply_update(doc, update, inserting=True)
            self.docs.append(doc)
            return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else None

        before = copy.deepcopy(doc)
        self._apply_update(doc, update)
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def update_many(self, query, update):
        matched = [d for d in self.docs if _matches(d, query)]
        for doc in matched:
            self._apply_update(doc, update)
        return SimpleNamespace(matched_count=len(matched), modified_count=len(matched))

    async def delete_one(self, query):
        doc = self._first(query)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.docs.remove(doc)
        return SimpleNamespace(deleted_count=1)

    async def delete_many(self, query):
        kept = [d for d in self.docs if not _matches(d, query)]
        removed = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=removed)


class RecordingSmsSender(SmsSender):
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    async def send(self, to_phone, message):
        if self.error is not None:
            raise self.error
        self.sent.append((to_phone, message))
        return f"SM{len(self.sent):032d}"


class FakeClock:
    """Controllable UTC clock for time-dependent services."""

    def __init__(self, start=None):
        self.now = start or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def accounts_collection():
    return FakeCollection()


@pytest.fixture
def services_collection():
    return FakeCollection()


@pytest.fixture
def clicks_collection():
    return FakeCollection()


@pytest.fixture
def sms_sender():
    return RecordingSmsSender()


@pytest.fixture
def app(accounts_collection, services_collection, clicks_collection, sms_sender):
    application = create_app()
    application.dependency_overrides[get_account_store] = lambda: AccountStore(accounts_collection)
    application.dependency_overrides[get_provider_store] = lambda: ProviderStore(services_collection)
    application.dependency_overrides[get_click_store] = lambda: ClickStore(clicks_collection)
    application.dependency_overrides[get_sms_sender] = lambda: sms_sender
    return application


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def provider_payload():
    return {
        "name": "Juan Pérez",
        "phone": "+5491155550000",
        "category": "Plomería",
        "service_type": "Reparación de cañerías",
        "locality": "Palermo",
        "hour_from": 8,
        "hour_to": 18,
        "urgent_24h": True,
        "nearby_localities": False,
        "photo_url": "https://example.com/juan.jpg",
    }


@pytest.fixture
def auth_headers():
    def _headers(phone="+5491155550000"):
        account = SimpleNamespace(id=str(ObjectId()), phone=phone, verified=True)
        token = get_token_issuer().issue(account)
        return {"Authorization": f"Bearer {token}"}
    return _headers
