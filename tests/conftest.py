# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - In-memory stand-ins for the async MongoDB collection/database/provider
# - A TestClient wired to those stand-ins via dependency overrides
# =============================================================================

import asyncio
import os
from typing import Any

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "false")
os.environ.setdefault("CORS_ORIGINS", "https://sumit.codes,http://localhost:3000,http://127.0.0.1:3000")

import pytest
from fastapi.testclient import TestClient

_MISSING = object()


# =============================================================================
# In-memory MongoDB
# =============================================================================

def _matches(doc: dict[str, Any], query: dict[str, Any]) -> bool:
    """Supports equality and $nin, which is all the services use."""
    for key, expected in query.items():
        actual = doc.get(key, _MISSING)
        if isinstance(expected, dict) and "$nin" in expected:
            if actual is not _MISSING and any(
                type(actual) is type(v) and actual == v for v in expected["$nin"]
            ):
                return False
        elif actual is _MISSING or type(actual) is not type(expected) or actual != expected:
            return False
    return True


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]):
        self._docs = docs

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        return list(self._docs if length is None else self._docs[:length])


class FakeCollection:
    """Async subset of pymongo's AsyncCollection."""

    def __init__(self, docs: list[dict[str, Any]] | None = None):
        self.docs = [dict(d) for d in (docs or [])]
        self.delay = 0.0
        self.error: Exception | None = None
        self.queries: list[dict[str, Any]] = []

    async def _maybe_fail(self) -> None:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error

    def find(self, query: dict[str, Any] | None = None) -> Any:
        query = query or {}
        self.queries.append(query)
        collection = self

        class _DelayedCursor(FakeCursor):
            async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
                await collection._maybe_fail()
                return await super().to_list(length)

        return _DelayedCursor([d for d in self.docs if _matches(d, query)])

    async def find_one(self, query: dict[str, Any]) -> dict[str, Any] | None:
        self.queries.append(query)
        await self._maybe_fail()
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    async def count_documents(self, query: dict[str, Any]) -> int:
        self.queries.append(query)
        await self._maybe_fail()
        return sum(1 for d in self.docs if _matches(d, query))


class FakeDatabase:
    def __init__(self, name: str = "portfolio"):
        self.name = name
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


class FakeProvider:
    """Stands in for MongoProvider in service and route tests."""

    def __init__(self, database: FakeDatabase | None = None):
        self.database = database or FakeDatabase()
        self.alive = True
        self.connected = True
        self.connect_error: Exception | None = None
        self.acquired = 0
        self.released = 0

    @property
    def is_connected(self) -> bool:
        return self.connected

    async def connect(self) -> None:
        if self.connect_error:
            raise self.connect_error
        self.connected = True

    async def acquire(self) -> FakeDatabase:
        if self.connect_error:
            raise self.connect_error
        self.acquired += 1
        return self.database

    def release(self, db: Any) -> None:
        self.released += 1

    async def ping(self) -> bool:
        return self.connected and self.alive

    async def close(self) -> None:
        self.connected = False


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_companies():
    """Sample companies collection documents, deliberately in mixed shapes."""
    return [
        {
            "_id": "acme",
            "companyName": "Acme Corp",
            "position": "Android Developer",
            "workStart": "2019-01-15",
            "workEnd": "2020-06-30",
            "description": "Built the field-sales app.",
            "technologies": ["Kotlin", "Firebase"],
            "playStoreApps": [{"name": "Acme Sales"}],
        },
        {
            "_id": "globex",
            "companyName": "Globex",
            "position": "Senior Mobile Engineer",
            "workStart": "2022-03-01",
            "workEnd": None,
            "description": "Leading the Flutter rewrite.",
            "technologies": ["Flutter", "Dart", "Firebase"],
            "appStoreApps": [{"name": "Globex"}],
            "playStoreApps": [{"name": "Globex"}],
            "webApps": [{"name": "Globex Admin"}],
        },
        {
            "_id": "initech",
            "companyName": "Initech",
            "position": "Mobile Engineer",
            "workStart": "2020-07-15",
            "workEnd": "2022-02-28",
            "description": "React Native and native modules.",
            "technologies": ["React Native", "Kotlin", "Swift"],
        },
        {
            "_id": "hooli",
            "companyName": "Hooli",
            "position": "Consultant",
            "workStart": "2021-01-10",
            "description": "Part-time consulting.",
            "technologies": ["Swift"],
        },
    ]


@pytest.fixture
def sample_closed_tests():
    """Closed tests with every isActive shape seen in production."""
    from bson import ObjectId

    return [
        {
            "_id": ObjectId("65a1f0c2e4b0a1b2c3d4e5f6"),
            "appName": "Budget Buddy",
            "packageName": "codes.sumit.budget",
            "description": "Expense tracker",
            "icon": "https://cdn.example/budget.png",
            "googleGroup": "https://groups.google.com/g/budget-testers",
            "playStoreUrl": "https://play.google.com/store/apps/details?id=codes.sumit.budget",
            "isActive": True,
            "createdAt": {"$date": "2024-01-15T10:30:00Z"},
            "updatedAt": "2024-02-01T08:00:00Z",
        },
        {
            "_id": "legacy-string-id",
            "appName": "Habit Loop",
            "packageName": "codes.sumit.habits",
            "isActive": "true",
        },
        {
            "_id": "no-flag",
            "appName": "Quiet Notes",
            "packageName": "codes.sumit.notes",
        },
        {
            "_id": "empty-flag",
            "appName": "Step Up",
            "packageName": "codes.sumit.steps",
            "isActive": "",
        },
        {
            "_id": "retired-bool",
            "appName": "Old Timer",
            "packageName": "codes.sumit.timer",
            "isActive": False,
        },
        {
            "_id": "retired-string",
            "appName": "Sunset",
            "packageName": "codes.sumit.sunset",
            "isActive": "false",
        },
    ]


@pytest.fixture
def fake_db(sample_companies, sample_closed_tests):
    db = FakeDatabase()
    db.collections["companies"] = FakeCollection(sample_companies)
    db.collections["closed_tests"] = FakeCollection(sample_closed_tests)
    return db


@pytest.fixture
def fake_provider(fake_db):
    return FakeProvider(fake_db)


@pytest.fixture
def client(fake_provider):
    """TestClient with MongoDB replaced by the in-memory provider."""
    from app.dependencies import get_mongo_provider
    from app.main import app

    app.dependency_overrides[get_mongo_provider] = lambda: fake_provider
    app.state.rate_limits.clear()

    yield TestClient(app)

    app.dependency_overrides.clear()
    app.state.rate_limits.clear()
