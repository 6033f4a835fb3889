"""
StudyMate Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (collection doubles, API client).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── partners_collection:   In-memory collection double for `partners`
    ├── requests_collection:   In-memory collection double for `partnerRequests`
    ├── mock_collection:       MagicMock/AsyncMock collection for failure injection
    ├── sample_partner:        Partner payload used across files
    ├── test_client:           HTTPX AsyncClient wired to the doubles above
    └── unraised_client:       Same wiring; unhandled errors become 500 responses
"""

import copy
import os
import re
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["DB_NAME"] = "studymate-test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient

from studymate.dependencies import get_partner_repository, get_partner_request_repository
from studymate.repositories import PartnerRepository, PartnerRequestRepository


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Collection Double
# ══════════════════════════════════════════════════════════════════════════
# Implements only the query/update operators the repositories issue:
# equality, $gt, $regex/$options, $inc, $set.


def _matches(document: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, condition in query.items():
        value = document.get(key)
        if isinstance(condition, dict):
            if "$gt" in condition and not (value is not None and value > condition["$gt"]):
                return False
            if "$regex" in condition:
                flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
                if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                    return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, documents: List[Dict[str, Any]]):
        self._documents = documents

    def sort(self, key: str, direction: int) -> "FakeCursor":
        self._documents = sorted(self._documents, key=lambda d: d.get(key), reverse=direction < 0)
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return copy.deepcopy(self._documents[:length] if length else self._documents)


class FakeCollection:
    def __init__(self):
        self.documents: List[Dict[str, Any]] = []

    def find(self, query: Optional[Dict[str, Any]] = None) -> FakeCursor:
        return FakeCursor([d for d in self.documents if _matches(d, query or {})])

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for document in self.documents:
            if _matches(document, query):
                return copy.deepcopy(document)
        return None

    async def insert_one(self, document: Dict[str, Any]) -> SimpleNamespace:
        stored = copy.deepcopy(document)
        stored.setdefault("_id", ObjectId())
        self.documents.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> SimpleNamespace:
        for document in self.documents:
            if _matches(document, query):
                for key, amount in update.get("$inc", {}).items():
                    document[key] = document.get(key, 0) + amount
                document.update(update.get("$set", {}))
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query: Dict[str, Any]) -> SimpleNamespace:
        for index, document in enumerate(self.documents):
            if _matches(document, query):
                del self.documents[index]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def count_documents(self, query: Dict[str, Any], limit: int = 0) -> int:
        count = sum(1 for d in self.documents if _matches(d, query))
        return min(count, limit) if limit else count


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def partners_collection():
    return FakeCollection()


@pytest.fixture
def requests_collection():
    return FakeCollection()


@pytest.fixture
def mock_collection():
    """
    Provides a mock async collection.

    Usage:
        mock_collection.find_one.side_effect = ServerSelectionTimeoutError("down")
        with pytest.raises(DatabaseError):
            await PartnerRepository(mock_collection).get_partner(some_id)
    """
    collection = MagicMock()
    collection.find_one = AsyncMock()
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.count_documents = AsyncMock()
    return collection


@pytest.fixture
def sample_partner():
    return {
        "name": "Alice",
        "subject": "Math",
        "experience": 3,
        "partnerCount": 0,
    }


@pytest_asyncio.fixture
async def test_client(partners_collection, requests_collection):
    """
    Provides an async HTTP test client backed by the in-memory collections.

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from studymate.main import app

    app.dependency_overrides[get_partner_repository] = lambda: PartnerRepository(
        partners_collection
    )
    app.dependency_overrides[get_partner_request_repository] = lambda: PartnerRequestRepository(
        requests_collection
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unraised_client(test_client):
    """
    Like test_client, but unhandled exceptions come back as the catch-all
    500 response instead of propagating into the test.
    """
    from studymate.main import app

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
