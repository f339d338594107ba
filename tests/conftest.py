"""
Shared pytest fixtures.

No MongoDB server is needed: the students collection dependency is
overridden with an in-memory collection, or with an AsyncMock when a test
needs the driver to fail.
"""

import os
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from pymongo.errors import PyMongoError

os.environ["LOG_LEVEL"] = "WARNING"

from main import app
from database import get_students_collection


class InMemoryCursor:
    def __init__(self, docs):
        self._docs = docs

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for doc in self._docs:
            yield doc


class InMemoryCollection:
    """Covers the handful of collection calls the routes make, keyed on _id."""

    def __init__(self):
        self.docs = {}

    def _matches(self, doc, filter):
        return all(doc.get(key) == value for key, value in filter.items())

    async def insert_one(self, document):
        self.docs[document["_id"]] = dict(document)
        return SimpleNamespace(inserted_id=document["_id"])

    def find(self, filter=None):
        filter = filter or {}
        return InMemoryCursor([dict(d) for d in self.docs.values() if self._matches(d, filter)])

    async def find_one(self, filter):
        for doc in self.docs.values():
            if self._matches(doc, filter):
                return dict(doc)
        return None

    async def update_one(self, filter, update):
        for doc in self.docs.values():
            if self._matches(doc, filter):
                doc.update(update["$set"])
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, filter):
        for key, doc in list(self.docs.items()):
            if self._matches(doc, filter):
                del self.docs[key]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


@pytest.fixture
def students_collection():
    return InMemoryCollection()


@pytest.fixture
def failing_collection():
    """Every store call raises the same driver error."""
    error = PyMongoError("connection refused")
    collection = MagicMock()
    collection.insert_one = AsyncMock(side_effect=error)
    collection.find_one = AsyncMock(side_effect=error)
    collection.update_one = AsyncMock(side_effect=error)
    collection.delete_one = AsyncMock(side_effect=error)
    collection.find = MagicMock(side_effect=error)
    return collection


def _client_for(collection):
    app.dependency_overrides[get_students_collection] = lambda: collection
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(students_collection):
    client = _client_for(students_collection)
    async with client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def failing_client(failing_collection):
    client = _client_for(failing_collection)
    async with client:
        yield client
    app.dependency_overrides.clear()
