"""
pytest configuration and fixtures.
"""

import asyncio
from typing import Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from main import create_app
from models.base import Model
from models.student import COLLECTION, students
from settings import Settings
from util.token import jwt_encode


class InsertOneResult:
    def __init__(self, inserted_id):
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, documents: list[dict]):
        self.documents = documents

    async def to_list(self, length: Optional[int] = None) -> list[dict]:
        return [dict(document) for document in self.documents[:length]]


class FakeCollection:
    """
    In-memory stand-in for an AsyncIOMotorCollection.

    Supports equality filters, `$set` updates and an optional unique key.
    Every call yields to the event loop first so concurrent requests
    interleave the way they do against a real server.
    """

    def __init__(self, unique: Optional[tuple] = None):
        self.documents: list[dict] = []
        self.unique = unique

    @staticmethod
    def _matches(document: dict, filter: dict) -> bool:
        return all(document.get(key) == value for key, value in filter.items())

    def _first(self, filter: dict) -> Optional[dict]:
        for document in self.documents:
            if self._matches(document, filter):
                return document
        return None

    def find(self, filter: Optional[dict] = None) -> FakeCursor:
        return FakeCursor([d for d in self.documents if self._matches(d, filter or {})])

    async def find_one(self, filter: dict) -> Optional[dict]:
        await asyncio.sleep(0)
        document = self._first(filter)
        return dict(document) if document is not None else None

    async def insert_one(self, document: dict) -> InsertOneResult:
        await asyncio.sleep(0)
        stored = dict(document)
        stored.setdefault("_id", ObjectId())
        if self.unique and self._first({key: stored.get(key) for key in self.unique}):
            raise DuplicateKeyError("E11000 duplicate key error")
        self.documents.append(stored)
        return InsertOneResult(stored["_id"])

    async def find_one_and_update(self, filter: dict, update: dict, return_document=False):
        await asyncio.sleep(0)
        document = self._first(filter)
        if document is None:
            return None
        document.update(update["$set"])
        return dict(document)

    async def find_one_and_delete(self, filter: dict):
        await asyncio.sleep(0)
        document = self._first(filter)
        if document is None:
            return None
        self.documents.remove(document)
        return dict(document)


@pytest.fixture
def settings() -> Settings:
    """Test settings, isolated from any local .env file."""
    return Settings(_env_file=None, SECRET_KEY="test-secret-key", WORKERS=4)


@pytest.fixture
def collection() -> FakeCollection:
    return FakeCollection()


@pytest.fixture
def model(collection: FakeCollection) -> Model:
    return students({COLLECTION: collection})


@pytest.fixture
def app(settings: Settings, collection: FakeCollection):
    """App wired to the in-memory collection, lifespan not run."""
    app = create_app(settings)
    app.state.db.database = {COLLECTION: collection}
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers(settings: Settings) -> dict:
    token = jwt_encode(str(ObjectId()), "Budi", settings)
    return {"Authorization": f"Bearer {token}"}
