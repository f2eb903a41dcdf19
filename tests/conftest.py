"""
Shared fixtures: an in-memory collection double, fast hashing, and an app
client backed by an in-memory SQLite database.
"""

import copy
import uuid

import pytest
from fastapi.testclient import TestClient

from auth.jwt import TokenSigner
from auth.password import PasswordHasher
from config.settings import Settings
from database.store import DocumentStore, DuplicateKeyError

TEST_SECRET = "test-secret"
FAST_ROUNDS = 4


class InMemoryCollection:
    """Dict-backed stand-in for ``DocumentCollection``."""

    def __init__(self, unique: tuple = ()):
        self.docs = {}
        self.unique = unique

    async def find_one(self, **filters):
        for doc in self.docs.values():
            if all(doc.get(k) == v for k, v in filters.items()):
                return copy.deepcopy(doc)
        return None

    async def find_by_id(self, record_id):
        doc = self.docs.get(record_id)
        return copy.deepcopy(doc) if doc is not None else None

    async def find(self, **filters):
        return [
            copy.deepcopy(d)
            for d in self.docs.values()
            if all(d.get(k) == v for k, v in filters.items())
        ]

    async def create(self, document):
        for field in self.unique:
            if any(d.get(field) == document.get(field) for d in self.docs.values()):
                raise DuplicateKeyError(f"duplicate {field}")
        doc = dict(document, id=uuid.uuid4().hex)
        self.docs[doc["id"]] = doc
        return copy.deepcopy(doc)

    async def find_by_id_and_update(self, record_id, changes):
        doc = self.docs.get(record_id)
        if doc is None:
            return None
        doc.update(changes)
        return copy.deepcopy(doc)

    async def find_by_id_and_delete(self, record_id):
        return self.docs.pop(record_id, None)


@pytest.fixture
def users():
    return InMemoryCollection(unique=("username",))


@pytest.fixture
def recipes():
    return InMemoryCollection()


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=FAST_ROUNDS)


@pytest.fixture
def signer():
    return TokenSigner(TEST_SECRET)


@pytest.fixture
def client():
    from main import create_app

    settings = Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret=TEST_SECRET,
        bcrypt_rounds=FAST_ROUNDS,
    )
    app = create_app(settings, store=DocumentStore.from_url(settings.database_url))
    with TestClient(app) as c:
        yield c
