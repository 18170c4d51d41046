from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

# Settings are read at import time and the URI is mandatory.
os.environ.setdefault("MONGODB_URI", "mongodb://localhost:27017")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from areamap.db import mongo
from areamap.main import create_app


class FakeCursor:
    def __init__(self, docs: List[dict]):
        self._it = iter(docs)

    def __aiter__(self):
        return self

    async def __anext__(self):
        try:
            return next(self._it)
        except StopIteration:
            raise StopAsyncIteration


def _matches(doc: dict, query: Dict[str, Any]) -> bool:
    return all(doc.get(k) == v for k, v in query.items())


@dataclass
class FakeCollection:
    docs: List[dict] = field(default_factory=list)
    indexes: List[Any] = field(default_factory=list)
    fail_with: Optional[Exception] = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    async def insert_one(self, doc: dict):
        self._check()
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        self._check()
        return FakeCursor([copy.deepcopy(d) for d in self.docs if _matches(d, query)])

    async def find_one_and_delete(self, query: Dict[str, Any]) -> Optional[dict]:
        self._check()
        for i, d in enumerate(self.docs):
            if _matches(d, query):
                return self.docs.pop(i)
        return None

    async def create_index(self, keys, **kwargs):
        self._check()
        self.indexes.append(keys)
        return "_".join(f"{k}_{v}" for k, v in keys)


@dataclass
class FakeDatabase:
    collections: Dict[str, FakeCollection] = field(default_factory=dict)
    ping_error: Optional[Exception] = None

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, name: str):
        if self.ping_error is not None:
            raise self.ping_error
        return {"ok": 1.0}


@dataclass
class FakeHandle:
    db: FakeDatabase
    closed: bool = False

    async def acquire(self) -> FakeDatabase:
        return self.db

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_db(monkeypatch) -> FakeDatabase:
    db = FakeDatabase()
    monkeypatch.setattr(mongo, "_handle", FakeHandle(db))
    return db


@pytest.fixture
def areas_col(fake_db) -> FakeCollection:
    return fake_db["areas"]


@pytest.fixture
def client(fake_db):
    with TestClient(create_app()) as c:
        yield c
