from __future__ import annotations

import asyncio
from typing import List

import pytest
from pydantic import ValidationError
from pymongo.errors import ServerSelectionTimeoutError

from areamap.config import Settings
from areamap.db.mongo import MongoHandle


class FakeDb:
    def __init__(self, client: "FakeClient"):
        self.client = client

    async def command(self, name: str):
        await asyncio.sleep(0)
        if self.client.fail:
            raise ServerSelectionTimeoutError("no servers")
        return {"ok": 1.0}


class FakeClient:
    def __init__(self, uri: str, fail: bool = False, **kwargs):
        self.uri = uri
        self.kwargs = kwargs
        self.fail = fail
        self.closed = False

    def __getitem__(self, name: str) -> FakeDb:
        return FakeDb(self)

    def close(self) -> None:
        self.closed = True


class ClientFactory:
    def __init__(self, failures: int = 0):
        self.failures = failures
        self.created: List[FakeClient] = []

    def __call__(self, uri: str, **kwargs) -> FakeClient:
        fail = len(self.created) < self.failures
        client = FakeClient(uri, fail=fail, **kwargs)
        self.created.append(client)
        return client


def test_concurrent_acquire_shares_one_connection() -> None:
    factory = ClientFactory()
    handle = MongoHandle("mongodb://db", "areamap", client_factory=factory, maxPoolSize=5)

    async def main():
        return await asyncio.gather(handle.acquire(), handle.acquire(), handle.acquire())

    first, second, third = asyncio.run(main())
    assert first is second is third
    assert len(factory.created) == 1
    assert factory.created[0].kwargs == {"maxPoolSize": 5}
    assert handle.connected


def test_failed_connect_is_forgotten_and_retried() -> None:
    factory = ClientFactory(failures=1)
    handle = MongoHandle("mongodb://db", "areamap", client_factory=factory)

    async def main():
        with pytest.raises(ServerSelectionTimeoutError):
            await handle.acquire()
        assert not handle.connected
        return await handle.acquire()

    db = asyncio.run(main())
    assert db.client is factory.created[1]
    assert factory.created[0].closed
    assert not factory.created[1].closed


def test_close_then_acquire_reconnects() -> None:
    factory = ClientFactory()
    handle = MongoHandle("mongodb://db", "areamap", client_factory=factory)

    async def main():
        await handle.acquire()
        await handle.close()
        assert not handle.connected
        await handle.acquire()

    asyncio.run(main())
    assert len(factory.created) == 2
    assert factory.created[0].closed


def test_settings_fail_fast_without_connection_string(monkeypatch) -> None:
    monkeypatch.delenv("MONGODB_URI", raising=False)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("MONGODB_URI", "mongodb://example:27017")
    monkeypatch.setenv("AREAMAP_CORS_ALLOW_ORIGINS", "http://a.test, http://b.test")
    s = Settings(_env_file=None)
    assert s.mongo_uri == "mongodb://example:27017"
    assert s.mongo_db == "areamap"
    assert s.cors_origins == ["http://a.test", "http://b.test"]
