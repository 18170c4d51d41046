"""
db/mongo.py
What this file does:
- Owns the async MongoDB client (Motor) behind a lazily-connected handle.
- Defines the areas collection.
- Builds indexes at startup (so per-user listing stays fast).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING

from ..config import settings

logger = logging.getLogger(__name__)


class MongoHandle:
    """
    Process-wide connection to one database.

    The first acquire() creates the client and pings the server. Callers that
    arrive while that attempt is in flight await the same attempt. A failed
    attempt closes its client and is forgotten, so the next acquire() connects
    again.
    """

    def __init__(
        self,
        uri: str,
        db_name: str,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
        **client_kwargs: Any,
    ):
        self._uri = uri
        self._db_name = db_name
        self._client_factory = client_factory
        self._client_kwargs = client_kwargs
        self._client: Optional[Any] = None
        self._db: Optional[AsyncIOMotorDatabase] = None
        self._pending: Optional["asyncio.Future[AsyncIOMotorDatabase]"] = None

    @property
    def connected(self) -> bool:
        return self._db is not None

    async def acquire(self) -> AsyncIOMotorDatabase:
        if self._db is not None:
            return self._db
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._connect())
        pending = self._pending
        try:
            db = await asyncio.shield(pending)
        except Exception:
            if self._pending is pending:
                self._pending = None
            raise
        self._db = db
        return db

    async def _connect(self) -> AsyncIOMotorDatabase:
        logger.info("Connecting to MongoDB database %r", self._db_name)
        client = self._client_factory(self._uri, **self._client_kwargs)
        try:
            db = client[self._db_name]
            await db.command("ping")
        except Exception as exc:
            logger.error("MongoDB connection error: %s", exc)
            client.close()
            raise
        self._client = client
        logger.info("MongoDB connected")
        return db

    async def close(self) -> None:
        pending, self._pending = self._pending, None
        if pending is not None and not pending.done():
            pending.cancel()
        if self._client is not None:
            self._client.close()
        self._client = None
        self._db = None


_handle: Optional[MongoHandle] = None


def get_handle() -> MongoHandle:
    global _handle
    if _handle is None:
        _handle = MongoHandle(
            settings.mongo_uri,
            settings.mongo_db,
            maxPoolSize=settings.mongo_max_pool_size,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        )
    return _handle


async def close_handle() -> None:
    global _handle
    if _handle is not None:
        await _handle.close()
    _handle = None


async def get_db() -> AsyncIOMotorDatabase:
    return await get_handle().acquire()


async def col_areas() -> AsyncIOMotorCollection:
    return (await get_db())["areas"]


async def ensure_indexes() -> None:
    # Areas: listed per owner
    await (await col_areas()).create_index([("userId", ASCENDING)])
