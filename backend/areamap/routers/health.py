"""
health.py
Provides /health for readiness checks.
Includes Mongo ping so persistence is validated.
"""

import time

from fastapi import APIRouter
from pymongo.errors import PyMongoError

from ..db.mongo import get_db
from ..errors import AreaApiError

router = APIRouter()


def now_ms() -> int:
    return int(time.time() * 1000)


@router.get("/health")
async def health():
    try:
        await (await get_db()).command("ping")
    except PyMongoError as exc:
        raise AreaApiError(503, "Database unavailable", str(exc)) from exc
    return {"ok": True, "ts_ms": now_ms()}
