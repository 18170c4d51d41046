"""
areas_repo.py
- Stores user-drawn areas (named lat/lon polygons) in Mongo.
- Lists by owner in storage order, deletes by id.
"""

from __future__ import annotations
from typing import List, Dict, Any, Optional

from bson import ObjectId
from bson.errors import InvalidId

from ..db.mongo import col_areas


async def list_areas(user_id: str) -> List[dict]:
    cur = (await col_areas()).find({"userId": user_id})
    out = []
    async for d in cur:
        d["_id"] = str(d["_id"])
        out.append(d)
    return out


async def create_area(area: Dict[str, Any]) -> dict:
    doc = dict(area)
    r = await (await col_areas()).insert_one(doc)
    doc["_id"] = str(r.inserted_id)
    return doc


async def delete_area(area_id: str) -> Optional[dict]:
    try:
        oid = ObjectId(area_id)
    except (InvalidId, TypeError):
        # Not an ObjectId, so nothing can match it.
        return None
    d = await (await col_areas()).find_one_and_delete({"_id": oid})
    if d is not None:
        d["_id"] = str(d["_id"])
    return d
