"""
areas.py
List / create / delete a user's areas in MongoDB.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Query
from pymongo.errors import PyMongoError

from ..config import settings
from ..errors import AreaApiError
from ..geo import DELHI_NCR
from ..repos import areas_repo
from ..schemas import AreaIn, AreaOut, ErrorOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["areas"])

MIN_AREA_POINTS = 3

_errors = {
    400: {"model": ErrorOut},
    500: {"model": ErrorOut},
}


@router.get("/areas", response_model=List[AreaOut], responses=_errors)
async def list_areas(user_id: Optional[str] = Query(default=None, alias="userId")):
    if not user_id:
        raise AreaApiError(400, "UserId is required")
    try:
        areas = await areas_repo.list_areas(user_id)
    except PyMongoError as exc:
        logger.exception("Error in GET /api/areas")
        raise AreaApiError(500, "Internal Server Error", str(exc)) from exc
    logger.info("Fetched %s areas for userId=%s", len(areas), user_id)
    return areas


@router.post("/areas", status_code=201, response_model=AreaOut, responses=_errors)
async def create_area(body: AreaIn):
    missing = body.missing_fields()
    if missing:
        raise AreaApiError(400, "Missing required fields", missing)
    if settings.strict_validation:
        _check_area(body)
    try:
        area = await areas_repo.create_area(body.to_doc())
    except PyMongoError as exc:
        logger.exception("Error in POST /api/areas")
        raise AreaApiError(500, "Internal Server Error", str(exc)) from exc
    logger.info("Created area %s (%r) for userId=%s", area["_id"], area["name"], area["userId"])
    return area


@router.delete("/areas", responses={**_errors, 404: {"model": ErrorOut}})
async def delete_area(area_id: Optional[str] = Query(default=None, alias="id")):
    if not area_id:
        raise AreaApiError(400, "Area ID is required")
    try:
        deleted = await areas_repo.delete_area(area_id)
    except PyMongoError as exc:
        logger.exception("Error in DELETE /api/areas")
        raise AreaApiError(500, "Failed to delete area", str(exc)) from exc
    if deleted is None:
        logger.info("Area not found for deletion: %s", area_id)
        raise AreaApiError(404, "Area not found")
    logger.info("Deleted area %s", area_id)
    return {"success": True}


def _check_area(body: AreaIn) -> None:
    if not body.name.strip():
        raise AreaApiError(400, "Area name must not be blank")
    if len(body.coordinates) < MIN_AREA_POINTS:
        raise AreaApiError(400, f"An area needs at least {MIN_AREA_POINTS} coordinates")
    if not DELHI_NCR.covers_all(body.coordinates):
        raise AreaApiError(400, "Coordinates are outside Delhi NCR boundaries")
