"""
errors.py
One error shape for every failure the API reports: {"error": <message>, "details": <optional>}.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AreaApiError(Exception):
    def __init__(self, status_code: int, error: str, details: Optional[Any] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


def error_body(error: str, details: Optional[Any] = None) -> dict:
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return body


def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AreaApiError)
    async def area_api_error_handler(request: Request, exc: AreaApiError):
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.error, exc.details))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [{"loc": [str(p) for p in e.get("loc", ())], "msg": e.get("msg", "")} for e in exc.errors()]
        logger.info("Rejected %s %s: %s", request.method, request.url.path, details)
        return JSONResponse(status_code=400, content=error_body("Invalid request", details))
