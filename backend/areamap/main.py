"""
main.py
Unified backend entrypoint. Creates the FastAPI app and wires everything.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from .config import settings
from .db.mongo import close_handle, ensure_indexes
from .errors import install_error_handlers
from .routers import areas, health


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await ensure_indexes()
    except PyMongoError as exc:
        # The handle reconnects on the next request.
        logger.warning("MongoDB not ready at startup: %s", exc)
    yield
    await close_handle()


def create_app() -> FastAPI:
    app = FastAPI(title="Area Map Backend", version="1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_error_handlers(app)

    # include routers
    app.include_router(health.router)
    app.include_router(areas.router)

    return app


def setup_logging(level: str = settings.log_level) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run() -> None:
    setup_logging()
    uvicorn.run(
        "areamap.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


logger = logging.getLogger("areamap.backend")
app = create_app()

__all__ = ["app", "create_app", "run"]
