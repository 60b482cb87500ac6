"""Crudify Application Factory: a FastAPI app serving one or more route collections.

Invariants:
    - Collections are booted explicitly, in the order given
    - Global error handlers registered on every app (api/error_handlers.py)
    - CORS configured from settings (not hardcoded)
    - Database engine created on startup and disposed on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager
from typing import Sequence

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from crudify.api.error_handlers import register_error_handlers
from crudify.api.route_collection import CrudRouteCollection
from crudify.api.registrar import boot
from crudify.config import Settings, get_settings
from crudify.infrastructure import database
from crudify.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(
    collections: Sequence[CrudRouteCollection],
    settings: Settings | None = None,
    title: str = "Crudify API",
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        manager = database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if not await manager.health_check():
            logger.warning("Database unreachable at startup")
        logger.info(f"{title} started with {len(collections)} collection(s)")
        yield
        await manager.dispose()
        logger.info(f"{title} shutting down")

    app = FastAPI(title=title, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    router = APIRouter()
    for collection in collections:
        boot(router, collection)
    app.include_router(router)

    register_error_handlers(app)
    return app
