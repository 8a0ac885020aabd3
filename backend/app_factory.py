"""Application factory: entity scan, routers, exception handlers, database lifecycle."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core.config import Settings, get_settings
from core.database import dispose_database, get_database_manager, init_database
from core.entity_scan import collect_metadata, scan_entities
from routes import meta_router, students_router
from version import get_version

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or missing request data is a client error: 400, not 422."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application: scan entity packages, wire routers and database lifecycle.

    Raises core.entity_scan.EntityScanError when an entity package cannot be imported.
    """
    settings = settings or get_settings()
    entities = scan_entities(settings.entity_packages)
    metadata = collect_metadata(entities)

    app = FastAPI(title=settings.app_name, version=get_version())
    app.state.settings = settings
    app.state.entities = entities

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["*"],
            allow_headers=["*"],
            allow_credentials=False,
        )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(meta_router)
    app.include_router(students_router)

    @app.on_event("startup")
    async def on_startup() -> None:
        """Application startup hook."""
        await init_database(settings.database_url)
        if settings.create_schema:
            manager = get_database_manager()
            for md in metadata:
                await manager.create_missing_tables(md)
        logger.info("Application startup complete (%s, env=%s)", settings.app_name, settings.env)

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        """Application shutdown hook."""
        await dispose_database()
        logger.info("Application shutdown complete")

    return app

