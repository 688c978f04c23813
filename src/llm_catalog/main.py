"""Main FastAPI application

Read-only HTTP surface over the normalized model catalog.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse

from .api.deps import get_catalog_service
from .api.routers import catalog_router, health_router
from .config import settings
from .logs import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown logic"""
    configure_logging(level=settings.log_level)
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)

    service = get_catalog_service()
    if settings.catalog_refresh_on_startup:
        await run_in_threadpool(service.refresh)

    yield

    logger.info("Shutting down...")
    service.client_pool.close()


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    debug=settings.environment == "development",
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(catalog_router)


@app.get("/")
async def root() -> RedirectResponse:
    """Redirect root to API docs"""
    return RedirectResponse(url="/docs")
