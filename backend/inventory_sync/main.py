"""Inventory Sync API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map InventorySyncError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan, only for the SQL store backend

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; this module only wires things together
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_sync.api.error_handlers import register_error_handlers
from inventory_sync.api.routes import health, sync
from inventory_sync.config import get_settings
from inventory_sync.core.domain_types import StoreBackend
from inventory_sync.infrastructure.database import create_schema, dispose_db, init_db
from inventory_sync.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if settings.store_backend is StoreBackend.SQL:
        init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_schema:
            await create_schema()
    logger.info(
        f"Inventory Sync API started (store backend: {settings.store_backend.value})",
    )
    yield
    await dispose_db()
    logger.info("Inventory Sync API shutting down")


app = FastAPI(
    title="Inventory Sync API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(sync.router)

register_error_handlers(app)
