"""Salescope API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SalescopeError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and snapshot store initialized on startup via lifespan;
      the snapshot is rebuilt from persisted rows before serving

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Failure to load the snapshot at startup is logged, not fatal: the API
      serves the empty snapshot until /transactions/initialize runs
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import salescope.infrastructure.database as db_module
from salescope.api.error_handlers import register_error_handlers
from salescope.api.routes import analytics, health, months, transactions
from salescope.config import get_settings
from salescope.core.errors import SalescopeError
from salescope.infrastructure.observability import setup_logging
from salescope.infrastructure.snapshot_registry import init_snapshot_store
from salescope.services.seed_import import load_snapshot

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    db_module.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    store = init_snapshot_store()
    if settings.load_snapshot_on_startup:
        try:
            async with db_module.db_manager.session() as db:
                await load_snapshot(db, store)
        except SalescopeError as e:
            logger.error(
                f"Snapshot not loaded at startup: {e.message}",
                extra={"error_code": e.code},
            )
    logger.info("Salescope API started")
    yield
    await db_module.db_manager.dispose()
    logger.info("Salescope API shutting down")


app = FastAPI(
    title="Salescope API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(transactions.router)
app.include_router(months.router)
app.include_router(analytics.router)

register_error_handlers(app)
