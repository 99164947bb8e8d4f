"""Staging Admin Console API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AdminConsoleError → {success: false, ...} envelopes
    - CORS configured from settings (not hardcoded)
    - Database and key-value store opened in the lifespan and closed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from admin_console.api.error_handlers import register_error_handlers
from admin_console.api.routes import (
    admin_dashboard, admin_listings, announcements, health,
)
from admin_console.config import get_settings
from admin_console.infrastructure.cache import close_cache, init_cache
from admin_console.infrastructure.database import close_db, init_db
from admin_console.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_cache(settings.redis_url, max_connections=settings.redis_max_connections)
    logger.info("Admin console API started")
    yield
    logger.info("Admin console API shutting down")
    await close_cache()
    await close_db()


app = FastAPI(
    title="Staging Admin Console API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(admin_dashboard.router)
app.include_router(admin_listings.router)
app.include_router(announcements.router)

register_error_handlers(app)
