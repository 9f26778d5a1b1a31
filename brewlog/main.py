"""BrewLog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BrewLogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager
    - Published OpenAPI document lists the accepted values of every symbolic field

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created on startup only when database_create_all is set (local SQLite runs);
      deployments migrate with Alembic
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from brewlog.api.error_handlers import register_error_handlers
from brewlog.api.openapi import install_openapi
from brewlog.api.routes import (
    analytics, brew_sessions, coffee_beans, equipment, grind_settings, health,
)
from brewlog.config import get_settings
from brewlog.infrastructure.database import init_db
from brewlog.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_all:
        await manager.create_all()
    logger.info("BrewLog API started")
    yield
    await manager.dispose()
    logger.info("BrewLog API shutting down")


settings = get_settings()
app = FastAPI(
    title=settings.api_title, version=settings.api_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(coffee_beans.router)
app.include_router(grind_settings.router)
app.include_router(equipment.router)
app.include_router(brew_sessions.router)
app.include_router(analytics.router)

register_error_handlers(app)
install_openapi(app)
