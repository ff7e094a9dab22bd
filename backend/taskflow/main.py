"""Taskflow API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskflowError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: single place for startup and cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import taskflow.infrastructure.database as db_module
from taskflow.api.error_handlers import register_error_handlers
from taskflow.api.routes import directory, health, tasks
from taskflow.config import get_settings
from taskflow.infrastructure.observability import setup_logging

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
    logger.info("Taskflow API started")
    yield
    if db_module.db_manager:
        await db_module.db_manager.dispose()
    logger.info("Taskflow API shutting down")


app = FastAPI(
    title="Taskflow API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(tasks.router)
app.include_router(directory.projects_router)
app.include_router(directory.users_router)

register_error_handlers(app)
