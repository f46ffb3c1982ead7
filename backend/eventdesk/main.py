"""EventDesk API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map EventDeskError -> structured JSON responses
    - Settings loaded at startup: a missing DATABASE_URL aborts the process
    - Database connected lazily on first use; engine disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Three error handler layers (domain, Pydantic, catch-all) in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventdesk.api.error_handlers import register_error_handlers
from eventdesk.api.routes import bookings, events, health
from eventdesk.config import get_settings
from eventdesk.infrastructure.database import close_db
from eventdesk.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("EventDesk API started")
    yield
    await close_db()
    logger.info("EventDesk API shutting down")


app = FastAPI(
    title="EventDesk API", version="1.0.0", lifespan=lifespan,
)

# CORS - configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(events.router)
app.include_router(bookings.router)
