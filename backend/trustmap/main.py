"""Trustmap API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TrustmapError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Directory initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Directory is in-memory: state is rebuilt from the seed file on every start
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from trustmap.api.error_handlers import register_error_handlers
from trustmap.api.routes import entities, guides, health, lookups, signals
from trustmap.config import get_settings
from trustmap.infrastructure.observability import setup_logging
from trustmap.services.directory_service import init_directory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_directory(
        timezone=settings.local_timezone,
        seed_path=settings.seed_path,
        default_list_limit=settings.default_list_limit,
        default_popular_limit=settings.default_popular_limit,
    )
    logger.info("Trustmap API started")
    yield
    logger.info("Trustmap API shutting down")


app = FastAPI(
    title="Trustmap API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(entities.router)
app.include_router(signals.router)
app.include_router(lookups.router)
app.include_router(guides.router)

register_error_handlers(app)
