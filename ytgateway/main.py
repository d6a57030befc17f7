"""yt-dlp Gateway API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map GatewayError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Logging configured on startup via lifespan context manager

Run with: uvicorn ytgateway.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ytgateway import __version__
from ytgateway.api.error_handlers import register_error_handlers
from ytgateway.api.routes import health, video_actions
from ytgateway.config import get_settings
from ytgateway.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info(f"yt-dlp gateway started (extractor: {settings.extractor_binary})")
    yield
    logger.info("yt-dlp gateway shutting down")


app = FastAPI(
    title="yt-dlp Gateway", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

app.include_router(health.router)
app.include_router(video_actions.router)

register_error_handlers(app)
