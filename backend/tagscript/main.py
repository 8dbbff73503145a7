"""TagScript API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TagScriptError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Dashboard static files mounted last so /api/v1/* takes precedence

Run with: uvicorn tagscript.main:app --port 8000
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from tagscript.api.error_handlers import register_error_handlers
from tagscript.api.routes import analysis, health
from tagscript.config import get_settings
from tagscript.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    if not settings.anthropic_key_configured:
        logger.warning("ANTHROPIC_API_KEY is not set; analysis requests will fail")
    logger.info("TagScript API started")
    yield
    logger.info("TagScript API shutting down")


app = FastAPI(
    title="TagScript API", version=health.SERVICE_VERSION, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(analysis.router)

register_error_handlers(app)

# html=True serves index.html at "/"
if STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")
