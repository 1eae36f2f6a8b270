"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
routers, the health endpoint and the static front-end. The module-level
``app`` instance allows ``uvicorn kenai.api.app:app --reload``.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from kenai import __version__
from kenai.api.middleware.error_handler import register_error_handlers
from kenai.api.routes import recorder, summary, trends
from kenai.core.config import get_settings
from kenai.core.models import HealthResponse

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application."""
    settings = get_settings()
    logging.getLogger("kenai").setLevel(settings.log_level.upper())

    app = FastAPI(
        title="Kenai Recorder",
        description="Voice recorder with WAV packing, cloud upload and AI summaries.",
        version=__version__,
    )

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check (root-level, not under /api) --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__, timestamp=datetime.now(UTC))

    # -- REST routes --
    app.include_router(recorder.router, prefix="/api")
    app.include_router(summary.router, prefix="/api")
    app.include_router(trends.router, prefix="/api")

    # -- Static front-end (mounted last so /api and /health win) --
    public_dir = Path(settings.public_dir)
    if public_dir.is_dir():
        app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")
    else:
        logger.info("Static directory %s not found; serving API only", public_dir)

    return app


app = create_app()
