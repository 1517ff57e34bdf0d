"""
FastAPI application factory.

``create_app()`` assembles the application with logging, CORS, error
handlers, the transcription router, the health endpoint and the static
browser client. The module-level ``app`` instance allows
``uvicorn src.api.app:app --reload --port 3000``.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.api.middleware.error_handler import register_error_handlers
from src.api.routes import transcription
from src.core.config import get_settings
from src.core.logging_config import configure_logging
from src.core.models import HealthResponse

logger = logging.getLogger(__name__)

# src/api/app.py -> project root, so a relative static_dir works from any cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Returns:
        FastAPI: The configured application, ready for ``uvicorn``.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Pronunciation Coach",
        description="Speech transcription with confidence-based pronunciation feedback.",
        version="0.1.0",
    )

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check --
    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(
            stt_provider=get_settings().stt_provider,
            timestamp=datetime.now(UTC),
        )

    # -- REST routes --
    app.include_router(transcription.router)

    # -- Static browser client (mounted last so it never shadows API routes) --
    static_dir = Path(settings.static_dir)
    if not static_dir.is_absolute():
        static_dir = _PROJECT_ROOT / static_dir
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %s not found; browser client not served", static_dir)

    return app


app = create_app()
