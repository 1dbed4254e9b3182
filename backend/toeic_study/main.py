"""
FastAPI Application

Wires routers, CORS and error handling.

Run with:
    uvicorn toeic_study.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from toeic_study import __version__
from toeic_study.config import Settings, settings as default_settings
from toeic_study.logging_config import setup_logging
from toeic_study.middleware.error_handling import setup_error_handling
from toeic_study.routers import dashboard_router, health_router, progress_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings = default_settings) -> FastAPI:
    """
    Build the API application.

    Args:
        settings: Application settings (defaults to the cached instance).

    Returns:
        Configured FastAPI app.
    """
    setup_logging(settings.LOG_LEVEL, debug=settings.DEBUG)

    app = FastAPI(title=f"{settings.APP_NAME} API", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    setup_error_handling(app, debug=settings.DEBUG)

    app.include_router(health_router.router)
    app.include_router(progress_router.router)
    app.include_router(dashboard_router.router)

    logger.info(f"{settings.APP_NAME} API v{__version__} ready")
    return app


app = create_app()
