"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.config import get_settings, validate_environment
from shared.exceptions import AppError
from shared.logging_config import configure_logging

from .errors import app_error_handler, http_error_handler, unhandled_error_handler
from .routes import health, usage, users
from modules.billing.routes import router as billing_router
from modules.content.routes import router as content_router
from modules.feedback.routes import router as feedback_router
from modules.generation.routes import router as generation_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs startup and shutdown logic.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    validate_environment(settings)
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Sermon and Bible-study generation API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Errors raised outside the security wrapper
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(usage.router, prefix="/api", tags=["usage"])
    app.include_router(generation_router, prefix="/api", tags=["generation"])
    app.include_router(content_router, prefix="/api", tags=["content"])
    app.include_router(billing_router, prefix="/api", tags=["billing"])
    app.include_router(feedback_router, prefix="/api", tags=["feedback"])

    return app


# Application instance for uvicorn
app = create_app()
