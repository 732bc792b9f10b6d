"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool

from listi import __version__
from listi.adapters.mail import build_mail_sender
from listi.adapters.repository.postgres import run_migrations
from listi.api import frontend
from listi.api.routes import router, verification_router
from listi.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# OpenAPI tags for documentation grouping
tags_metadata = [
    {"name": "registration", "description": "Create user accounts"},
    {"name": "verification", "description": "Confirm account email addresses"},
]


def configure_logging(level: str) -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup
    - Runs migrations on startup
    - Builds the configured mail sender
    - Closes connection pool on shutdown
    """
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)

    logger.info("Starting application...")
    logger.info("Connecting to database...")

    # Create connection pool with explicit sizing
    pool = ConnectionPool(
        conninfo=settings.conninfo(),
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        open=True,
    )

    if settings.run_migrations:
        logger.info("Running database migrations...")
        run_migrations(pool)

    # Store long-lived collaborators in app state for dependency injection
    app.state.pool = pool
    app.state.mail_sender = build_mail_sender(settings)

    logger.info(
        "Application startup complete (verification %s, mail provider %s)",
        "enabled" if settings.verification_enabled else "disabled",
        settings.mail_provider,
    )

    yield

    # Shutdown
    logger.info("Shutting down application...")
    pool.close()
    logger.info("Database connection pool closed")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer malformed bodies with the API's ``{"error": ...}`` shape."""
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "invalid request body"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; routes for verification are mounted only when enabled."""
    settings = settings or get_settings()

    app = FastAPI(
        title="listi",
        description="User registration API with email verification",
        version=__version__,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(router)
    if settings.verification_enabled:
        app.include_router(verification_router)

    @app.get("/health")
    def health_check(request: Request) -> dict[str, str]:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application and database are healthy.
        Raises exception if database connection fails.
        """
        pool = request.app.state.pool
        with pool.connection() as conn:
            conn.execute("SELECT 1")

        return {"status": "healthy"}

    # Catch-all must be registered last
    app.include_router(frontend.router)
    return app
