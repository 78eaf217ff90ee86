"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures middleware, exception handlers, and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import psycopg
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool

from src.adapters.repository import (
    InMemoryApplicantRepository,
    PostgresApplicantRepository,
    run_migrations,
)
from src.api.dependencies import get_pool
from src.api.error_handlers import register_error_handlers
from src.api.v1 import router as v1_router
from src.config.logging import configure_logging
from src.config.settings import get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "registration",
        "description": "Applicant Registration API - Create self-registered applicant accounts",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Configures logging
    - Creates database connection pool and runs migrations (postgres store)
    - Creates the applicant repository
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    logger.info("Starting application...")

    pool = None
    if settings.applicant_store == "memory":
        logger.warning("Using in-memory applicant store, data is lost on shutdown")
        repository = InMemoryApplicantRepository()
    else:
        logger.info("Connecting to database...")

        # Create connection pool with explicit sizing
        pool = ConnectionPool(
            conninfo=settings.database_url,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )

        logger.info("Running database migrations...")
        try:
            run_migrations(pool)
        except Exception:
            pool.close()
            raise

        repository = PostgresApplicantRepository(pool)

    # Store pool and repository in app state for dependency injection
    app.state.pool = pool
    app.state.repository = repository

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if pool is not None:
        pool.close()
        logger.info("Database connection pool closed")


app = FastAPI(
    title="applicant-registration",
    description="Applicant Registration API - Validates and stores new applicant accounts",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_allow_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type"],
)

register_error_handlers(app)

app.include_router(v1_router, prefix="/api")


@app.get("/health", response_model=None)
def health_check(request: Request) -> dict[str, str] | JSONResponse:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Returns 503 Service Unavailable if the database cannot be reached.
    """
    pool = get_pool(request)
    if pool is not None:
        try:
            with pool.connection() as conn:
                conn.execute("SELECT 1")
        except psycopg.Error as e:
            # PoolTimeout is a psycopg.OperationalError
            logger.error(f"Health check failed: {e}")
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"status": "unhealthy"},
            )

    return {"status": "healthy"}
