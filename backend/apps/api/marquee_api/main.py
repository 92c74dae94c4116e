"""
Marquee API - FastAPI application entry point.

This module initializes the FastAPI application and configures
middleware, routers, exception handlers and lifecycle events.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from arq import create_pool
from arq.connections import RedisSettings
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marquee_core import get_logger, init_logging
from marquee_core.schemas import HealthResponse, SuccessResponse
from marquee_database.session import close_database, init_database

from .config import settings
from .errors import register_exception_handlers
from .routers import entries

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifecycle manager.

    Opens the database engine and the Redis pool used for rate limiting,
    and closes both on shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    init_logging(settings.log_level)
    logger.info("Starting %s v%s", settings.app_name, settings.version)
    init_database(settings.database_url, echo=settings.database_echo)

    app.state.redis_pool = None
    if settings.rate_limit_enabled:
        app.state.redis_pool = await create_pool(RedisSettings.from_dsn(settings.redis_url))
        logger.info("Redis pool initialized")

    yield

    if app.state.redis_pool is not None:
        await app.state.redis_pool.close()
        logger.info("Redis pool closed")
    await close_database()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Build a configured FastAPI application.

    Returns:
        Application with routers mounted under the configured base path.
    """
    prefix = settings.api_prefix.rstrip("/")

    application = FastAPI(
        title=settings.app_name,
        description="Marquee - Movies & TV Shows Catalog API",
        version=settings.version,
        lifespan=lifespan,
        docs_url=f"{prefix}/docs" if settings.debug else None,
        redoc_url=f"{prefix}/redoc" if settings.debug else None,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    application.include_router(entries.router, prefix=f"{prefix}/entries", tags=["Entries"])

    @application.get(f"{prefix}/health")
    async def health_check() -> SuccessResponse[HealthResponse]:
        """
        Health check endpoint.

        Returns:
            Envelope with service status message and version.
        """
        return SuccessResponse(
            data=HealthResponse(
                message=f"{settings.app_name} is running", version=settings.version
            )
        )

    return application


app = create_app()
