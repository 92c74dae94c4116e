"""
FastAPI dependencies.

Provides dependency injection for database sessions, the Redis pool and services.
"""

from typing import Annotated

from arq.connections import ArqRedis
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from marquee_core.services import EntryService
from marquee_database.session import get_session

from .config import settings


async def get_redis_pool(request: Request) -> ArqRedis | None:
    """
    Get the Redis connection pool created at startup.

    Returns:
        ArqRedis pool, or None when the app started without one.
    """
    return getattr(request.app.state, "redis_pool", None)


def get_entry_service(session: Annotated[AsyncSession, Depends(get_session)]) -> EntryService:
    """Get entry service instance."""
    return EntryService(
        session,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
