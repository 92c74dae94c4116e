"""
Fixed-window rate limiting.

Counts requests per client IP in Redis (SET NX EX opens the window, INCR
counts) and rejects requests over budget with RATE_LIMIT_EXCEEDED (HTTP 429).
"""

from typing import Annotated

from arq.connections import ArqRedis
from fastapi import Depends, Request

from marquee_core import get_logger
from marquee_core.errors import CatalogError, ErrorCode, ErrorKind
from marquee_core.redis_keys import RedisKeys

from .config import settings
from .dependencies import get_redis_pool

logger = get_logger(__name__)


def client_id_for(request: Request) -> str:
    """Identify the calling client by its remote address."""
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


class RateLimiter:
    """Request budget dependency for one scope."""

    def __init__(self, scope: str, *, write: bool = False):
        """
        Initialize limiter.

        Args:
            scope: Budget name, part of the Redis key.
            write: Use the stricter write budget.
        """
        self.scope = scope
        self.write = write

    @property
    def limit(self) -> int:
        if self.write:
            return settings.rate_limit_write_requests
        return settings.rate_limit_requests

    async def __call__(
        self,
        request: Request,
        redis: Annotated[ArqRedis | None, Depends(get_redis_pool)],
    ) -> None:
        if not settings.rate_limit_enabled:
            return
        if redis is None:
            raise RuntimeError("Redis pool not initialized")

        client_id = client_id_for(request)
        key = RedisKeys.api_rate_limit(self.scope, client_id)
        # Window starts with its TTL already set, so a counter never outlives it
        await redis.set(key, 0, ex=settings.rate_limit_window_seconds, nx=True)
        count = await redis.incr(key)

        if count > self.limit:
            logger.warning(
                "Rate limit exceeded",
                extra={"scope": self.scope, "client_id": client_id, "count": count},
            )
            if self.write:
                raise CatalogError(
                    ErrorKind.RATE_LIMITED,
                    "Too many write requests from this IP, please try again later",
                    code=ErrorCode.WRITE_RATE_LIMIT_EXCEEDED,
                )
            raise CatalogError(
                ErrorKind.RATE_LIMITED,
                "Too many requests from this IP, please try again later",
            )


api_rate_limit = RateLimiter("api")
write_rate_limit = RateLimiter("write", write=True)
