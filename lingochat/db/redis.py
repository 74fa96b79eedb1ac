"""Redis connection backing the translation cache.

The pool is created lazily from ``settings.redis_url`` and is only touched
when the LLM translator runs with caching enabled. Driver errors never
escape: ``RedisClient`` turns them into RedisConnectionError, which the
caching translator treats as a cache miss.
"""

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from lingochat.core.config import settings
from lingochat.core.exceptions import RedisConnectionError

logger = structlog.get_logger(__name__)

_pool: Redis | None = None


class RedisClient:
    """String get/set-with-expiry over a redis.asyncio connection."""

    def __init__(self, client: Redis) -> None:
        self._r = client

    async def get(self, key: str) -> str | None:
        try:
            return await self._r.get(name=key)
        except RedisError as e:
            logger.error("redis_get_failed", key=key, error=str(e))
            raise RedisConnectionError(f"Redis GET failed: {e}") from e

    async def set_with_ttl(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._r.setex(name=key, time=ttl_seconds, value=value)
        except RedisError as e:
            logger.error("redis_set_failed", key=key, ttl_seconds=ttl_seconds, error=str(e))
            raise RedisConnectionError(f"Redis SET failed: {e}") from e


def get_redis() -> RedisClient:
    """Client over the process-wide pool, created on first use."""
    global _pool
    if _pool is None:
        _pool = Redis.from_url(settings.redis_url, decode_responses=True, encoding="utf-8")
        logger.info("redis_pool_created")
    return RedisClient(_pool)


async def close_redis() -> None:
    global _pool
    if _pool is None:
        return
    logger.info("redis_shutdown")
    await _pool.aclose()
    _pool = None
