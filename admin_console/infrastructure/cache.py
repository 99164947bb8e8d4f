"""Key-Value Store — Redis-backed implementation of the KeyValueStore protocol.

Invariants:
    - Values are strings (decode_responses=True); callers own serialization
    - Every redis error is mapped to CacheError (core/errors.py)
    - delete() of a missing key is a no-op

Design Decisions:
    - redis.asyncio client created by init_cache and closed by close_cache from
      the FastAPI lifespan, mirroring the database manager
    - No in-memory fallback: a missing cache surfaces as a dependency failure
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from admin_console.core.errors import CacheError

logger = logging.getLogger(__name__)


class RedisKeyValueStore:
    """KeyValueStore over a redis.asyncio connection pool."""

    def __init__(self, redis_url: str, max_connections: int = 10):
        self._redis = aioredis.from_url(
            redis_url,
            max_connections=max_connections,
            decode_responses=True,
        )

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            logger.error(f"Redis get error: {e}", extra={"operation": "get"})
            raise CacheError(str(e), "get")

    async def set(
        self, key: str, value: str, ttl_seconds: int | None = None,
    ) -> None:
        try:
            await self._redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            logger.error(f"Redis set error: {e}", extra={"operation": "set"})
            raise CacheError(str(e), "set")

    async def delete(self, *keys: str) -> None:
        if not keys:
            return
        try:
            await self._redis.delete(*keys)
        except RedisError as e:
            logger.error(f"Redis delete error: {e}", extra={"operation": "delete"})
            raise CacheError(str(e), "delete")

    async def ping(self) -> bool:
        try:
            return bool(await self._redis.ping())
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    async def close(self) -> None:
        await self._redis.aclose()


# Initialized on startup, closed on shutdown
cache_store: RedisKeyValueStore | None = None


def init_cache(redis_url: str, **kwargs):
    global cache_store
    cache_store = RedisKeyValueStore(redis_url, **kwargs)


async def close_cache():
    global cache_store
    if cache_store:
        await cache_store.close()
        cache_store = None


def get_kv_store() -> RedisKeyValueStore:
    """FastAPI dependency for the key-value store."""
    if not cache_store:
        raise RuntimeError("Cache not initialized")
    return cache_store
