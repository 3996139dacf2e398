"""
Redis caching wrapper for SymptoLens.
"""

import hashlib
import json
from typing import Any, Optional

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from symptolens.config import get_settings
from symptolens.core.logging import get_logger

logger = get_logger(__name__)

KEY_PREFIX = "symptolens"


class CacheService:
    """Redis-based caching service with connection pooling."""

    def __init__(self, url: Optional[str] = None) -> None:
        self._url = url
        self._pool: Optional[ConnectionPool] = None
        self._client: Optional[redis.Redis] = None

    async def connect(self) -> None:
        """Establish connection to Redis."""
        url = self._url or get_settings().REDIS_URL
        try:
            self._pool = ConnectionPool.from_url(
                url,
                max_connections=50,
                decode_responses=True
            )
            self._client = redis.Redis(connection_pool=self._pool)
            await self._client.ping()
            logger.info("Connected to Redis", extra={"url": url})
        except Exception as e:
            logger.warning(f"Redis connection failed: {e}. Caching disabled.")
            self._client = None

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
        if self._pool:
            await self._pool.disconnect()
            self._pool = None
        logger.info("Disconnected from Redis")

    @property
    def is_connected(self) -> bool:
        """Check if Redis is connected."""
        return self._client is not None

    @staticmethod
    def generate_key(prefix: str, *args: Any) -> str:
        """Generate a cache key from prefix and arguments."""
        key_data = json.dumps(args, sort_keys=True, default=str)
        hash_val = hashlib.md5(key_data.encode()).hexdigest()[:12]
        return f"{KEY_PREFIX}:{prefix}:{hash_val}"

    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value from cache.

        Args:
            key: Cache key.

        Returns:
            Cached value or None if not found.
        """
        if not self._client:
            return None

        try:
            value = await self._client.get(key)
            if value:
                logger.debug(f"Cache hit: {key}")
                return json.loads(value)
            logger.debug(f"Cache miss: {key}")
            return None
        except Exception as e:
            logger.error(f"Cache get error: {e}", extra={"key": key})
            return None

    async def get_raw(self, key: str) -> Optional[str]:
        """
        Get a raw string value without decoding.

        Unlike get(), errors propagate so callers can tell a missing key
        apart from an unreachable server.
        """
        if not self._client:
            raise ConnectionError("Redis not connected")
        return await self._client.get(key)

    async def set(
        self,
        key: str,
        value: Any,
        ttl: Optional[int] = None
    ) -> bool:
        """
        Set a value in cache.

        Args:
            key: Cache key.
            value: Value to cache (JSON-serializable).
            ttl: Time to live in seconds.

        Returns:
            True if successful, False otherwise.
        """
        if not self._client:
            return False

        try:
            ttl = ttl or get_settings().ANALYSIS_CACHE_TTL
            serialized = json.dumps(value, default=str)
            await self._client.setex(key, ttl, serialized)
            logger.debug(f"Cache set: {key}", extra={"ttl": ttl})
            return True
        except Exception as e:
            logger.error(f"Cache set error: {e}", extra={"key": key})
            return False

    async def delete(self, key: str) -> bool:
        """Delete a value from cache."""
        if not self._client:
            return False

        try:
            await self._client.delete(key)
            logger.debug(f"Cache delete: {key}")
            return True
        except Exception as e:
            logger.error(f"Cache delete error: {e}", extra={"key": key})
            return False

    async def clear_pattern(self, pattern: str) -> int:
        """Clear all keys matching a pattern."""
        if not self._client:
            return 0

        try:
            keys = []
            async for key in self._client.scan_iter(f"{KEY_PREFIX}:{pattern}:*"):
                keys.append(key)

            if keys:
                deleted = await self._client.delete(*keys)
                logger.info(f"Cleared {deleted} cache entries", extra={"pattern": pattern})
                return deleted
            return 0
        except Exception as e:
            logger.error(f"Cache clear error: {e}", extra={"pattern": pattern})
            return 0

    # Convenience methods for analysis responses
    @classmethod
    def analysis_key(cls, factors: list[str], body_location: Optional[str], include_llm: bool) -> str:
        """Key for a scoring request; factor order does not matter."""
        return cls.generate_key(
            "analysis",
            sorted(set(factors)),
            body_location or "",
            include_llm
        )

    async def get_analysis(
        self,
        factors: list[str],
        body_location: Optional[str],
        include_llm: bool
    ) -> Optional[dict]:
        """Get cached analysis response."""
        return await self.get(self.analysis_key(factors, body_location, include_llm))

    async def set_analysis(
        self,
        factors: list[str],
        body_location: Optional[str],
        include_llm: bool,
        data: dict
    ) -> bool:
        """Cache analysis response."""
        settings = get_settings()
        key = self.analysis_key(factors, body_location, include_llm)
        return await self.set(key, data, settings.ANALYSIS_CACHE_TTL)

    async def invalidate_analyses(self) -> int:
        """Drop every cached analysis, e.g. after the reference data changed."""
        return await self.clear_pattern("analysis")
