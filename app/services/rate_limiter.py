"""
Fixed-window request rate limiting backed by Redis.

Each identifier (usually a client IP) gets a counter key that expires after
the window. The limiter fails open: when Redis is not configured or a Redis
call errors, requests are allowed and the problem is logged.
"""

import logging
from typing import Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)

KEY_PREFIX = "rate-limit"


class RateLimiter:
    """Counts requests per identifier within a fixed window"""

    def __init__(self, client: Optional[aioredis.Redis], limit: int = 100, window: int = 60):
        """
        Args:
            client: Async Redis client, or None to disable limiting
            limit: Requests allowed per window
            window: Window length in seconds
        """
        self.client = client
        self.limit = limit
        self.window = window
        self._warned_disabled = False

    @classmethod
    def from_url(cls, redis_url: str, limit: int = 100, window: int = 60) -> "RateLimiter":
        client = aioredis.from_url(redis_url) if redis_url else None
        return cls(client, limit=limit, window=window)

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def _key(self, identifier: str) -> str:
        return f"{KEY_PREFIX}:{identifier}"

    async def is_allowed(self, identifier: str) -> bool:
        """Record a hit for identifier and report whether it is within the limit"""
        if self.client is None:
            if not self._warned_disabled:
                logger.warning("Rate limiting disabled - Redis not configured")
                self._warned_disabled = True
            return True

        key = self._key(identifier)
        try:
            # Expiry is sent with every hit; NX leaves a running window untouched
            async with self.client.pipeline(transaction=True) as pipe:
                pipe.incr(key)
                pipe.expire(key, self.window, nx=True)
                current, _ = await pipe.execute()
        except RedisError as e:
            logger.error(f"Rate limit check failed for {key}, allowing request: {e}")
            return True

        if current > self.limit:
            logger.info(f"Rate limit exceeded for {identifier}: {current}/{self.limit} in {self.window}s")
            return False
        return True

    async def ping(self) -> bool:
        if self.client is None:
            return False
        return bool(await self.client.ping())

    async def close(self) -> None:
        if self.client is not None:
            await self.client.aclose()
