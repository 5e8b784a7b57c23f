"""Fixed-window rate limiter backed by Redis counters."""

import redis.asyncio as aioredis


class RateLimiter:
    """Counts hits per (scope, client key) in Redis keys that expire with the window."""

    def __init__(self, redis: aioredis.Redis, limit: int, window: int):
        self.redis = redis
        self.limit = limit
        self.window = window

    def _key(self, scope: str, client_key: str) -> str:
        return f"ratelimit:{scope}:{client_key}"

    async def hit(self, scope: str, client_key: str) -> bool:
        """Record one hit. Returns False once the client is over the limit."""
        key = self._key(scope, client_key)
        # The counter is created with its TTL in the same transaction as the
        # increment, so a key can never be left without an expiry
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(key, 0, ex=self.window, nx=True)
            pipe.incr(key)
            _, count = await pipe.execute()
        return count <= self.limit

    async def retry_after(self, scope: str, client_key: str) -> int:
        """Seconds until the current window resets (at least 1)."""
        ttl = await self.redis.ttl(self._key(scope, client_key))
        return max(int(ttl), 1)
