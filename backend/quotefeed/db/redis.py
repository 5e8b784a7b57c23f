"""Redis connection holding the per-client rate limit counters.

Nothing else is kept in Redis; feeds are computed fresh on every request.
"""

import redis.asyncio as redis

from quotefeed.config import settings

_rate_limit_store: redis.Redis | None = None


def rate_limit_store() -> redis.Redis:
    """Shared client for rate limit counters, connected on first use."""
    global _rate_limit_store
    if _rate_limit_store is None:
        _rate_limit_store = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
    return _rate_limit_store


async def close_rate_limit_store() -> None:
    global _rate_limit_store
    if _rate_limit_store is not None:
        await _rate_limit_store.aclose()
        _rate_limit_store = None


async def get_rate_limit_store() -> redis.Redis:
    """FastAPI dependency for routes that enforce a rate limit."""
    return rate_limit_store()
