# config/cache.py
from typing import Optional
from redis.asyncio import Redis, from_url
from config.settings import settings

# One pooled client per process; routes and repositories share it.
_client: Optional[Redis] = None


async def get_redis() -> Redis:
    global _client
    if _client is None:
        client = from_url(
            settings.REDIS_URL,
            decode_responses=False,  # keys come back as bytes from SCAN/GET
            socket_keepalive=True,
            health_check_interval=30,
        )
        try:
            await client.ping()
        except Exception:
            # Don't cache a client that never connected; next call retries.
            await client.aclose()
            raise
        _client = client
    return _client


async def close_redis() -> None:
    global _client
    if _client is not None:
        await _client.aclose()
        _client = None
