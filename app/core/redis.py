# ============================================================================
# Redis Connection
# ============================================================================
import redis.asyncio as redis
from app.config import get_settings

settings = get_settings()

redis_client = redis.from_url(
    settings.REDIS_URL,
    encoding="utf-8",
    decode_responses=True
)

class RedisCache:
    """Redis caching utility"""

    def __init__(self, client: redis.Redis):
        self.client = client

    async def get(self, key: str) -> str | None:
        return await self.client.get(key)

    async def set(self, key: str, value: str, ttl: int = 3600) -> None:
        await self.client.setex(key, ttl, value)

    async def delete(self, key: str) -> None:
        await self.client.delete(key)

    async def ttl(self, key: str) -> int:
        return await self.client.ttl(key)

    async def increment(self, key: str, window: int) -> int:
        """Increment a counter, starting its expiry window on first hit"""
        count = await self.client.incr(key)
        if count == 1:
            await self.client.expire(key, window)
        return count

    def lock(self, name: str, timeout: int):
        """Distributed lock; use as `async with cache.lock(...)`"""
        return self.client.lock(name, timeout=timeout, blocking=False)

cache = RedisCache(redis_client)
