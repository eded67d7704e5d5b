import logging
from typing import Optional
from redis.asyncio import Redis
from moving_estimate.core.config import settings
from moving_estimate.core.metrics import redis_connected

logger = logging.getLogger(__name__)

redis: Optional[Redis] = None

async def init_redis() -> Redis:
    global redis
    try:
        redis = Redis.from_url(settings.REDIS_URL, decode_responses=False)
        await redis.ping()
        redis_connected.set(1)
        logger.info("Connected to Redis")
        return redis
    except Exception as e:
        redis = None
        redis_connected.set(0)
        logger.error(f"Failed to connect to Redis: {e}")
        raise

async def close_redis():
    global redis
    if redis:
        await redis.close()
        redis = None
    redis_connected.set(0)

def get_redis() -> Redis:
    global redis
    if redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return redis
