"""
Redis connection shared by the persisted calendar state
Supports both standard Redis and managed Redis URLs
"""

import logging
from typing import Optional

import redis

from . import config

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None


def _mask_url(redis_url: str) -> str:
    if "@" in redis_url:
        url_parts = redis_url.split("@")
        protocol = url_parts[0].split(":")[0]
        return f"{protocol}:****@{url_parts[1]}"
    return "****"


def get_redis_client() -> redis.Redis:
    """
    Get or create Redis client
    Raises if the connection test fails; callers decide whether to fail open
    """
    global redis_client

    if redis_client is None:
        logger.info("🔄 Initializing Redis connection...")

        if config.REDIS_URL:
            logger.info(f"📡 Using Redis URL connection: {_mask_url(config.REDIS_URL)}")
            client = redis.from_url(
                config.REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=15,
                socket_timeout=30,
                retry_on_timeout=True,
                health_check_interval=30,
            )
        else:
            logger.info(
                f"📡 Using Redis at {config.REDIS_HOST}:{config.REDIS_PORT} "
                f"(db {config.REDIS_DB}, SSL {'enabled' if config.REDIS_SSL else 'disabled'})"
            )
            client = redis.Redis(
                host=config.REDIS_HOST,
                port=config.REDIS_PORT,
                password=config.REDIS_PASSWORD,
                db=config.REDIS_DB,
                ssl=config.REDIS_SSL,
                decode_responses=True,
                socket_connect_timeout=15,
                socket_timeout=30,
                retry_on_timeout=True,
                health_check_interval=30,
            )

        try:
            client.ping()
        except Exception as e:
            logger.error(f"❌ Failed to connect to Redis: {str(e)}")
            raise
        redis_client = client
        logger.info("Redis connected successfully")

    return redis_client


def close_redis_client() -> None:
    global redis_client

    if redis_client is not None:
        redis_client.close()
        redis_client = None
