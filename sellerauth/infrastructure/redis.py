"""
Redis Connection Module

Provides the asynchronous Redis client that backs the credential store
(user documents, the token blacklist and seller credentials).

**Security Note**: Use a ``rediss://`` URL with a password when Redis is not on
a trusted network, and never log the connection URL.
"""

import logging

from redis.asyncio import Redis

logger = logging.getLogger(__name__)


def create_redis_client(url: str) -> Redis:
    """Create a client that decodes responses to ``str``.

    The connection pool is opened lazily on first command.
    """
    redis = Redis.from_url(url, encoding="utf-8", decode_responses=True)
    logger.debug("Redis client created")
    return redis


async def close_redis_client(redis: Redis) -> None:
    await redis.aclose()
    logger.debug("Redis connection closed")
