"""Redis connection factory for the export cache."""

import redis
import logging

logger = logging.getLogger(__name__)


def create_redis_client(redis_url, socket_timeout=5):
    """Create a Redis connection, or return None when Redis is unavailable.

    Without Redis the export endpoint still works, it just reads the
    database on every request.
    """
    if not redis_url:
        logger.warning("REDIS_URL not set - export caching is disabled")
        return None
    
    try:
        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout
        )
        # Test connection
        client.ping()
        logger.info("Redis connected successfully")
        return client
    except redis.RedisError as e:
        logger.error(f"Redis connection failed: {e}")
        return None
