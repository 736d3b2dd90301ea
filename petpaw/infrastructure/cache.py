import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)


def check_cache_connection():
    # Check if the cache is configured correctly
    if not settings.CACHES:
        logger.error("CACHES setting is not configured !!")
        raise ValueError("CACHES setting is not configured")

    # Round-trip a probe key
    try:
        cache.set("health_check", "ok", 10)
        if cache.get("health_check") == "ok":
            logger.info("Cache connection established")
            return True
        logger.error("Cache connection failed !!")
        return False
    except Exception as e:
        logger.error(f"Cache connection error: {e}")
        raise ValueError(f"Cache connection error: {e}")


def get_cache_key_value(key):
    try:
        value = cache.get(key)
        if value is None:
            logger.debug(f"Cache miss for key: {key}")
        else:
            logger.debug(f"Cache hit for key: {key}")
        return value
    except Exception as e:
        logger.error(f"Cache get error for key: {key}, error: {e}")
        raise ValueError(f"Cache get error for key: {key}, error: {e}")


def set_cache_key(key, value, ttl=None):
    try:
        cache.set(key, value, ttl)
        logger.debug(f"Cache set for key: {key}")
    except Exception as e:
        logger.error(f"Cache set error for key: {key}, error: {e}")
        raise ValueError(f"Cache set error for key: {key}, error: {e}")


def update_key_ttl(key, ttl):
    try:
        touched = cache.touch(key, ttl)
        logger.debug(f"Cache TTL updated for key: {key}")
        return touched
    except Exception as e:
        logger.error(f"Cache TTL update error for key: {key}, error: {e}")
        raise ValueError(f"Cache TTL update error for key: {key}, error: {e}")
