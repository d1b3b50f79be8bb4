"""Select the cache implementation at start-up."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eventreg.cache.base import NullCache, StatusCache
from eventreg.cache.memory import MemoryCache
from eventreg.cache.redis_rest import RedisRestCache
from eventreg.logging import get_logger

if TYPE_CHECKING:
    from eventreg.config import Settings

logger = get_logger("cache")


def build_cache(settings: Settings) -> StatusCache:
    """Build the cache for the configured backend.

    "none" disables caching and "memory" gives an in-process cache. "auto"
    uses Redis when both REST URL and token are set and a NullCache otherwise.
    """
    if settings.cache_backend == "none":
        logger.info("Status caching disabled")
        return NullCache()

    if settings.cache_backend == "memory":
        logger.info("Using in-process status cache")
        return MemoryCache()

    if settings.redis_configured:
        logger.info("Using Redis REST cache")
        return RedisRestCache(settings.redis_rest_url or "", settings.redis_rest_token or "")

    logger.warning("Redis REST URL or token is missing. Caching will be skipped.")
    return NullCache()
