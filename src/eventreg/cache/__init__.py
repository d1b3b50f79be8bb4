"""Status cache - Optional accelerator for the public status lookup."""

from eventreg.cache.base import NullCache, StatusCache
from eventreg.cache.exceptions import CacheError
from eventreg.cache.factory import build_cache
from eventreg.cache.memory import MemoryCache
from eventreg.cache.redis_rest import RedisRestCache

__all__ = [
    "CacheError",
    "MemoryCache",
    "NullCache",
    "RedisRestCache",
    "StatusCache",
    "build_cache",
]
