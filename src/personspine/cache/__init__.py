"""Cache backends for enrichment results."""

from personspine.cache.memory import CacheEntry, MemoryCache
from personspine.cache.redis import RedisCache

__all__ = ["CacheEntry", "MemoryCache", "RedisCache"]
