"""서비스 - export only."""

from .cache_service import CacheEntry, CacheService, make_cache_key

__all__ = ["CacheEntry", "CacheService", "make_cache_key"]
