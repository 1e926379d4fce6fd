"""Read-through caches over lookup services."""

from .lookup_cache import CacheStats, LookupCache, SynchronizedLookupCache, ThingCache

__all__ = ["CacheStats", "LookupCache", "SynchronizedLookupCache", "ThingCache"]
