"""Caches for analyzed components and derived results."""

from .component_cache import CacheEntry, ComponentCache
from .ttl_cache import TTLCache

__all__ = ["CacheEntry", "ComponentCache", "TTLCache"]
