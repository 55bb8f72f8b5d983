from versionfusion.cache.base_cache_store import BaseCacheStore
from versionfusion.cache.fingerprint import compute_cache_key
from versionfusion.cache.memory_store import MemoryCacheStore
from versionfusion.cache.models import CacheEntry

__all__ = ["BaseCacheStore", "CacheEntry", "MemoryCacheStore", "compute_cache_key"]
