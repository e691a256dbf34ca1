# ABOUTME: Persistent JSON caches for resolved metadata and the HLTB build identifier.
# ABOUTME: Re-exports the cache store types and the document names.

from gamemeta.cache.paths import (
    HLTB_BUILD_FILE,
    HLTB_CACHE_FILE,
    OPENCRITIC_CACHE_FILE,
    cache_path,
)
from gamemeta.cache.store import BuildIdCache, CacheEntry, JsonTtlCache

__all__ = [
    "HLTB_BUILD_FILE",
    "HLTB_CACHE_FILE",
    "OPENCRITIC_CACHE_FILE",
    "BuildIdCache",
    "CacheEntry",
    "JsonTtlCache",
    "cache_path",
]
