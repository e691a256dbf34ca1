# ABOUTME: Locations and lifetimes of the on-disk cache documents.
# ABOUTME: One JSON document per metadata type, all under the application data directory.

from pathlib import Path

HLTB_CACHE_FILE = "hltb_cache.json"
OPENCRITIC_CACHE_FILE = "opencritic_cache.json"
HLTB_BUILD_FILE = "hltb_build.json"

_DAY = 24 * 60 * 60

HLTB_CACHE_TTL = 30 * _DAY
HLTB_NEGATIVE_TTL = _DAY
HLTB_BUILD_TTL = _DAY
OPENCRITIC_CACHE_TTL = 7 * _DAY
OPENCRITIC_NEGATIVE_TTL = _DAY


def cache_path(data_dir: Path, name: str) -> Path:
    """Path of a cache document inside the data directory."""
    return data_dir / name
