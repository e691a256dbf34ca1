# ABOUTME: JSON-document TTL cache with separate lifetimes for hits and confirmed misses.
# ABOUTME: Also persists the HLTB build identifier, which expires on its own schedule.

import json
import logging
import os
import tempfile
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """A cached resolution. value=None records a confirmed absence."""

    value: float | None
    cached_at: int

    def to_json(self) -> dict[str, Any]:
        return {"value": self.value, "cached_at": self.cached_at}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_entry(raw: Any) -> CacheEntry | None:
    """Convert one raw JSON object into a CacheEntry, or None if malformed."""
    if not isinstance(raw, dict):
        return None
    value = raw.get("value")
    cached_at = raw.get("cached_at")
    if value is not None and not _is_number(value):
        return None
    if not _is_number(cached_at):
        return None
    return CacheEntry(
        value=float(value) if value is not None else None,
        cached_at=int(cached_at),
    )


def _read_json(path: Path) -> Any:
    """Read a JSON document, returning None when it is missing or unparsable."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable cache document %s: %s", path, exc)
        return None


def _write_json_atomic(path: Path, payload: Any) -> None:
    """Write JSON through a temporary file so readers never see a partial document."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(payload, fh, indent=2, sort_keys=True)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class JsonTtlCache:
    """A normalized-key -> CacheEntry map persisted as a single JSON document.

    The whole document is the unit of persistence (read-modify-write). There
    is no locking: concurrent writers race and the last one wins, but every
    write leaves a complete, valid JSON file behind.
    """

    def __init__(
        self,
        path: Path,
        *,
        positive_ttl: int,
        negative_ttl: int,
        clock: Clock = time.time,
    ) -> None:
        self._path = path
        self._positive_ttl = positive_ttl
        self._negative_ttl = negative_ttl
        self._clock = clock

    @property
    def path(self) -> Path:
        return self._path

    def _now(self) -> int:
        return int(self._clock())

    def load(self) -> dict[str, CacheEntry]:
        """Load all entries. A missing or corrupt document reads as empty."""
        raw = _read_json(self._path)
        if not isinstance(raw, dict):
            return {}

        entries: dict[str, CacheEntry] = {}
        for key, value in raw.items():
            entry = _parse_entry(value)
            if entry is not None:
                entries[key] = entry
        return entries

    def is_fresh(self, entry: CacheEntry) -> bool:
        """Whether an entry is within its TTL (negative entries expire sooner)."""
        ttl = self._positive_ttl if entry.value is not None else self._negative_ttl
        return self._now() - entry.cached_at <= ttl

    def lookup(self, entries: dict[str, CacheEntry], key: str) -> CacheEntry | None:
        """Return the entry for key if present and fresh."""
        entry = entries.get(key)
        if entry is None or not self.is_fresh(entry):
            return None
        return entry

    def store(
        self, entries: dict[str, CacheEntry], key: str, value: float | None
    ) -> CacheEntry:
        """Insert or overwrite key, then persist the full map.

        MUTATES entries in place. Entries written to disk by other tasks since
        entries was loaded are merged in first. Write failures are logged and
        otherwise ignored: the cache is an optimization, never a hard dependency.
        """
        entry = CacheEntry(value=value, cached_at=self._now())
        entries.update(self.load())
        entries[key] = entry
        try:
            _write_json_atomic(
                self._path, {k: e.to_json() for k, e in entries.items()}
            )
        except OSError as exc:
            logger.warning("Failed to write cache %s: %s", self._path, exc)
        return entry

    def clear(self) -> None:
        """Delete the backing document. A missing document is not an error."""
        self._path.unlink(missing_ok=True)


class BuildIdCache:
    """Persists the HLTB build identifier as {"build_id": ..., "ts": ...}."""

    def __init__(self, path: Path, *, ttl: int, clock: Clock = time.time) -> None:
        self._path = path
        self._ttl = ttl
        self._clock = clock

    def get(self) -> str | None:
        """Return the cached build id, or None if absent, malformed, or expired."""
        raw = _read_json(self._path)
        if not isinstance(raw, dict):
            return None
        build_id = raw.get("build_id")
        ts = raw.get("ts")
        if not isinstance(build_id, str) or not build_id or not _is_number(ts):
            return None
        if int(self._clock()) - int(ts) > self._ttl:
            return None
        return build_id

    def put(self, build_id: str) -> None:
        try:
            _write_json_atomic(self._path, {"build_id": build_id, "ts": int(self._clock())})
        except OSError as exc:
            logger.warning("Failed to write build id cache %s: %s", self._path, exc)

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)
