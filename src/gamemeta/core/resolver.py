# ABOUTME: Resolution pipeline: cache lookup, ordered source fallback, then cache write.
# ABOUTME: Absorbs soft upstream failures so callers always get a best-effort answer.

import logging
from collections.abc import Sequence

from gamemeta.cache.store import JsonTtlCache
from gamemeta.metadata.http import FetchError
from gamemeta.metadata.normalizer import normalize_key
from gamemeta.metadata.provider import MetadataSource
from gamemeta.metadata.types import PROVENANCE_CACHE, PROVENANCE_NONE, Resolution, SourceAnswer

_default_logger = logging.getLogger(__name__)


class Resolver:
    """Resolves a title to a single number through a chain of sources.

    Sources are tried strictly in order. The first one to give a final answer
    (a value, or a confirmed absence) wins and its name becomes the
    provenance. Soft failures fall through to the next source. Whatever the
    outcome, the result is cached under the normalized title.

    Only ConfigurationError escapes; every FetchError is absorbed.
    """

    def __init__(
        self,
        cache: JsonTtlCache,
        sources: Sequence[MetadataSource],
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._cache = cache
        self._sources = list(sources)
        self._log = logger or _default_logger

    async def resolve(self, title: str) -> Resolution:
        trimmed = title.strip()
        if not trimmed:
            return Resolution(value=None, provenance=PROVENANCE_NONE)

        key = normalize_key(trimmed)
        entries = self._cache.load()
        cached = self._cache.lookup(entries, key)
        if cached is not None:
            self._log.debug("Cache hit %r -> %r", key, cached.value)
            return Resolution(value=cached.value, provenance=PROVENANCE_CACHE)

        result = Resolution(value=None, provenance=PROVENANCE_NONE)
        for source in self._sources:
            answer = await self._ask(source, trimmed)
            if answer.is_final:
                result = Resolution(value=answer.value, provenance=source.name)
                break
        else:
            self._log.debug("All sources exhausted for %r", key)

        self._cache.store(entries, key, result.value)
        self._log.debug("Resolved %r -> %r via %s", key, result.value, result.provenance)
        return result

    async def _ask(self, source: MetadataSource, title: str) -> SourceAnswer:
        try:
            return await source.resolve(title)
        except FetchError as exc:
            self._log.warning("Source %s failed for %r: %s", source.name, title, exc)
            return SourceAnswer.miss()
