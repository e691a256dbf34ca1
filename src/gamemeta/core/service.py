# ABOUTME: Public async operations: completion time, critic score, price, cache clearing.
# ABOUTME: Wires settings, shared HTTP clients, caches, and sources into resolvers.

import logging
from pathlib import Path

from gamemeta.cache.paths import (
    HLTB_BUILD_FILE,
    HLTB_BUILD_TTL,
    HLTB_CACHE_FILE,
    HLTB_CACHE_TTL,
    HLTB_NEGATIVE_TTL,
    OPENCRITIC_CACHE_FILE,
    OPENCRITIC_CACHE_TTL,
    OPENCRITIC_NEGATIVE_TTL,
    cache_path,
)
from gamemeta.cache.store import BuildIdCache, JsonTtlCache
from gamemeta.config import Settings
from gamemeta.core.resolver import Resolver
from gamemeta.metadata.hltb import HltbApiSource, HltbHtmlSource
from gamemeta.metadata.http import BROWSER_USER_AGENT, HttpFetcher, RateLimitedFetcher
from gamemeta.metadata.opencritic import OpenCriticSource
from gamemeta.metadata.steam import SteamPriceSource
from gamemeta.metadata.types import CompletionTime, Price


class GameMetaService:
    """Entry point for metadata lookups.

    Holds two long-lived HTTP clients, created on first use: one with a
    browser user agent for HowLongToBeat, one with the application user agent
    for the OpenCritic gateway and the Steam store. Settings are re-read from
    the environment on every call unless fixed settings are supplied.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        data_dir: Path | None = None,
        hltb_fetcher: HttpFetcher | None = None,
        api_fetcher: HttpFetcher | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._fixed_settings = settings
        self._data_dir = data_dir
        self._hltb_fetcher = hltb_fetcher
        self._api_fetcher = api_fetcher
        self._owned: list[RateLimitedFetcher] = []
        self._log = logger or logging.getLogger(__name__)

    def settings(self) -> Settings:
        if self._fixed_settings is not None:
            return self._fixed_settings
        return Settings.from_env(data_dir=self._data_dir)

    def _hltb_http(self) -> HttpFetcher:
        if self._hltb_fetcher is None:
            fetcher = RateLimitedFetcher(user_agent=BROWSER_USER_AGENT)
            self._owned.append(fetcher)
            self._hltb_fetcher = fetcher
        return self._hltb_fetcher

    def _api_http(self) -> HttpFetcher:
        if self._api_fetcher is None:
            fetcher = RateLimitedFetcher()
            self._owned.append(fetcher)
            self._api_fetcher = fetcher
        return self._api_fetcher

    def _hltb_cache(self, data_dir: Path) -> JsonTtlCache:
        return JsonTtlCache(
            cache_path(data_dir, HLTB_CACHE_FILE),
            positive_ttl=HLTB_CACHE_TTL,
            negative_ttl=HLTB_NEGATIVE_TTL,
        )

    def _opencritic_cache(self, data_dir: Path) -> JsonTtlCache:
        return JsonTtlCache(
            cache_path(data_dir, OPENCRITIC_CACHE_FILE),
            positive_ttl=OPENCRITIC_CACHE_TTL,
            negative_ttl=OPENCRITIC_NEGATIVE_TTL,
        )

    async def resolve_completion_time(self, title: str) -> CompletionTime:
        """Main-story hours for a title, tagged with where the answer came from."""
        data_dir = self.settings().data_dir
        http = self._hltb_http()
        build_cache = BuildIdCache(cache_path(data_dir, HLTB_BUILD_FILE), ttl=HLTB_BUILD_TTL)
        resolver = Resolver(
            self._hltb_cache(data_dir),
            [HltbApiSource(http, build_cache), HltbHtmlSource(http)],
            logger=self._log,
        )
        result = await resolver.resolve(title)
        return CompletionTime(hours=result.value, provenance=result.provenance)

    async def resolve_critic_score(self, title: str) -> float | None:
        """OpenCritic top critic score (0-100) for a title.

        Raises:
            ConfigurationError: OPENCRITIC_API_KEY is not set and the title is
                not already cached.
        """
        settings = self.settings()
        resolver = Resolver(
            self._opencritic_cache(settings.data_dir),
            [OpenCriticSource(self._api_http(), self.settings)],
            logger=self._log,
        )
        result = await resolver.resolve(title)
        return result.value

    async def resolve_price(self, app_id: int, region: str | None = None) -> Price | None:
        """Current Steam price for an app in a region (default "us")."""
        return await SteamPriceSource(self._api_http()).price(app_id, region)

    def clear_completion_time_cache(self) -> None:
        self._hltb_cache(self.settings().data_dir).clear()

    def clear_critic_score_cache(self) -> None:
        self._opencritic_cache(self.settings().data_dir).clear()

    async def aclose(self) -> None:
        """Close the HTTP clients this service created."""
        for fetcher in self._owned:
            await fetcher.aclose()
            if fetcher is self._hltb_fetcher:
                self._hltb_fetcher = None
            if fetcher is self._api_fetcher:
                self._api_fetcher = None
        self._owned.clear()

    async def __aenter__(self) -> "GameMetaService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


_default_service: GameMetaService | None = None


def default_service() -> GameMetaService:
    """The process-wide service, created on first use.

    Its HTTP clients pool connections on the event loop that first used them.
    Callers that run lookups under separate asyncio.run() calls must await
    close_default_service() before their loop ends.
    """
    global _default_service
    if _default_service is None:
        _default_service = GameMetaService()
    return _default_service


async def close_default_service() -> None:
    """Close the process-wide service; the next lookup starts a fresh one."""
    global _default_service
    if _default_service is not None:
        service, _default_service = _default_service, None
        await service.aclose()


async def resolve_completion_time(title: str) -> CompletionTime:
    return await default_service().resolve_completion_time(title)


async def resolve_critic_score(title: str) -> float | None:
    return await default_service().resolve_critic_score(title)


async def resolve_price(app_id: int, region: str | None = None) -> Price | None:
    return await default_service().resolve_price(app_id, region)


def clear_completion_time_cache() -> None:
    default_service().clear_completion_time_cache()


def clear_critic_score_cache() -> None:
    default_service().clear_critic_score_cache()
