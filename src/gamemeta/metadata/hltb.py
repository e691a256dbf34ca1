# ABOUTME: HowLongToBeat sources: the Next.js search data route and the HTML search page.
# ABOUTME: Both produce main-story completion hours for a title.

import logging

import httpx

from gamemeta.cache.store import BuildIdCache
from gamemeta.metadata.hltb_parser import (
    extract_build_id,
    parse_search_page,
    parse_search_payload,
    scrape_main_story_hours,
)
from gamemeta.metadata.http import FetchError, HttpFetcher, HttpStatusError
from gamemeta.metadata.scoring import pick_best_candidate
from gamemeta.metadata.types import SourceAnswer

logger = logging.getLogger(__name__)

HLTB_BASE = "https://howlongtobeat.com"


def _search_page_url(title: str) -> tuple[str, dict[str, str]]:
    return f"{HLTB_BASE}/", {"q": title}


class HltbApiSource:
    """Primary completion-time source backed by HLTB's unofficial data route.

    The route is versioned by a build identifier scraped from the landing
    page and cached on disk until it expires.
    """

    def __init__(self, http_client: HttpFetcher, build_cache: BuildIdCache) -> None:
        self._http = http_client
        self._build_cache = build_cache

    @property
    def name(self) -> str:
        return "hltb"

    async def _build_id(self) -> str | None:
        """Return the cached build id, fetching a fresh one when needed."""
        build_id = self._build_cache.get()
        if build_id:
            logger.debug("HLTB build id cache hit: %s", build_id)
            return build_id

        try:
            response = await self._http.get(f"{HLTB_BASE}/")
        except FetchError as exc:
            logger.warning("HLTB build id fetch failed: %s", exc)
            return None

        build_id = extract_build_id(response.text)
        if build_id is None:
            logger.warning("HLTB build id not found in landing page")
            return None
        self._build_cache.put(build_id)
        logger.debug("HLTB build id refreshed: %s", build_id)
        return build_id

    async def resolve(self, title: str) -> SourceAnswer:
        """Search the data route and fuzzy-match the results to the title.

        Everything that goes wrong, including a weak match, is a soft miss so
        the HTML source gets a turn. A 404 also drops the cached build id.
        """
        build_id = await self._build_id()
        if build_id is None:
            return SourceAnswer.miss()

        url, referer_params = _search_page_url(title)
        referer = str(httpx.URL(url, params=referer_params))
        try:
            response = await self._http.get(
                f"{HLTB_BASE}/_next/data/{build_id}/search.json",
                params={"game": title, "sort": "popular"},
                headers={"referer": referer},
            )
        except HttpStatusError as exc:
            if exc.status_code == 404:
                # Next.js answers 404 for a build id retired by a redeploy.
                logger.debug("HLTB data route 404 for %r, dropping build id", title)
                self._build_cache.clear()
                return SourceAnswer.miss()
            logger.warning("HLTB search failed for %r: %s", title, exc)
            return SourceAnswer.miss()
        except FetchError as exc:
            logger.warning("HLTB search failed for %r: %s", title, exc)
            return SourceAnswer.miss()

        try:
            payload = response.json()
        except ValueError as exc:
            logger.warning("HLTB search returned invalid JSON for %r: %s", title, exc)
            return SourceAnswer.miss()

        candidates = parse_search_payload(payload)
        logger.debug("HLTB search found %d candidates for %r", len(candidates), title)
        best = pick_best_candidate(title, candidates)
        if best is None:
            return SourceAnswer.miss()
        return SourceAnswer.found(best.metric_value)


class HltbHtmlSource:
    """Fallback completion-time source that scrapes the HLTB search page.

    Fetch failures propagate as FetchError. A page that yields nothing is a
    confirmed absence, since there is no further source to try.
    """

    def __init__(self, http_client: HttpFetcher) -> None:
        self._http = http_client

    @property
    def name(self) -> str:
        return "html"

    async def resolve(self, title: str) -> SourceAnswer:
        url, params = _search_page_url(title)
        response = await self._http.get(url, params=params)
        html = response.text

        candidates = parse_search_page(html)
        logger.debug("HLTB page blob has %d candidates for %r", len(candidates), title)
        best = pick_best_candidate(title, candidates)
        if best is not None:
            return SourceAnswer.found(best.metric_value)

        # No candidate list to score against here, so take the first figure.
        hours = scrape_main_story_hours(html)
        if hours is not None:
            return SourceAnswer.found(hours)
        return SourceAnswer.not_found()
