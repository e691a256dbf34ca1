# ABOUTME: OpenCritic critic-score source reached through the RapidAPI gateway.
# ABOUTME: Searches by normalized title, fuzzy-picks a hit, then reads its detail record.

import logging
from collections.abc import Callable
from typing import Any

from gamemeta.config import Settings
from gamemeta.metadata.http import FetchError, HttpFetcher
from gamemeta.metadata.normalizer import normalize_title
from gamemeta.metadata.scoring import MATCH_THRESHOLD, similarity
from gamemeta.metadata.types import SourceAnswer

logger = logging.getLogger(__name__)


def parse_search_results(data: Any) -> list[dict[str, Any]]:
    """Extract search hits from either a bare list or {"results": [...]}."""
    if isinstance(data, dict):
        data = data.get("results")
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict)]


def select_best_result(query: str, results: list[dict[str, Any]]) -> tuple[dict[str, Any], float] | None:
    """Return the best-scoring hit for an already-normalized query, with its score.

    Hits without a string name are skipped; ties keep the first hit.
    """
    best: dict[str, Any] | None = None
    best_score = -1.0
    for item in results:
        name = item.get("name")
        if not isinstance(name, str):
            continue
        score = similarity(query, normalize_title(name))
        if score > best_score:
            best = item
            best_score = score
    if best is None:
        return None
    return best, best_score


def parse_top_critic_score(data: Any) -> float | None:
    """Read topCriticScore from a detail record. Negative values mean "no score"."""
    if not isinstance(data, dict):
        return None
    score = data.get("topCriticScore")
    if not isinstance(score, (int, float)) or isinstance(score, bool) or score < 0:
        return None
    return float(score)


class OpenCriticSource:
    """Critic-score source for the OpenCritic API behind the RapidAPI gateway.

    Settings are read on every call so the API key and host follow the
    current environment. A missing key raises ConfigurationError.
    """

    def __init__(
        self,
        http_client: HttpFetcher,
        settings: Callable[[], Settings] = Settings.from_env,
        *,
        threshold: float = MATCH_THRESHOLD,
    ) -> None:
        self._http = http_client
        self._settings = settings
        self._threshold = threshold

    @property
    def name(self) -> str:
        return "opencritic"

    async def resolve(self, title: str) -> SourceAnswer:
        settings = self._settings()
        api_key = settings.require_api_key()
        host = settings.opencritic_host
        headers = {"x-rapidapi-key": api_key, "x-rapidapi-host": host}

        query = normalize_title(title) or title.strip()
        try:
            response = await self._http.get(
                f"https://{host}/game/search",
                params={"criteria": query},
                headers=headers,
            )
            results = parse_search_results(response.json())
        except FetchError as exc:
            logger.warning("OpenCritic search failed for %r: %s", title, exc)
            return SourceAnswer.miss()
        except ValueError as exc:
            logger.warning("OpenCritic search returned invalid JSON for %r: %s", title, exc)
            return SourceAnswer.not_found()

        if not results:
            logger.debug("OpenCritic search empty for %r (query %r)", title, query)
            return SourceAnswer.not_found()

        selected = select_best_result(query.lower(), results)
        if selected is None or selected[1] < self._threshold:
            best_score = selected[1] if selected else 0.0
            logger.debug("OpenCritic fuzzy match too weak (%.3f) for %r", best_score, title)
            return SourceAnswer.not_found()

        chosen = selected[0]
        game_id = chosen.get("id")
        if not isinstance(game_id, int) or isinstance(game_id, bool):
            logger.warning("OpenCritic search result for %r has no id", title)
            return SourceAnswer.not_found()

        try:
            detail = await self._http.get(f"https://{host}/game/{game_id}", headers=headers)
            score = parse_top_critic_score(detail.json())
        except FetchError as exc:
            logger.warning("OpenCritic detail fetch failed for id %d: %s", game_id, exc)
            return SourceAnswer.miss()
        except ValueError as exc:
            logger.warning("OpenCritic detail returned invalid JSON for id %d: %s", game_id, exc)
            return SourceAnswer.not_found()

        if score is None:
            return SourceAnswer.not_found()
        return SourceAnswer.found(score)
