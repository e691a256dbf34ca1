# ABOUTME: Parsing functions for HowLongToBeat pages and Next.js data payloads.
# ABOUTME: Extracts the embedded __NEXT_DATA__ blob and walks it for main-story times.

import json
import re
from typing import Any

from gamemeta.metadata.candidate import Candidate

_NEXT_DATA_RE = re.compile(
    r'<script[^>]*id="__NEXT_DATA__"[^>]*>(.*?)</script>', re.DOTALL
)

# Last-resort extractions against raw markup, tried in order.
_MAIN_FIELD_RE = re.compile(r'"gameplayMain"\s*:\s*([0-9]+(?:\.[0-9]+)?)')
_MAIN_STORY_RE = re.compile(
    r"Main\s+Story</div>\s*<span[^>]*>\s*([0-9]+(?:\.[0-9]+)?)", re.IGNORECASE
)

_MAIN_FIELD = "gameplayMain"
_NAME_FIELD = "name"


def extract_next_data(html: str) -> dict[str, Any] | None:
    """Return the parsed __NEXT_DATA__ JSON embedded in a page, if any."""
    match = _NEXT_DATA_RE.search(html)
    if not match:
        return None
    try:
        data = json.loads(match.group(1))
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def extract_build_id(html: str) -> str | None:
    """Find the Next.js build identifier in the site's landing page."""
    data = extract_next_data(html)
    if data is None:
        return None
    build_id = data.get("buildId")
    if isinstance(build_id, str) and build_id:
        return build_id
    return None


def dig(data: Any, *path: str) -> Any:
    """Follow a chain of object keys, returning None at the first missing step."""
    node = data
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def collect_candidates(node: Any, out: list[Candidate] | None = None) -> list[Candidate]:
    """Recursively collect every object with a positive gameplayMain value.

    Walks dicts and lists of arbitrary depth so that upstream reshuffles of
    the payload layout don't hide results. Objects without a name get "".
    """
    if out is None:
        out = []
    if isinstance(node, dict):
        main = node.get(_MAIN_FIELD)
        if isinstance(main, (int, float)) and not isinstance(main, bool) and main > 0:
            name = node.get(_NAME_FIELD)
            out.append(
                Candidate(
                    display_name=name if isinstance(name, str) else "",
                    metric_value=float(main),
                )
            )
        for child in node.values():
            collect_candidates(child, out)
    elif isinstance(node, list):
        for child in node:
            collect_candidates(child, out)
    return out


def parse_search_payload(data: Any) -> list[Candidate]:
    """Candidates from the search.json data route (pageProps.data.games)."""
    games = dig(data, "pageProps", "data", "games")
    if games is None:
        return []
    return collect_candidates(games)


def parse_search_page(html: str) -> list[Candidate]:
    """Candidates from the blob embedded in the HTML search page."""
    data = extract_next_data(html)
    games = dig(data, "props", "pageProps", "data", "games")
    if games is None:
        return []
    return collect_candidates(games)


def scrape_main_story_hours(html: str) -> float | None:
    """Pull the first main-story figure straight out of the markup.

    Tries the JSON field pattern first, then the rendered "Main Story" label.
    """
    for pattern in (_MAIN_FIELD_RE, _MAIN_STORY_RE):
        match = pattern.search(html)
        if match:
            return float(match.group(1))
    return None
