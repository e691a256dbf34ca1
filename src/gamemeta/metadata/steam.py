# ABOUTME: Steam storefront price lookup by app id and region.
# ABOUTME: Single request, no cache, no retry; any missing field means "no price".

import logging
from typing import Any

from gamemeta.metadata.http import FetchError, HttpFetcher
from gamemeta.metadata.types import Price

logger = logging.getLogger(__name__)

STEAM_APPDETAILS_URL = "https://store.steampowered.com/api/appdetails"
DEFAULT_REGION = "us"


def normalize_region(region: str | None) -> str:
    """Lowercase country code, defaulting to "us" when blank."""
    cc = (region or "").strip().lower()
    return cc or DEFAULT_REGION


def parse_price_response(data: Any, app_id: int) -> Price | None:
    """Extract the final price from an appdetails envelope keyed by app id.

    Steam reports prices in minor units; they are converted to major units.
    """
    if not isinstance(data, dict):
        return None
    entry = data.get(str(app_id))
    if not isinstance(entry, dict) or entry.get("success") is not True:
        return None
    app_data = entry.get("data")
    if not isinstance(app_data, dict):
        return None
    overview = app_data.get("price_overview")
    if not isinstance(overview, dict):
        return None

    final = overview.get("final")
    currency = overview.get("currency")
    if not isinstance(final, int) or isinstance(final, bool) or not isinstance(currency, str):
        return None
    return Price(amount=final / 100, currency=currency.upper())


class SteamPriceSource:
    """Looks up current Steam prices through the public appdetails endpoint."""

    def __init__(self, http_client: HttpFetcher) -> None:
        self._http = http_client

    async def price(self, app_id: int, region: str | None = None) -> Price | None:
        params = {
            "appids": str(app_id),
            "cc": normalize_region(region),
            "filters": "price_overview",
        }
        try:
            response = await self._http.get(STEAM_APPDETAILS_URL, params=params, max_attempts=1)
            return parse_price_response(response.json(), app_id)
        except FetchError as exc:
            logger.warning("Steam price lookup failed for app %d: %s", app_id, exc)
            return None
        except ValueError as exc:
            logger.warning("Steam returned invalid JSON for app %d: %s", app_id, exc)
            return None
