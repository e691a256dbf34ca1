# ABOUTME: Async HTTP fetcher for metadata sources with 429-aware retry and backoff.
# ABOUTME: Provides the fetch error taxonomy and an injectable transport and sleep for testing.

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

APP_USER_AGENT = "gamemeta/0.1.0 (+https://github.com/gamemeta/gamemeta)"
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/119 Safari/537.36"
)

MAX_ATTEMPTS = 5
BACKOFF_FALLBACK_SECONDS = 0.7
_BACKOFF_JITTER_MS = 300

Sleep = Callable[[float], Awaitable[Any]]


class FetchError(Exception):
    """Base class for failures talking to an upstream metadata service."""


class TransportError(FetchError):
    """Connection failure, timeout, or other transport-level problem."""


class RateLimitExhausted(FetchError):
    """The upstream kept answering 429 until the attempt budget ran out."""


class HttpStatusError(FetchError):
    """The upstream answered with a non-success status other than 429."""

    def __init__(self, status_code: int, url: str) -> None:
        super().__init__(f"HTTP {status_code} from {url}")
        self.status_code = status_code


@runtime_checkable
class HttpFetcher(Protocol):
    """Protocol for GET requests against metadata services."""

    async def get(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        *,
        max_attempts: int | None = None,
    ) -> httpx.Response: ...


def fallback_backoff(now: float | None = None) -> float:
    """Base delay plus a small jitter taken from the clock's sub-second part."""
    if now is None:
        now = time.time()
    millis = int((now % 1) * 1000)
    return BACKOFF_FALLBACK_SECONDS + (millis % _BACKOFF_JITTER_MS) / 1000


def retry_after_seconds(headers: httpx.Headers) -> float | None:
    """Parse a Retry-After header (delta seconds or HTTP-date).

    Returns None when the header is absent or unparsable. Delta values are
    floored at one second.
    """
    value = headers.get("retry-after")
    if value is None:
        return None
    value = value.strip()
    if value.isdigit():
        return float(max(int(value), 1))
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


class RateLimitedFetcher:
    """HTTP client that retries "too many requests" responses with backoff.

    Wraps one long-lived httpx.AsyncClient. Backoff waits go through an
    awaitable sleep, so only the task doing the fetch is held up.
    """

    def __init__(
        self,
        *,
        user_agent: str = APP_USER_AGENT,
        max_attempts: int = MAX_ATTEMPTS,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": user_agent},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**client_kwargs)
        self._max_attempts = max_attempts
        self._sleep = sleep

    async def get(
        self,
        url: str,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        *,
        max_attempts: int | None = None,
    ) -> httpx.Response:
        """Send a GET request, retrying while the upstream answers 429.

        Args:
            url: The URL to request.
            params: Optional query parameters.
            headers: Optional extra request headers.
            max_attempts: Override for the attempt budget (1 disables retry).

        Returns:
            The successful (2xx) response.

        Raises:
            TransportError: The request could not be sent or completed.
            RateLimitExhausted: Every attempt was answered with 429.
            HttpStatusError: Any other non-success status.
        """
        attempts = max_attempts or self._max_attempts
        for attempt in range(1, attempts + 1):
            try:
                response = await self._client.get(url, params=params, headers=headers)
            except httpx.HTTPError as exc:
                raise TransportError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == httpx.codes.TOO_MANY_REQUESTS:
                if attempt >= attempts:
                    break
                delay = retry_after_seconds(response.headers)
                if delay is None:
                    delay = fallback_backoff()
                logger.warning(
                    "HTTP 429 from %s, retrying in %.1fs (attempt %d/%d)",
                    url,
                    delay,
                    attempt,
                    attempts,
                )
                await self._sleep(delay)
                continue

            if not response.is_success:
                raise HttpStatusError(response.status_code, url)
            return response

        raise RateLimitExhausted(f"HTTP 429 from {url} after {attempts} attempts")

    async def aclose(self) -> None:
        await self._client.aclose()
