# ABOUTME: Unit tests for the rate-limited async HTTP fetcher.
# ABOUTME: Tests 429 retry with Retry-After and jittered backoff, error taxonomy, and headers.

import asyncio
from email.utils import format_datetime
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from gamemeta.metadata.http import (
    BACKOFF_FALLBACK_SECONDS,
    MAX_ATTEMPTS,
    FetchError,
    HttpFetcher,
    HttpStatusError,
    RateLimitedFetcher,
    RateLimitExhausted,
    TransportError,
    fallback_backoff,
    retry_after_seconds,
)


class FakeTransport(httpx.AsyncBaseTransport):
    """Fake async transport for httpx that returns canned responses."""

    def __init__(self, responses: list[httpx.Response | Exception] | None = None) -> None:
        self._responses = list(responses or [])
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._responses:
            response = self._responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return httpx.Response(200, json={"ok": True})

    @property
    def call_count(self) -> int:
        return len(self.requests)


class SleepRecorder:
    """Async sleep replacement that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def _fetcher(transport: FakeTransport, sleep: SleepRecorder | None = None, **kwargs) -> RateLimitedFetcher:
    return RateLimitedFetcher(transport=transport, sleep=sleep or SleepRecorder(), **kwargs)


def _get(fetcher: RateLimitedFetcher, url: str = "https://example.com/api", **kwargs) -> httpx.Response:
    return asyncio.run(fetcher.get(url, **kwargs))


class TestHttpFetcherProtocol:
    """Tests for HttpFetcher protocol compliance."""

    def test_rate_limited_fetcher_satisfies_protocol(self) -> None:
        """RateLimitedFetcher satisfies the HttpFetcher protocol."""
        assert isinstance(RateLimitedFetcher(), HttpFetcher)


class TestRateLimitedFetcher:
    """Tests for RateLimitedFetcher.get."""

    def test_success_returns_response(self) -> None:
        """A 200 response is returned as-is."""
        fetcher = _fetcher(FakeTransport())
        response = _get(fetcher, params={"q": "test"})
        assert response.json() == {"ok": True}

    def test_sends_params_and_headers(self) -> None:
        """Query parameters and extra headers reach the transport."""
        transport = FakeTransport()
        _get(_fetcher(transport), params={"q": "hades"}, headers={"x-test": "1"})
        request = transport.requests[0]
        assert request.url.params["q"] == "hades"
        assert request.headers["x-test"] == "1"

    def test_user_agent_header(self) -> None:
        """Requests carry the configured User-Agent."""
        transport = FakeTransport()
        _get(_fetcher(transport, user_agent="tester/1.0"))
        assert transport.requests[0].headers["user-agent"] == "tester/1.0"

    def test_retry_on_429_uses_retry_after(self) -> None:
        """A 429 with Retry-After waits that long, then retries."""
        transport = FakeTransport(
            [httpx.Response(429, headers={"Retry-After": "3"}), httpx.Response(200, json={"ok": 1})]
        )
        sleep = SleepRecorder()
        response = _get(_fetcher(transport, sleep))
        assert response.json() == {"ok": 1}
        assert sleep.delays == [3.0]
        assert transport.call_count == 2

    def test_retry_after_zero_floors_to_one_second(self) -> None:
        """Retry-After: 0 still waits a second."""
        transport = FakeTransport([httpx.Response(429, headers={"Retry-After": "0"}), httpx.Response(200)])
        sleep = SleepRecorder()
        _get(_fetcher(transport, sleep))
        assert sleep.delays == [1.0]

    def test_retry_without_header_uses_jittered_fallback(self) -> None:
        """Without Retry-After the wait is the base delay plus under 300ms jitter."""
        transport = FakeTransport([httpx.Response(429), httpx.Response(200)])
        sleep = SleepRecorder()
        _get(_fetcher(transport, sleep))
        assert len(sleep.delays) == 1
        assert BACKOFF_FALLBACK_SECONDS <= sleep.delays[0] < BACKOFF_FALLBACK_SECONDS + 0.3

    def test_unparsable_retry_after_uses_fallback(self) -> None:
        """A garbage Retry-After value falls back to the jittered delay."""
        transport = FakeTransport([httpx.Response(429, headers={"Retry-After": "soon"}), httpx.Response(200)])
        sleep = SleepRecorder()
        _get(_fetcher(transport, sleep))
        assert BACKOFF_FALLBACK_SECONDS <= sleep.delays[0] < BACKOFF_FALLBACK_SECONDS + 0.3

    def test_rate_limit_exhausted_after_max_attempts(self) -> None:
        """Five 429s in a row raise RateLimitExhausted."""
        transport = FakeTransport([httpx.Response(429, headers={"Retry-After": "1"})] * MAX_ATTEMPTS)
        sleep = SleepRecorder()
        with pytest.raises(RateLimitExhausted):
            _get(_fetcher(transport, sleep))
        assert transport.call_count == MAX_ATTEMPTS
        assert len(sleep.delays) == MAX_ATTEMPTS - 1

    def test_max_attempts_override_disables_retry(self) -> None:
        """max_attempts=1 gives up on the first 429 without sleeping."""
        transport = FakeTransport([httpx.Response(429), httpx.Response(200)])
        sleep = SleepRecorder()
        with pytest.raises(RateLimitExhausted):
            _get(_fetcher(transport, sleep), max_attempts=1)
        assert transport.call_count == 1
        assert sleep.delays == []

    def test_http_error_raises_status_error(self) -> None:
        """Non-429 failures raise HttpStatusError carrying the status code."""
        transport = FakeTransport([httpx.Response(404, json={"error": "not found"})])
        with pytest.raises(HttpStatusError, match="404") as exc_info:
            _get(_fetcher(transport))
        assert exc_info.value.status_code == 404
        assert transport.call_count == 1

    def test_server_error_is_not_retried(self) -> None:
        """Only 429 is retried; 5xx fails immediately."""
        transport = FakeTransport([httpx.Response(503), httpx.Response(200)])
        with pytest.raises(HttpStatusError):
            _get(_fetcher(transport))
        assert transport.call_count == 1

    def test_transport_failure_raises_transport_error(self) -> None:
        """Connection problems surface as TransportError."""
        transport = FakeTransport([httpx.ConnectError("refused")])
        with pytest.raises(TransportError, match="refused"):
            _get(_fetcher(transport))

    def test_all_errors_share_base_class(self) -> None:
        """Every fetch failure is a FetchError."""
        assert issubclass(TransportError, FetchError)
        assert issubclass(RateLimitExhausted, FetchError)
        assert issubclass(HttpStatusError, FetchError)


class TestBackoffHelpers:
    """Tests for Retry-After parsing and fallback backoff."""

    def test_fallback_backoff_uses_sub_second_clock(self) -> None:
        """Jitter is the clock's milliseconds modulo 300."""
        assert fallback_backoff(now=100.450) == pytest.approx(0.7 + 0.150)
        assert fallback_backoff(now=100.0) == pytest.approx(0.7)

    def test_missing_header_is_none(self) -> None:
        """No header means no server-supplied delay."""
        assert retry_after_seconds(httpx.Headers()) is None

    def test_http_date_header(self) -> None:
        """An HTTP-date Retry-After becomes the remaining seconds."""
        when = datetime.now(timezone.utc) + timedelta(seconds=30)
        delay = retry_after_seconds(httpx.Headers({"Retry-After": format_datetime(when, usegmt=True)}))
        assert delay is not None
        assert 25 <= delay <= 30

    def test_http_date_in_past_is_zero(self) -> None:
        """A Retry-After date already passed means no wait."""
        when = datetime.now(timezone.utc) - timedelta(minutes=5)
        headers = httpx.Headers({"Retry-After": format_datetime(when, usegmt=True)})
        assert retry_after_seconds(headers) == 0.0
