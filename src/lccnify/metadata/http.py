# ABOUTME: JSON-over-HTTP client used for metadata lookups.
# ABOUTME: Rate limits, retries 429/5xx with backoff, and accepts an injectable transport for tests.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
_USER_AGENT = "lccnify/0.1.0"


class MetadataFetchError(Exception):
    """Raised when a metadata request fails or returns something other than JSON."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for JSON GET requests."""

    def get(self, url: str, params: dict[str, str] | None = None) -> Any: ...


class LccnifyHttpClient:
    """httpx-based client with a minimum request interval and retry on transient errors.

    Retry delays double on each attempt; a numeric Retry-After header on a
    429 response takes precedence when it is longer.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            headers={"User-Agent": _USER_AGENT},
            timeout=timeout,
            transport=transport,
        )
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float | None = None

    def get(self, url: str, params: dict[str, str] | None = None) -> Any:
        """GET a URL and return its decoded JSON body.

        Raises:
            MetadataFetchError: On transport errors, non-retryable statuses,
                exhausted retries, or a body that is not valid JSON.
        """
        response: httpx.Response | None = None
        for attempt in range(self._max_retries + 1):
            self._throttle()
            try:
                response = self._client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                break
            if attempt == self._max_retries:
                raise MetadataFetchError(
                    f"HTTP {response.status_code} from {url} after {attempt + 1} attempts"
                )

            delay = self._backoff(attempt, response)
            logger.warning(
                "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                response.status_code,
                url,
                delay,
                attempt + 1,
                self._max_retries,
            )
            time.sleep(delay)

        assert response is not None
        if response.status_code != 200:
            raise MetadataFetchError(f"HTTP {response.status_code} from {url}")
        try:
            return response.json()
        except ValueError as exc:
            raise MetadataFetchError(
                f"Could not parse response from {url} as JSON: {response.text[:200]!r}"
            ) from exc

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "LccnifyHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _backoff(self, attempt: int, response: httpx.Response) -> float:
        delay = self._retry_delay * (2**attempt)
        retry_after = response.headers.get("Retry-After", "")
        if response.status_code == 429 and retry_after.isdigit():
            delay = max(delay, float(retry_after))
        return delay

    def _throttle(self) -> None:
        """Sleep if the previous request was less than the minimum interval ago."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        if self._last_request_time is not None:
            wait = self._min_interval - (now - self._last_request_time)
            if wait > 0:
                time.sleep(wait)
        self._last_request_time = time.monotonic()
