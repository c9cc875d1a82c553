"""
Rate-limited JSON fetcher shared by the schedule and metadata lookups.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

DEFAULT_RATE_LIMITED_HOSTS = ("api.tvmaze.com",)
REQUEST_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "airing-catalog/0.1 (+static catalog builder)",
}


class FetchStatus(str, Enum):
    OK = "ok"
    TRANSPORT_ERROR = "transport_error"
    HTTP_ERROR = "http_error"
    DECODE_ERROR = "decode_error"


@dataclass
class FetchResult:
    """Outcome of a single GET, keeping the failure mode for diagnostics."""

    url: str
    status: FetchStatus
    data: Any = None
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is FetchStatus.OK


class RateLimiter:
    """Enforces a minimum spacing between consecutive slots."""

    def __init__(
        self,
        min_interval: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval = max(0.0, min_interval)
        self._clock = clock
        self._sleep = sleep
        self._last_call: Optional[float] = None

    def wait_for_slot(self) -> float:
        """Block until the interval since the previous slot has elapsed.

        Returns the number of seconds slept.
        """

        waited = 0.0
        if self._last_call is not None:
            remaining = self.min_interval - (self._clock() - self._last_call)
            if remaining > 0:
                self._sleep(remaining)
                waited = remaining
        self._last_call = self._clock()
        return waited


class SourceAdapter:
    """Fetch and decode JSON, throttling calls to the rate-limited hosts only."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        limiter: Optional[RateLimiter] = None,
        rate_limited_hosts: Iterable[str] = DEFAULT_RATE_LIMITED_HOSTS,
        timeout: Optional[float] = None,
    ) -> None:
        if session is None:
            session = requests.Session()
            session.headers.update(REQUEST_HEADERS)
        self.session = session
        self.limiter = limiter or RateLimiter(0.15)
        self.rate_limited_hosts = {host.lower() for host in rate_limited_hosts}
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings) -> "SourceAdapter":
        return cls(
            limiter=RateLimiter(settings.tvmaze_min_interval),
            rate_limited_hosts=settings.rate_limited_hosts,
            timeout=settings.request_timeout,
        )

    def is_rate_limited(self, url: str) -> bool:
        hostname = (urlparse(url).hostname or "").lower()
        return hostname in self.rate_limited_hosts

    def fetch(self, url: str, params: Optional[dict[str, Any]] = None) -> FetchResult:
        if self.is_rate_limited(url):
            self.limiter.wait_for_slot()

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            return FetchResult(url=url, status=FetchStatus.TRANSPORT_ERROR, error=str(exc))

        if not 200 <= response.status_code < 300:
            return FetchResult(
                url=url,
                status=FetchStatus.HTTP_ERROR,
                status_code=response.status_code,
                error=f"HTTP {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError as exc:
            return FetchResult(
                url=url,
                status=FetchStatus.DECODE_ERROR,
                status_code=response.status_code,
                error=str(exc),
            )
        return FetchResult(url=url, status=FetchStatus.OK, data=data, status_code=response.status_code)

    def fetch_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        """Return decoded JSON, or None when the call failed for any reason."""

        result = self.fetch(url, params=params)
        if result.ok:
            return result.data

        if result.status is FetchStatus.HTTP_ERROR and result.status_code == 404:
            logger.debug("No data at %s (%s)", url, result.error)
        else:
            logger.warning("Fetch failed for %s: %s (%s)", url, result.status.value, result.error)
        return None
