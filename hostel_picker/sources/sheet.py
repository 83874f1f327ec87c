"""Published-spreadsheet source with a time-to-live cache.

The sheet is published as CSV at a public URL. Fetching it is the only
network I/O in the system, so the text is cached per source instance and
re-fetched once the TTL has elapsed.
"""

import logging
import threading
import time
from typing import Callable, Optional, Tuple

import requests

from hostel_picker.logging import get_logger

from .base import TableSource
from .exceptions import SourceConfigurationError, SourceHTTPError, SourceTimeoutError

logger = get_logger(__name__, component="source")


class SheetTableSource(TableSource):
    """Fetches CSV text from a published sheet URL.

    Attributes:
        url: Published CSV export URL
        ttl_seconds: How long a fetched table stays fresh (0 disables caching)
        timeout: HTTP request timeout in seconds
        user_agent: User-Agent header sent with each request
    """

    def __init__(
        self,
        url: str,
        ttl_seconds: int = 3600,
        timeout: int = 30,
        user_agent: str = "HostelPicker/1.0",
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize SheetTableSource.

        Args:
            url: http(s) URL of the CSV export
            ttl_seconds: Cache lifetime in seconds
            timeout: Request timeout in seconds (1-300)
            user_agent: User-Agent header value
            session: Optional requests session (one is created otherwise)
            clock: Monotonic clock used for cache expiry

        Raises:
            SourceConfigurationError: If url, timeout or ttl is unusable
        """
        if not url or not url.startswith(("http://", "https://")):
            raise SourceConfigurationError(f"Sheet URL must be an http(s) URL, got: {url!r}")
        if not 1 <= timeout <= 300:
            raise SourceConfigurationError(
                f"Timeout must be between 1 and 300 seconds, got: {timeout}"
            )
        if ttl_seconds < 0:
            raise SourceConfigurationError(f"ttl_seconds cannot be negative, got: {ttl_seconds}")
        if not user_agent:
            raise SourceConfigurationError("user_agent cannot be empty")

        self.url = url
        self.ttl_seconds = ttl_seconds
        self.timeout = timeout
        self.user_agent = user_agent
        self._clock = clock

        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

        self._lock = threading.Lock()
        self._cached: Optional[Tuple[str, float]] = None

    def fetch_table(self) -> str:
        """Return the sheet text, from cache while it is fresh.

        Raises:
            SourceHTTPError: On connection failure or 4xx/5xx status
            SourceTimeoutError: On request timeout
        """
        with self._lock:
            now = self._clock()
            if self._cached is not None:
                text, fetched_at = self._cached
                age = now - fetched_at
                if age < self.ttl_seconds:
                    logger.debug(
                        "Serving sheet from cache",
                        extra={
                            "event": "source.fetch.cache_hit",
                            "url": self.url,
                            "age_seconds": round(age, 3),
                        },
                    )
                    return text

            text = self._request()
            self._cached = (text, self._clock())
            return text

    def invalidate(self) -> None:
        """Drop the cached table so the next fetch hits the network."""
        with self._lock:
            self._cached = None

    def _request(self) -> str:
        try:
            logger.debug(
                f"HTTP GET request to {self.url}",
                extra={
                    "event": "source.fetch.request",
                    "url": self.url,
                    "timeout": self.timeout,
                },
            )

            response = self._session.get(self.url, timeout=self.timeout)

            if response.status_code >= 400:
                is_retryable = response.status_code >= 500
                logger.log(
                    logging.WARNING if is_retryable else logging.ERROR,
                    f"HTTP {response.status_code} error from {self.url}",
                    extra={
                        "event": "source.fetch.retryable_error" if is_retryable else "source.fetch.error",
                        "status_code": response.status_code,
                        "url": self.url,
                    },
                )
                raise SourceHTTPError(
                    f"HTTP {response.status_code}: {response.reason}",
                    status_code=response.status_code,
                    url=self.url,
                )

            # Published CSV is UTF-8 but often served without a charset
            text = response.content.decode("utf-8", errors="replace")
            logger.info(
                "Fetched sheet",
                extra={
                    "event": "source.fetch.succeeded",
                    "status_code": response.status_code,
                    "url": self.url,
                    "text_length": len(text),
                },
            )
            return text

        except requests.exceptions.Timeout as e:
            logger.warning(
                f"Request to {self.url} timed out after {self.timeout} seconds",
                extra={
                    "event": "source.fetch.retryable_error",
                    "error_type": "Timeout",
                    "url": self.url,
                    "timeout": self.timeout,
                },
            )
            raise SourceTimeoutError(
                f"Request to {self.url} timed out after {self.timeout} seconds",
                url=self.url,
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error(
                f"Request to {self.url} failed: {e}",
                extra={
                    "event": "source.fetch.error",
                    "error_type": type(e).__name__,
                    "url": self.url,
                },
            )
            raise SourceHTTPError(
                f"Request to {self.url} failed: {e}",
                status_code=0,
                url=self.url,
            ) from e
