from __future__ import annotations

import logging
import time
from collections.abc import Callable

import requests

from onekp.errors import FetchExhausted

logger = logging.getLogger(__name__)


class RateLimitedClient:
    """Blocking GET client with a fixed minimum interval and bounded attempts.

    When the previous successful fetch happened less than ``interval_seconds``
    ago, the client sleeps the full interval before the next request. Failed
    attempts do not advance the timestamp, so every retry inside the window
    waits the same fixed interval.
    """

    def __init__(
        self,
        *,
        interval_seconds: float = 3.0,
        max_attempts: int = 5,
        timeout_seconds: float = 60.0,
        user_agent: str = "onekp-fetch/0.1.0",
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        self.interval_seconds = interval_seconds
        self.max_attempts = max_attempts
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()
        self._clock = clock
        self._sleep = sleep
        self.last_fetch_at = clock()

        self.session.headers["User-Agent"] = user_agent

    def get(self, url: str) -> requests.Response:
        for attempt in range(1, self.max_attempts + 1):
            try:
                return self._get_once(url)
            except requests.RequestException as exc:
                logger.warning(
                    "fetch failed url=%s attempt=%d/%d error=%s",
                    url,
                    attempt,
                    self.max_attempts,
                    exc,
                )

        raise FetchExhausted(url, self.max_attempts)

    def get_text(self, url: str) -> str:
        return self.get(url).text

    def get_bytes(self, url: str) -> bytes:
        return self.get(url).content

    def _get_once(self, url: str) -> requests.Response:
        elapsed = self._clock() - self.last_fetch_at
        if elapsed < self.interval_seconds:
            self._sleep(self.interval_seconds)

        response = self.session.get(url, timeout=self.timeout_seconds)
        response.raise_for_status()

        self.last_fetch_at = self._clock()
        logger.debug("fetched url=%s status=%s", url, response.status_code)
        return response
