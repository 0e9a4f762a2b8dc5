from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit

from onekp.errors import CacheIOError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_FILENAME = "index.html"
DEFAULT_TTL_SECONDS = 60 * 60


class TextClient(Protocol):
    def get_text(self, url: str) -> str:
        """Fetch the body of url as text."""


def cache_filename(url: str) -> str:
    name = urlsplit(url).path.rsplit("/", maxsplit=1)[-1]
    return name or DEFAULT_CACHE_FILENAME


class ResponseCache:
    """Text response cache keyed by the last path segment of the URL.

    A cached body is served while its file modification time is younger than
    ``ttl_seconds``; otherwise the body is fetched again through ``client``
    and the file is overwritten. Check and refresh are not atomic, so one
    cache directory must only be used by a single sequential caller.
    """

    def __init__(
        self,
        directory: str | Path,
        client: TextClient,
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ) -> None:
        if ttl_seconds < 0:
            raise ValueError("ttl_seconds must be >= 0")

        self.directory = Path(directory)
        self.client = client
        self.ttl_seconds = ttl_seconds

    def cache_path(self, url: str) -> Path:
        return self.directory / cache_filename(url)

    def is_stale(self, path: Path) -> bool:
        try:
            modified_at = path.stat().st_mtime
        except FileNotFoundError:
            return True
        except OSError as exc:
            raise CacheIOError(path, str(exc)) from exc
        return time.time() - modified_at >= self.ttl_seconds

    def fetch_cached(self, url: str) -> str:
        self._ensure_directory()
        path = self.cache_path(url)

        if path.exists() and not self.is_stale(path):
            logger.info("response_cache hit url=%s path=%s", url, path)
            return self._read(path)

        reason = "expired" if path.exists() else "not_found"
        logger.info("response_cache miss url=%s reason=%s", url, reason)

        text = self.client.get_text(url)
        self._write(path, text)
        return text

    def _ensure_directory(self) -> None:
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise CacheIOError(self.directory, str(exc)) from exc

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise CacheIOError(path, str(exc)) from exc

    @staticmethod
    def _write(path: Path, text: str) -> None:
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise CacheIOError(path, str(exc)) from exc
