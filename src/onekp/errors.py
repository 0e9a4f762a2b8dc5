from __future__ import annotations

from pathlib import Path


class OneKpError(Exception):
    """Base class for errors raised while loading or fetching 1KP data."""


class FetchExhausted(OneKpError):
    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(f"failed {attempts} times when fetching {url}")
        self.url = url
        self.attempts = attempts


class CacheIOError(OneKpError):
    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"cache io error path={path}: {reason}")
        self.path = Path(path)
        self.reason = reason


class PrefixNotFound(OneKpError):
    def __init__(self, record_id: str) -> None:
        super().__init__(f"{record_id} dirname is not found")
        self.record_id = record_id
