"""On-disk cache for fetched text documents."""

from .cache import ResponseCache, cache_filename

__all__ = ["ResponseCache", "cache_filename"]
