"""HTTP access for the GigaDB archive."""

from .client import RateLimitedClient

__all__ = ["RateLimitedClient"]
