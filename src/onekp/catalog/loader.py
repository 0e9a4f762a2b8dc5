from __future__ import annotations

import logging

from onekp.storage import ResponseCache

from .store import RecordStore

logger = logging.getLogger(__name__)


def load_record_store(
    cache: ResponseCache,
    *,
    metadata_url: str,
    listing_url: str,
) -> RecordStore:
    """Build the record store from the cached metadata table and listing.

    Both documents are required, so every error propagates to the caller.
    """
    metadata_text = cache.fetch_cached(metadata_url)
    listing_html = cache.fetch_cached(listing_url)
    logger.info(
        "bootstrap documents ready metadata_chars=%d listing_chars=%d",
        len(metadata_text),
        len(listing_html),
    )
    return RecordStore.from_documents(metadata_text, listing_html)
