"""Sequential download of per-record sequence files."""

from .orchestrator import (
    DownloadFailure,
    FetchOrchestrator,
    FetchOutcome,
    FetchRunResult,
    render_fetch_summary,
)

__all__ = [
    "DownloadFailure",
    "FetchOrchestrator",
    "FetchOutcome",
    "FetchRunResult",
    "render_fetch_summary",
]
