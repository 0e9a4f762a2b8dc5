"""OneKP dataset access package."""

from .config import AppConfig, load_config
from .errors import CacheIOError, FetchExhausted, OneKpError, PrefixNotFound
from .schemas import FetchStatus, OneKpRecord, RecordKey, SequenceType

__all__ = [
    "AppConfig",
    "CacheIOError",
    "FetchExhausted",
    "FetchStatus",
    "OneKpError",
    "OneKpRecord",
    "PrefixNotFound",
    "RecordKey",
    "SequenceType",
    "load_config",
]
