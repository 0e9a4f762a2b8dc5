"""Sample metadata and assembly listing correlation."""

from .loader import load_record_store
from .parser import parse_directory_listing, parse_metadata_rows
from .store import DirectoryIndex, RecordStore

__all__ = [
    "DirectoryIndex",
    "RecordStore",
    "load_record_store",
    "parse_directory_listing",
    "parse_metadata_rows",
]
