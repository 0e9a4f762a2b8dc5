from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from onekp.errors import PrefixNotFound
from onekp.schemas import OneKpRecord, RecordKey

from .parser import pad_fields, parse_directory_listing, parse_metadata_rows

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DirectoryIndex:
    """Ordered, read-only names of the assembly directory listing."""

    entries: tuple[str, ...]

    @classmethod
    def from_html(cls, html: str) -> DirectoryIndex:
        return cls(tuple(parse_directory_listing(html)))

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def matches(self, record_id: str) -> list[str]:
        if not record_id:
            return []
        return [entry for entry in self.entries if entry.startswith(record_id)]

    def find_prefix(self, record_id: str) -> str | None:
        candidates = self.matches(record_id)
        if not candidates:
            return None
        if len(candidates) > 1:
            logger.warning(
                "ambiguous directory prefix id=%s candidates=%s chosen=%s",
                record_id,
                ",".join(candidates),
                candidates[0],
            )
        return candidates[0]


class RecordStore:
    """1KP sample records joined with their assembly directory names."""

    def __init__(self, index: DirectoryIndex) -> None:
        self._index = index
        self._records: list[OneKpRecord] = []

    @classmethod
    def from_documents(cls, metadata_text: str, listing_html: str) -> RecordStore:
        store = cls(DirectoryIndex.from_html(listing_html))
        for fields in parse_metadata_rows(metadata_text):
            store.add_record(fields)
        logger.info(
            "record store loaded records=%d directories=%d",
            len(store),
            len(store.index),
        )
        return store

    @property
    def index(self) -> DirectoryIndex:
        return self._index

    @property
    def records(self) -> list[OneKpRecord]:
        return [record.model_copy() for record in self._records]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[OneKpRecord]:
        return iter(self.records)

    def add_record(self, fields: Sequence[str]) -> OneKpRecord:
        attrs = pad_fields(list(fields))
        record_id = attrs[0]

        prefix = self._index.find_prefix(record_id)
        if prefix is None:
            raise PrefixNotFound(record_id)

        record = OneKpRecord(
            id=record_id,
            clade=attrs[1],
            order=attrs[2],
            family=attrs[3],
            species=attrs[4],
            tissue_type=attrs[5],
            prefix=prefix,
        )
        self._records.append(record)
        return record

    def filter(self, key: RecordKey, values: Iterable[str]) -> list[OneKpRecord]:
        if isinstance(values, str):
            raise TypeError("values must be a collection of strings, not a single str")
        wanted = set(values)
        return [
            record.model_copy()
            for record in self._records
            if record.field_value(key) in wanted
        ]

    def distinct_values(self, key: RecordKey) -> list[str]:
        return sorted({record.field_value(key) for record in self._records})
