from __future__ import annotations

import pytest

from onekp.catalog import (
    DirectoryIndex,
    RecordStore,
    load_record_store,
    parse_directory_listing,
    parse_metadata_rows,
)
from onekp.errors import PrefixNotFound
from onekp.schemas import NO_DATA, RecordKey

LISTING_HTML = """
<html><body>
<h1>Index of /assemblies/</h1>
<a href="../">../</a>
<a href="ID1_dir/">ID1_dir/</a>
<a href="ABCD-Amborella_trichopoda/">ABCD-Amborella_trichopoda/</a>
<a href="EFGH-Oryza_sativa/">EFGH-Oryza_sativa/</a>
<a name="no-href">anchor without href</a>
</body></html>
"""

METADATA_TSV = (
    "1kP_ID\tClade\tOrder\tFamily\tSpecies\tTissue Type\n"
    "ID1\tCladeA\tOrderA\tFamA\tSpA\tTisA\n"
    "\n"
    "ABCD\tBasal Eudicots\tAmborellales\tAmborellaceae\tAmborella trichopoda\tleaf\n"
    "EFGH\tMonocots\n"
)


def _store() -> RecordStore:
    return RecordStore.from_documents(METADATA_TSV, LISTING_HTML)


def test_parse_directory_listing_strips_trailing_separator() -> None:
    assert parse_directory_listing(LISTING_HTML) == [
        "..",
        "ID1_dir",
        "ABCD-Amborella_trichopoda",
        "EFGH-Oryza_sativa",
    ]


def test_parse_metadata_rows_skips_header_and_blank_lines() -> None:
    rows = parse_metadata_rows(METADATA_TSV)

    assert [row[0] for row in rows] == ["ID1", "ABCD", "EFGH"]
    assert rows[0] == ["ID1", "CladeA", "OrderA", "FamA", "SpA", "TisA"]


def test_short_rows_are_padded_with_no_data() -> None:
    rows = parse_metadata_rows("header\nEFGH\tMonocots\nIJKL\tA\tB\tC\tD\t\n")

    assert rows[0] == ["EFGH", "Monocots", NO_DATA, NO_DATA, NO_DATA, NO_DATA]
    assert rows[1][5] == NO_DATA


def test_add_record_then_filter_by_id_returns_fields_verbatim() -> None:
    store = RecordStore(DirectoryIndex.from_html(LISTING_HTML))
    store.add_record(["ID1", "CladeA", "OrderA", "FamA", "SpA", "TisA"])

    matched = store.filter(RecordKey.ID, {"ID1"})

    assert len(matched) == 1
    record = matched[0]
    assert record.id == "ID1"
    assert record.clade == "CladeA"
    assert record.order == "OrderA"
    assert record.family == "FamA"
    assert record.species == "SpA"
    assert record.tissue_type == "TisA"
    assert record.prefix == "ID1_dir"


def test_two_field_row_gets_no_data_tissue_type() -> None:
    store = RecordStore(DirectoryIndex.from_html(LISTING_HTML))
    record = store.add_record(["EFGH", "Monocots"])

    assert record.tissue_type == NO_DATA
    assert record.species == NO_DATA
    assert record.prefix == "EFGH-Oryza_sativa"


def test_add_record_without_prefix_raises_and_keeps_store_unchanged() -> None:
    store = _store()
    before = len(store)

    with pytest.raises(PrefixNotFound) as excinfo:
        store.add_record(["ZZZZ", "Clade", "Order", "Family", "Species", "Tissue"])

    assert excinfo.value.record_id == "ZZZZ"
    assert len(store) == before


def test_empty_identifier_never_matches() -> None:
    store = _store()

    with pytest.raises(PrefixNotFound):
        store.add_record(["", "Clade"])


def test_from_documents_propagates_missing_prefix() -> None:
    with pytest.raises(PrefixNotFound):
        RecordStore.from_documents("header\nNOPE\tClade\n", LISTING_HTML)


def test_first_match_wins_in_listing_order() -> None:
    index = DirectoryIndex(("AB-first", "AB-second", "XY-long", "XY"))

    assert index.find_prefix("AB") == "AB-first"
    assert index.find_prefix("XY") == "XY-long"
    assert DirectoryIndex(("ID1_dir", "ID1")).find_prefix("ID1") == "ID1_dir"
    assert index.find_prefix("QQ") is None


def test_filter_preserves_store_order() -> None:
    store = _store()

    matched = store.filter(RecordKey.ID, {"EFGH", "ID1"})

    assert [record.id for record in matched] == ["ID1", "EFGH"]


def test_filter_is_exact_and_case_sensitive() -> None:
    store = _store()

    assert store.filter(RecordKey.CLADE, {"monocots"}) == []
    assert store.filter(RecordKey.CLADE, {"Mono"}) == []
    assert [record.id for record in store.filter(RecordKey.CLADE, {"Monocots"})] == ["EFGH"]


def test_filter_with_disjoint_values_is_empty() -> None:
    assert _store().filter(RecordKey.TISSUE_TYPE, {"root", "flower"}) == []


def test_filter_returns_independent_copies() -> None:
    store = _store()

    matched = store.filter(RecordKey.ID, {"ID1"})
    matched.clear()
    records = store.records
    records.pop()

    assert len(store) == 3
    assert store.filter(RecordKey.ID, {"ID1"})[0] is not store.filter(RecordKey.ID, {"ID1"})[0]


def test_distinct_values_are_sorted_and_unique() -> None:
    store = _store()
    store.add_record(["ID1", "CladeA", "OrderB"])

    assert store.distinct_values(RecordKey.CLADE) == ["Basal Eudicots", "CladeA", "Monocots"]
    assert store.distinct_values(RecordKey.TISSUE_TYPE) == [NO_DATA, "TisA", "leaf"]


class _DocumentCache:
    def __init__(self, documents: dict[str, str]) -> None:
        self.documents = documents
        self.urls: list[str] = []

    def fetch_cached(self, url: str) -> str:
        self.urls.append(url)
        return self.documents[url]


def test_load_record_store_reads_metadata_then_listing() -> None:
    cache = _DocumentCache(
        {
            "https://example.org/meta.tsv": METADATA_TSV,
            "https://example.org/assemblies/": LISTING_HTML,
        }
    )

    store = load_record_store(
        cache,  # type: ignore[arg-type]
        metadata_url="https://example.org/meta.tsv",
        listing_url="https://example.org/assemblies/",
    )

    assert len(store) == 3
    assert cache.urls == ["https://example.org/meta.tsv", "https://example.org/assemblies/"]


def test_filter_rejects_a_bare_string() -> None:
    with pytest.raises(TypeError):
        _store().filter(RecordKey.ID, "ID1")
