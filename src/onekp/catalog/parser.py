from __future__ import annotations

from bs4 import BeautifulSoup

from onekp.schemas import NO_DATA

FIELD_COUNT = 6


def parse_directory_listing(html: str) -> list[str]:
    """Return every anchor target of an HTML listing, trailing ``/`` stripped."""
    soup = BeautifulSoup(html, "html.parser")
    entries: list[str] = []
    for anchor in soup.find_all("a", href=True):
        href = anchor.get("href")
        if not isinstance(href, str):
            continue
        name = href.rstrip("/")
        if name:
            entries.append(name)
    return entries


def parse_metadata_rows(text: str) -> list[list[str]]:
    # 0: sample_id, 1: clade, 2: order, 3: family, 4: species, 5: tissue_type
    rows: list[list[str]] = []
    for index, raw_line in enumerate(text.split("\n")):
        if index == 0:
            continue
        line = raw_line.strip()
        if not line:
            continue
        rows.append(pad_fields(line.split("\t")))
    return rows


def pad_fields(fields: list[str]) -> list[str]:
    padded = list(fields)
    while len(padded) < FIELD_COUNT:
        padded.append(NO_DATA)
    return padded
