from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator

NO_DATA = "No data"
NUCLEOTIDE_FILENAME = "nucleotides.fa.gz"
PROTEIN_FILENAME = "protein.fa.gz"
METADATA_HEADER = ("1kP_ID", "Clade", "Order", "Family", "Species", "Tissue Type")


class DTOBase(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class RecordKey(StrEnum):
    ID = "id"
    CLADE = "clade"
    ORDER = "order"
    FAMILY = "family"
    SPECIES = "species"
    TISSUE_TYPE = "tissue-type"


class SequenceType(StrEnum):
    NUCLEOTIDE = "nucleotide"
    PROTEIN = "protein"
    BOTH = "both"

    def filenames(self) -> tuple[str, ...]:
        if self is SequenceType.NUCLEOTIDE:
            return (NUCLEOTIDE_FILENAME,)
        if self is SequenceType.PROTEIN:
            return (PROTEIN_FILENAME,)
        return (NUCLEOTIDE_FILENAME, PROTEIN_FILENAME)


class FetchStatus(StrEnum):
    PENDING = "pending"
    FETCHING = "fetching"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OneKpRecord(DTOBase):
    id: str
    clade: str
    order: str
    family: str
    species: str
    tissue_type: str
    prefix: str

    @field_validator("id", "prefix")
    @classmethod
    def validate_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("record id and prefix must not be empty")
        return value

    def to_filename(self, filename: str) -> str:
        return f"{self.prefix}-{filename}"

    def to_remote_url(self, base_url: str, filename: str) -> str:
        return f"{base_url.rstrip('/')}/{self.prefix}/{self.id}-translated-{filename}"

    def field_value(self, key: RecordKey) -> str:
        return _FIELD_GETTERS[key](self)

    def to_tsv_row(self) -> str:
        return "\t".join(
            [self.id, self.clade, self.order, self.family, self.species, self.tissue_type]
        )


_FIELD_GETTERS: dict[RecordKey, Callable[[OneKpRecord], str]] = {
    RecordKey.ID: lambda record: record.id,
    RecordKey.CLADE: lambda record: record.clade,
    RecordKey.ORDER: lambda record: record.order,
    RecordKey.FAMILY: lambda record: record.family,
    RecordKey.SPECIES: lambda record: record.species,
    RecordKey.TISSUE_TYPE: lambda record: record.tissue_type,
}
