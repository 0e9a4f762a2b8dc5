from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter
from typing import Protocol

from onekp.errors import FetchExhausted
from onekp.schemas import FetchStatus, OneKpRecord, SequenceType

logger = logging.getLogger(__name__)


class BytesClient(Protocol):
    def get_bytes(self, url: str) -> bytes:
        """Fetch the body of url as bytes."""


@dataclass(slots=True, frozen=True)
class DownloadFailure:
    record_id: str
    filename: str
    url: str
    reason: str


@dataclass(slots=True, frozen=True)
class FetchOutcome:
    record_id: str
    species: str
    status: FetchStatus
    paths: tuple[Path, ...] = ()
    failures: tuple[DownloadFailure, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status == FetchStatus.SUCCEEDED


@dataclass(slots=True)
class FetchRunResult:
    outcomes: list[FetchOutcome] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def succeeded_ids(self) -> list[str]:
        return [outcome.record_id for outcome in self.outcomes if outcome.succeeded]

    @property
    def failed_ids(self) -> list[str]:
        return [outcome.record_id for outcome in self.outcomes if not outcome.succeeded]

    @property
    def failures(self) -> list[DownloadFailure]:
        return [failure for outcome in self.outcomes for failure in outcome.failures]


OutcomeCallback = Callable[[FetchOutcome, int, int], None]


class FetchOrchestrator:
    """Download translated sequence files for records, one record at a time."""

    def __init__(
        self,
        client: BytesClient,
        *,
        base_url: str,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        if not base_url.strip():
            raise ValueError("base_url must not be empty")
        self.client = client
        self.base_url = base_url
        self.on_outcome = on_outcome

    def run(
        self,
        records: Iterable[OneKpRecord],
        target_directory: str | Path,
        sequence_type: SequenceType,
    ) -> FetchRunResult:
        started_at = perf_counter()
        target = Path(target_directory)
        pending = list(records)
        filenames = sequence_type.filenames()
        result = FetchRunResult()

        logger.info(
            "fetch run start records=%d sequence_type=%s target=%s",
            len(pending),
            sequence_type,
            target,
        )
        for index, record in enumerate(pending, start=1):
            outcome = self._fetch_record(record, target=target, filenames=filenames)
            result.outcomes.append(outcome)
            if self.on_outcome is not None:
                self.on_outcome(outcome, index, len(pending))

        result.duration_seconds = perf_counter() - started_at
        logger.info(
            "fetch run end succeeded=%d failed=%d duration=%.3fs",
            len(result.succeeded_ids),
            len(result.failed_ids),
            result.duration_seconds,
        )
        return result

    def _fetch_record(
        self,
        record: OneKpRecord,
        *,
        target: Path,
        filenames: tuple[str, ...],
    ) -> FetchOutcome:
        logger.debug("record id=%s status=%s", record.id, FetchStatus.FETCHING)
        paths: list[Path] = []
        for filename in filenames:
            url = record.to_remote_url(self.base_url, filename)
            path = target / record.to_filename(filename)
            try:
                payload = self.client.get_bytes(url)
                path.write_bytes(payload)
            except (FetchExhausted, OSError) as exc:
                logger.error("download failed id=%s url=%s error=%s", record.id, url, exc)
                failure = DownloadFailure(
                    record_id=record.id,
                    filename=filename,
                    url=url,
                    reason=str(exc),
                )
                return FetchOutcome(
                    record_id=record.id,
                    species=record.species,
                    status=FetchStatus.FAILED,
                    paths=tuple(paths),
                    failures=(failure,),
                )
            paths.append(path)
            logger.info("downloaded id=%s path=%s bytes=%d", record.id, path, len(payload))

        return FetchOutcome(
            record_id=record.id,
            species=record.species,
            status=FetchStatus.SUCCEEDED,
            paths=tuple(paths),
        )


def render_fetch_summary(result: FetchRunResult) -> str:
    lines = [
        f"Success IDs: {','.join(result.succeeded_ids)}",
        f"Failed IDs: {','.join(result.failed_ids)}",
    ]
    for failure in result.failures:
        lines.append(f"  {failure.record_id} {failure.filename}: {failure.reason}")
    return "\n".join(lines)
