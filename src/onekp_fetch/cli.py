from __future__ import annotations

import logging
from pathlib import Path

import typer

from onekp import AppConfig, OneKpError, RecordKey, SequenceType, load_config
from onekp.catalog import RecordStore, load_record_store
from onekp.fetch import FetchOrchestrator, FetchOutcome, render_fetch_summary
from onekp.net import RateLimitedClient
from onekp.schemas import METADATA_HEADER
from onekp.storage import ResponseCache

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = typer.Typer(help="OneKP CLI: browse 1KP sample metadata and fetch translated assemblies.")

_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Optional config file path (YAML or JSON).",
    exists=True,
    dir_okay=False,
    readable=True,
)
_CACHE_DIR_OPTION = typer.Option(
    None,
    "--cache-dir",
    help="Response cache directory. Defaults to caching.directory from config.",
)


@app.command("fetch")
def fetch(
    rootdir: Path = typer.Option(
        ...,
        "--rootdir",
        "-r",
        help="Directory to write downloaded sequence files into.",
        file_okay=False,
    ),
    filter_key: RecordKey = typer.Option(
        ...,
        "--filter-key",
        help="Record field used to select samples.",
    ),
    filter_values: str = typer.Option(
        ...,
        "--filter-values",
        help="Comma-separated values matched exactly against --filter-key.",
    ),
    sequence_type: SequenceType = typer.Option(
        ...,
        "--sequence-type",
        "-s",
        help="Which translated assemblies to download.",
    ),
    config_path: Path | None = _CONFIG_OPTION,
    cache_dir: Path | None = _CACHE_DIR_OPTION,
) -> None:
    """Download sequence files for the selected samples."""
    config = _load_config(config_path)
    client = _build_client(config)
    store = _load_store(config, client, cache_dir=cache_dir)

    try:
        rootdir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        typer.echo(f"cannot create rootdir={rootdir}: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    records = store.filter(filter_key, _split_values(filter_values))
    orchestrator = FetchOrchestrator(
        client,
        base_url=config.source.assemblies_url,
        on_outcome=_echo_outcome,
    )

    typer.echo("--- Fetching start ---", err=True)
    result = orchestrator.run(records, rootdir, sequence_type)
    typer.echo("--- Fetching end ---", err=True)

    summary_lines = render_fetch_summary(result).splitlines()
    typer.secho(summary_lines[0], fg=typer.colors.GREEN, err=True)
    typer.secho(summary_lines[1], fg=typer.colors.RED, err=True)
    for line in summary_lines[2:]:
        typer.echo(line, err=True)


@app.command("metadata")
def metadata(
    filter_key: RecordKey | None = typer.Option(
        None,
        "--filter-key",
        help="Optional record field used to select samples.",
    ),
    filter_values: str | None = typer.Option(
        None,
        "--filter-values",
        help="Comma-separated values matched exactly against --filter-key.",
    ),
    config_path: Path | None = _CONFIG_OPTION,
    cache_dir: Path | None = _CACHE_DIR_OPTION,
) -> None:
    """Print sample metadata as TSV."""
    if filter_key is None and filter_values is not None:
        typer.echo("--filter-values requires --filter-key", err=True)
        raise typer.Exit(code=2)

    config = _load_config(config_path)
    store = _load_store(config, _build_client(config), cache_dir=cache_dir)

    lines = ["\t".join(METADATA_HEADER)]
    if filter_key is None:
        records = store.records
    elif filter_values is None:
        records = []
    else:
        records = store.filter(filter_key, _split_values(filter_values))
    lines.extend(record.to_tsv_row() for record in records)

    typer.echo("\n".join(lines))


@app.command("show")
def show(
    key: RecordKey = typer.Option(
        ...,
        "--key",
        "-k",
        help="Record field whose distinct values are listed.",
    ),
    config_path: Path | None = _CONFIG_OPTION,
    cache_dir: Path | None = _CACHE_DIR_OPTION,
) -> None:
    """List the distinct values of one record field."""
    config = _load_config(config_path)
    store = _load_store(config, _build_client(config), cache_dir=cache_dir)
    typer.echo("\n".join(store.distinct_values(key)))


def _load_config(path: Path | None) -> AppConfig:
    try:
        return load_config(path)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _build_client(config: AppConfig) -> RateLimitedClient:
    return RateLimitedClient(
        interval_seconds=config.client.interval_seconds,
        max_attempts=config.client.max_attempts,
        timeout_seconds=config.client.timeout_seconds,
        user_agent=config.client.user_agent,
    )


def _load_store(
    config: AppConfig,
    client: RateLimitedClient,
    *,
    cache_dir: Path | None,
) -> RecordStore:
    cache = ResponseCache(
        cache_dir or Path(config.caching.directory),
        client,
        ttl_seconds=config.caching.ttl_seconds,
    )
    try:
        return load_record_store(
            cache,
            metadata_url=config.source.metadata_url,
            listing_url=config.source.assemblies_url,
        )
    except OneKpError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _echo_outcome(outcome: FetchOutcome, index: int, total: int) -> None:
    if outcome.succeeded:
        typer.secho(
            f"[{index}/{total}] Success: {outcome.species}",
            fg=typer.colors.GREEN,
            err=True,
        )
        return

    typer.secho(
        f"[{index}/{total}] Failed: {outcome.species}",
        fg=typer.colors.RED,
        err=True,
    )
    for failure in outcome.failures:
        typer.echo(failure.reason, err=True)


def _split_values(raw: str) -> list[str]:
    return [value for value in raw.split(",") if value]


def main() -> None:
    """CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
