from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

GIGADB_DATASET_URL = "https://ftp.cngb.org/pub/gigadb/pub/10.5524/100001_101000/100627"


class ClientConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    interval_seconds: float = Field(default=3.0, ge=0.0)
    max_attempts: int = Field(default=5, ge=1)
    timeout_seconds: float = Field(default=60.0, gt=0.0)
    user_agent: str = "onekp-fetch/0.1.0"


class CachingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    directory: str = ".onekp_cache"
    ttl_minutes: int = Field(default=60, ge=0)

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_minutes * 60


class SourceConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    metadata_url: str = f"{GIGADB_DATASET_URL}/Sample-List-with-Taxonomy.tsv.csv"
    assemblies_url: str = f"{GIGADB_DATASET_URL}/assemblies/"

    @field_validator("metadata_url", "assemblies_url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized.startswith(("http://", "https://")):
            raise ValueError(f"source url must be http(s): {value}")
        return normalized


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    client: ClientConfig = Field(default_factory=ClientConfig)
    caching: CachingConfig = Field(default_factory=CachingConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    if path is None:
        return AppConfig()

    raw = Path(path).read_text(encoding="utf-8")
    payload = _parse_yaml_or_json(raw)
    try:
        return AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


def _parse_yaml_or_json(raw: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        parsed = yaml.safe_load(raw)
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("Configuration root must be an object.")
    return parsed
