# motodb/utils/config.py
"""
Config Loader — Motorcycle Service Database Build (Typed YAML Configs)

Intent
- Load + validate configs/parameters.yaml for the database build.
- Return **typed** configuration objects (Pydantic) so the build stages never touch raw dicts.

What this module guarantees
- **Strict validation:** invalid configs fail fast with actionable Pydantic errors.
- **Unicode whitespace hardening:** NBSP/BOM/narrow NBSP are normalized before YAML parsing.
- **Deterministic defaults:** if a key is omitted, model defaults apply
  (the defaults reproduce the historical data/ -> dist/ layout).

Config models (high level)
- ProjectConfig:  name
- PathsConfig:    src_dir, dist_dir, schema_path
- DiscoveryConfig: pattern (glob, recursive), exclude_suffixes (schema files)
- RecordsConfig:  container_key (the single array field of every document)
- OutputsConfig:  database_filename, index_filename, indent, stage_sources
- LoggingConfig:  level, log_file

Primary functions
- load_parameters(path="configs/parameters.yaml") -> ParametersConfig

Implementation notes / gotchas
- `_load_yaml()` enforces that the YAML root is a mapping; an empty file yields defaults.
- Output filenames are bare names: they always land directly under dist_dir.

External dependencies
- PyYAML: yaml.safe_load
- Pydantic v2: BaseModel, validators, model_validate
- Local: motodb.utils.logging
"""


from __future__ import annotations

from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from motodb.utils.logging import get_logger, resolve_level


# -----------------------------
# Parameter models
# -----------------------------
class ProjectConfig(BaseModel):
    name: str = "motorcycle_service_db"


class PathsConfig(BaseModel):
    src_dir: str = "data"
    dist_dir: str = "dist"
    schema_path: str = "data/moto-service.schema.json"


class DiscoveryConfig(BaseModel):
    pattern: str = "**/*.json"
    exclude_suffixes: List[str] = Field(default_factory=lambda: [".schema.json"])

    @field_validator("pattern")
    @classmethod
    def _validate_pattern(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("discovery.pattern must be a non-empty glob")
        return v.strip()


class RecordsConfig(BaseModel):
    container_key: str = "motorcycles"

    @field_validator("container_key")
    @classmethod
    def _validate_container_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("records.container_key must be a non-empty string")
        return v


class OutputsConfig(BaseModel):
    database_filename: str = "motorcycle-service-intervals.json"
    index_filename: str = "motorcycle-service-index.json"
    indent: int = 3

    # mirror every source document under dist_dir
    stage_sources: bool = True

    @field_validator("database_filename", "index_filename")
    @classmethod
    def _validate_bare_filename(cls, v: str, info) -> str:
        name = (v or "").strip()
        if not name:
            raise ValueError(f"outputs.{info.field_name} must be non-empty")
        if PurePosixPath(name).name != name or PureWindowsPath(name).name != name:
            raise ValueError(f"outputs.{info.field_name} must be a bare file name, got: {v!r}")
        return name

    @field_validator("indent")
    @classmethod
    def _validate_indent(cls, v: int) -> int:
        if v < 0:
            raise ValueError("outputs.indent must be >= 0")
        return v

    @model_validator(mode="after")
    def _distinct_filenames(self) -> "OutputsConfig":
        if self.database_filename == self.index_filename:
            raise ValueError("outputs.database_filename and outputs.index_filename must differ")
        return self


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def _validate_level(cls, v: str) -> str:
        resolve_level(v)
        return v.upper()


class ParametersConfig(BaseModel):
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    records: RecordsConfig = Field(default_factory=RecordsConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# -----------------------------
# YAML helpers
# -----------------------------
def _load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with p.open("r", encoding="utf-8") as f:
        text = f.read()

    # sanitize BEFORE YAML parse (fix NBSP / BOM / narrow NBSP)
    for ch in ["\u00A0", "\u2007", "\u202F", "\uFEFF"]:
        text = text.replace(ch, " ")

    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping/object: {path}")
    return data


def load_parameters(path: str | Path = "configs/parameters.yaml") -> ParametersConfig:
    """
    Load and validate parameters.yaml into a typed ParametersConfig.
    """
    logger = get_logger(__name__)
    raw = _load_yaml(path)
    try:
        params = ParametersConfig.model_validate(raw)
    except ValidationError as e:
        logger.error("Invalid parameters.yaml: %s", e)
        raise
    return params


__all__ = [
    "ParametersConfig",
    "PathsConfig",
    "DiscoveryConfig",
    "RecordsConfig",
    "OutputsConfig",
    "LoggingConfig",
    "load_parameters",
]
