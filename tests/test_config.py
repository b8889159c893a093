# tests/test_config.py

from pathlib import Path

import pytest
from pydantic import ValidationError

from motodb.utils.config import (
    OutputsConfig,
    ParametersConfig,
    _load_yaml,
    load_parameters,
)


def _write(tmp_path: Path, name: str, content: str) -> Path:
    p = tmp_path / name
    p.write_text(content, encoding="utf-8")
    return p


def test_load_yaml_file_not_found(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        _load_yaml(tmp_path / "nope.yaml")


def test_load_yaml_root_not_mapping(tmp_path: Path):
    p = _write(tmp_path, "bad.yaml", "- a\n- b\n")
    with pytest.raises(ValueError) as e:
        _load_yaml(p)
    assert "yaml root must be a mapping" in str(e.value).lower()


def test_load_yaml_syntax_error_is_value_error(tmp_path: Path):
    p = _write(tmp_path, "broken.yaml", "paths: [unclosed\n")
    with pytest.raises(ValueError) as e:
        _load_yaml(p)
    assert "invalid yaml" in str(e.value).lower()
    assert str(p) in str(e.value)


def test_load_yaml_sanitizes_bad_whitespace(tmp_path: Path):
    # NBSP + BOM should not break YAML parsing
    content = "\ufeffa:\u00A0 1\n"
    p = _write(tmp_path, "ok.yaml", content)
    d = _load_yaml(p)
    assert d["a"] == 1


def test_empty_file_gives_defaults(tmp_path: Path):
    params = load_parameters(_write(tmp_path, "parameters.yaml", ""))
    assert params == ParametersConfig()
    assert params.paths.src_dir == "data"
    assert params.paths.dist_dir == "dist"
    assert params.records.container_key == "motorcycles"
    assert params.outputs.database_filename == "motorcycle-service-intervals.json"
    assert params.outputs.index_filename == "motorcycle-service-index.json"
    assert params.outputs.indent == 3
    assert params.discovery.exclude_suffixes == [".schema.json"]


def test_load_parameters_full_file(tmp_path: Path):
    p = _write(
        tmp_path,
        "parameters.yaml",
        """
project:
  name: test_db

paths:
  src_dir: src
  dist_dir: build/out
  schema_path: src/moto.schema.json

discovery:
  pattern: "*/*.json"
  exclude_suffixes: [".schema.json", ".draft.json"]

records:
  container_key: bikes

outputs:
  database_filename: db.json
  index_filename: idx.json
  indent: 2
  stage_sources: false

logging:
  level: debug
  log_file: logs/build.log
""",
    )

    params = load_parameters(p)
    assert params.project.name == "test_db"
    assert params.paths.dist_dir == "build/out"
    assert params.discovery.exclude_suffixes == [".schema.json", ".draft.json"]
    assert params.records.container_key == "bikes"
    assert params.outputs.stage_sources is False
    assert params.logging.level == "DEBUG"
    assert params.logging.log_file == "logs/build.log"


@pytest.mark.parametrize(
    "outputs",
    [
        {"indent": -1},
        {"database_filename": "nested/db.json"},
        {"index_filename": "..\\idx.json"},
        {"database_filename": ""},
        {"database_filename": "same.json", "index_filename": "same.json"},
    ],
)
def test_outputs_validation_rejects(outputs):
    with pytest.raises(ValidationError):
        OutputsConfig.model_validate(outputs)


def test_invalid_log_level_rejected(tmp_path: Path):
    p = _write(tmp_path, "parameters.yaml", "logging:\n  level: chatty\n")
    with pytest.raises(ValidationError):
        load_parameters(p)


def test_empty_container_key_rejected(tmp_path: Path):
    p = _write(tmp_path, "parameters.yaml", "records:\n  container_key: '  '\n")
    with pytest.raises(ValidationError):
        load_parameters(p)
