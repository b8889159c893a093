# tests/conftest.py

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest


SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["motorcycles"],
    "properties": {
        "motorcycles": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["name", "description", "intervals"],
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "description": {"type": "string"},
                    "updated": {"type": "string", "format": "date"},
                    "intervals": {
                        "type": "array",
                        "minItems": 1,
                        "items": {
                            "type": "object",
                            "required": ["item"],
                            "properties": {
                                "item": {"type": "string"},
                                "distance_km": {"type": "integer", "minimum": 1},
                                "months": {"type": "integer", "minimum": 1, "maximum": 120},
                            },
                        },
                    },
                },
            },
        }
    },
}


def make_record(name: str, description: str = "desc", **extra: Any) -> Dict[str, Any]:
    rec: Dict[str, Any] = {
        "name": name,
        "description": description,
        "intervals": [{"item": "engine oil", "distance_km": 6000, "months": 12}],
    }
    rec.update(extra)
    return rec


def make_document(name: str, description: str = "desc", **extra: Any) -> Dict[str, Any]:
    return {"motorcycles": [make_record(name, description, **extra)]}


def write_json_file(root: Path, rel: str, obj: Any) -> Path:
    p = root / rel
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(obj, indent=2), encoding="utf-8")
    return p


@pytest.fixture
def schema() -> Dict[str, Any]:
    return json.loads(json.dumps(SCHEMA))


@pytest.fixture
def src_root(tmp_path: Path, schema: Dict[str, Any]) -> Path:
    """
    Empty source tree with the schema file in place (data/moto-service.schema.json).
    """
    root = tmp_path / "data"
    root.mkdir()
    write_json_file(root, "moto-service.schema.json", schema)
    return root
