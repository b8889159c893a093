# motodb/core/records.py
"""
Record Loader

Intent
- Read one source document, keep its raw bytes, and check the shape every later stage relies on:
  a JSON object whose container field (default "motorcycles") is an array holding exactly one object.

Contract
- load_source_document(path, *, src_root, container_key) -> SourceDocument
- SourceDocument.record -> the single record mapping

Failure modes
- unreadable file                      -> IOFailure
- not UTF-8 / not JSON                 -> MalformedInput
- root not an object                   -> MalformedInput
- container missing / not an array     -> MalformedInput
- container empty or holding > 1 item  -> MalformedInput
- container item not an object         -> MalformedInput

Schema validation happens after loading (motodb.core.aggregator); this module only guards
the structural assumptions the aggregator needs to pick the record out.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from motodb.core.errors import IOFailure, MalformedInput
from motodb.io.readers import parse_json_bytes, read_bytes
from motodb.utils.paths import relative_location

DEFAULT_CONTAINER_KEY = "motorcycles"


@dataclass(frozen=True)
class SourceDocument:
    path: Path
    location: str
    data: Dict[str, Any]
    raw: bytes
    container_key: str = DEFAULT_CONTAINER_KEY

    @property
    def record(self) -> Dict[str, Any]:
        return self.data[self.container_key][0]


def check_document_shape(data: Any, *, source: str | Path, container_key: str = DEFAULT_CONTAINER_KEY) -> None:
    """
    Raise MalformedInput unless `data` is {container_key: [<one object>]} (other keys allowed).
    """
    if not isinstance(data, dict):
        raise MalformedInput(source, f"document root must be a JSON object, got {type(data).__name__}")

    if container_key not in data:
        raise MalformedInput(source, f'missing "{container_key}" array')

    records = data[container_key]
    if not isinstance(records, list):
        raise MalformedInput(source, f'"{container_key}" must be an array, got {type(records).__name__}')
    if not records:
        raise MalformedInput(source, f'"{container_key}" is empty; expected exactly one record')
    if len(records) > 1:
        raise MalformedInput(source, f'"{container_key}" holds {len(records)} records; expected exactly one')
    if not isinstance(records[0], dict):
        raise MalformedInput(source, f'"{container_key}[0]" must be an object, got {type(records[0]).__name__}')


def load_source_document(
    path: str | Path,
    *,
    src_root: str | Path,
    container_key: str = DEFAULT_CONTAINER_KEY,
) -> SourceDocument:
    p = Path(path)
    try:
        raw = read_bytes(p)
    except OSError as e:
        raise IOFailure(p, "read", e.strerror or str(e)) from e

    data = parse_json_bytes(raw, source=p)
    check_document_shape(data, source=p, container_key=container_key)

    return SourceDocument(
        path=p,
        location=relative_location(p, root=src_root),
        data=data,
        raw=raw,
        container_key=container_key,
    )


__all__ = ["SourceDocument", "check_document_shape", "load_source_document", "DEFAULT_CONTAINER_KEY"]
