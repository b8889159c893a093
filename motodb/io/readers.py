# motodb/io/readers.py
"""
Readers (JSON source documents)

Intent
- Read source documents and the schema file as raw bytes + parsed JSON.
- Keep the raw bytes: source documents are staged verbatim under the output tree.

Primary functions
- read_bytes(path) -> bytes
- parse_json_bytes(data, *, source) -> Any
- read_json(path) -> Any

Key behaviors / guarantees
- **File existence check**: raises FileNotFoundError if the path does not exist.
- **Strict JSON**: UTF-8 only; the non-standard constants NaN / Infinity / -Infinity are rejected.
- **Writable strings**: escaped lone surrogates (e.g. "\\ud800") are rejected as MalformedInput.
- **Parse failures** raise MalformedInput (a ValueError) naming the file and the position.

Where this fits in the pipeline
- Reader-level responsibility: "bytes -> JSON value".
- Record Loader responsibility: "JSON value -> one record" (motodb.core.records).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from motodb.core.errors import MalformedInput


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant {token}")


def read_bytes(path: str | Path) -> bytes:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {str(p)}")
    return p.read_bytes()


def parse_json_bytes(data: bytes, *, source: str | Path) -> Any:
    """
    Decode UTF-8 bytes and parse them as strict JSON.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInput(source, f"not valid UTF-8 ({e.reason} at byte {e.start})") from e

    try:
        obj = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedInput(source, f"invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})") from e
    except ValueError as e:
        raise MalformedInput(source, f"invalid JSON: {e}") from e

    # "\ud800"-style escapes decode to lone surrogates that cannot be written back as UTF-8
    try:
        json.dumps(obj, ensure_ascii=False).encode("utf-8")
    except UnicodeEncodeError as e:
        raise MalformedInput(source, f"string holds an unpaired surrogate {e.object[e.start:e.end]!a}") from e
    return obj


def read_json(path: str | Path) -> Any:
    """
    Read and parse a JSON file.
    """
    return parse_json_bytes(read_bytes(path), source=path)


__all__ = ["read_bytes", "parse_json_bytes", "read_json"]
