# motodb/io/writers.py
"""
Writers (Deterministic Artifacts I/O)

Intent
- Provide a single, deterministic way to write build outputs to disk:
  - JSON artifacts (merged database, index)
  - verbatim byte copies (staged source documents)
- Own the "reset the output directory" step of the build.

External calls
- json.dumps
- os.replace
- shutil.rmtree
- pathlib.Path
- motodb.utils.logging.get_logger

Primary functions
- ensure_parent_dir(path) -> None
- dump_json(obj, *, indent=3, sort_keys=False) -> str
- write_json(path, obj, *, indent=3, sort_keys=False) -> int
- write_bytes(path, data) -> int
- reset_dir(path) -> None

Key behaviors / guarantees
- **Deterministic output**
  - UTF-8 encoding
  - key order = insertion order unless sort_keys=True
  - ensure_ascii=False to preserve Unicode text
  - trailing newline

- **Atomic replace**
  - Every file is written to a sibling "<name>.tmp" and then moved into place with os.replace,
    so a reader never sees a half-written artifact.

- **Observability**
  - All write operations emit INFO-level logs with file path and bytes written.

Design notes
- Writers are intentionally *thin*: no schema enforcement, no validation logic.
- OSError propagates; motodb.core.outputs converts it into the build's IOFailure.
"""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from typing import Any

from motodb.utils.logging import get_logger


def ensure_parent_dir(path: str | Path) -> None:
    """
    Ensure parent directory exists for the given file path.
    Idempotent and safe.
    """
    p = Path(path)
    parent = p.parent
    if parent and not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    ensure_parent_dir(path)
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, path)
    finally:
        if tmp.exists():
            tmp.unlink()


def dump_json(obj: Any, *, indent: int = 3, sort_keys: bool = False) -> str:
    """
    Serialize `obj` the way every artifact is serialized (trailing newline included).
    """
    return json.dumps(obj, ensure_ascii=False, sort_keys=sort_keys, indent=indent) + "\n"


def write_json(
    path: str | Path,
    obj: Any,
    *,
    indent: int = 3,
    sort_keys: bool = False,
) -> int:
    """
    Write an object to JSON deterministically. Returns bytes written.

    Notes:
    - Caller must ensure `obj` is JSON-serializable (dict/list/str/num/bool/None).
    """
    logger = get_logger(__name__)
    p = Path(path)
    data = dump_json(obj, indent=indent, sort_keys=sort_keys).encode("utf-8")
    _atomic_write_bytes(p, data)

    logger.info("Wrote JSON: %s (bytes=%d)", str(p), len(data))
    return len(data)


def write_bytes(path: str | Path, data: bytes) -> int:
    """
    Write raw bytes verbatim (used for staged source copies). Returns bytes written.
    """
    logger = get_logger(__name__)
    p = Path(path)
    _atomic_write_bytes(p, data)

    logger.debug("Wrote file: %s (bytes=%d)", str(p), len(data))
    return len(data)


def reset_dir(path: str | Path) -> None:
    """
    Delete `path` (if present) and recreate it empty.
    """
    logger = get_logger(__name__)
    p = Path(path)
    if p.is_dir():
        shutil.rmtree(p)
    elif p.exists():
        p.unlink()
    p.mkdir(parents=True, exist_ok=True)

    logger.info("Cleaned %s", str(p))


__all__ = [
    "ensure_parent_dir",
    "dump_json",
    "write_json",
    "write_bytes",
    "reset_dir",
]
