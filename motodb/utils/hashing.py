"""
Hashing utilities (deterministic)

Intent
- Fingerprint build artifacts so reruns on an unchanged source tree can be compared at a glance.

Notes
- Uses SHA1 for stable, short-ish digests (40 hex chars).
- Intended for *fingerprinting*, not security.
"""

from __future__ import annotations

from hashlib import sha1
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def sha1_bytes(data: bytes) -> str:
    """
    SHA1 hex digest of raw bytes.
    """
    return sha1(data).hexdigest()


def sha1_file(path: PathLike) -> str:
    """
    SHA1 hex digest of a file's raw bytes.
    """
    return sha1_bytes(Path(path).read_bytes())


__all__ = ["sha1_bytes", "sha1_file"]
