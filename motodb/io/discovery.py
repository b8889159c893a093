"""
Discovery — enumerate eligible source documents under the source root.

Files are matched with a recursive glob and returned sorted by their
'/'-separated path relative to the source root, so the merge order is the
same on every platform and every run. Schema documents are skipped by
file-name suffix, hidden files and directories by their leading dot.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from motodb.utils.paths import relative_location


def is_excluded(path: Path, exclude_suffixes: Iterable[str], *, root: Path) -> bool:
    # dot-files and anything under a dot-directory are never sources
    if any(part.startswith(".") for part in path.relative_to(root).parts):
        return True
    return any(path.name.endswith(suffix) for suffix in exclude_suffixes)


def discover_source_files(
    src_dir: str | Path,
    *,
    pattern: str = "**/*.json",
    exclude_suffixes: Iterable[str] = (".schema.json",),
) -> List[Path]:
    """
    Return every file under src_dir matching `pattern`, minus excluded names.

    A missing src_dir yields an empty list; the caller decides whether that is fatal.
    """
    root = Path(src_dir)
    if not root.is_dir():
        return []

    excluded = tuple(exclude_suffixes)
    found = [p for p in root.glob(pattern) if p.is_file() and not is_excluded(p, excluded, root=root)]
    return sorted(found, key=lambda p: relative_location(p, root=root))


__all__ = ["discover_source_files", "is_excluded"]
