"""
Path helpers

Intent
- Make build behavior independent of CWD.
- Standardize: configs/parameters.yaml => repo root.
- Normalize index locations to a portable, forward-slash form.
"""
from __future__ import annotations

from pathlib import Path, PurePosixPath


def repo_root_from_parameters_path(parameters_path: str | Path) -> Path:
    """
    Given configs/parameters.yaml, return repo root.
    Works for absolute or relative paths.
    """
    p = Path(parameters_path).resolve()
    # .../repo/configs/parameters.yaml -> .../repo
    return p.parents[1]


def resolve_path(path_like: str | Path, *, base_dir: str | Path) -> Path:
    """
    Resolve a path relative to base_dir unless already absolute.
    """
    p = Path(path_like)
    if p.is_absolute():
        return p
    return (Path(base_dir) / p).resolve()


def relative_location(path: str | Path, *, root: str | Path) -> str:
    """
    Path of `path` relative to `root`, always '/'-separated.

    The comparison is lexical first, so a symlink found under `root` keeps its
    in-tree location even when it points elsewhere. Raises ValueError if `path`
    is not inside `root`.
    """
    p, r = Path(path), Path(root)
    try:
        rel = p.relative_to(r)
    except ValueError:
        rel = None
    if rel is None or ".." in rel.parts:
        rel = p.resolve().relative_to(r.resolve())
    return PurePosixPath(*rel.parts).as_posix()


__all__ = ["repo_root_from_parameters_path", "resolve_path", "relative_location"]
