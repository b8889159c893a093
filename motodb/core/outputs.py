# motodb/core/outputs.py
"""
Output Writer — persist a finished build under the destination directory.

Writes, in this order:
1. a verbatim copy of every accepted source document at dist_dir/<location> (optional)
2. the merged database  (dist_dir/<database_filename>)
3. the index            (dist_dir/<index_filename>)

Both JSON artifacts use the same deterministic serialization (motodb.io.writers), so
an unchanged source tree always produces byte-identical outputs.

Any OSError (or a payload that cannot be serialized) is reported as IOFailure naming
the file and the operation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from motodb.core.aggregator import BuildAccumulator
from motodb.core.errors import IOFailure
from motodb.io.writers import write_bytes, write_json
from motodb.utils.logging import get_logger


@dataclass(frozen=True)
class OutputArtifacts:
    database_path: Path
    index_path: Path
    staged_files: Tuple[Path, ...]


def _check_staging_collisions(
    accumulator: BuildAccumulator,
    dist_dir: Path,
    reserved: Tuple[str, ...],
) -> None:
    for doc in accumulator.sources:
        if doc.location in reserved:
            raise IOFailure(
                dist_dir / doc.location,
                "stage",
                f"source {doc.path} would overwrite the build artifact of the same name",
            )


def write_build_outputs(
    accumulator: BuildAccumulator,
    dist_dir: str | Path,
    *,
    database_filename: str,
    index_filename: str,
    indent: int = 3,
    stage_sources: bool = True,
) -> OutputArtifacts:
    logger = get_logger(__name__)
    dist = Path(dist_dir)

    database_path = dist / database_filename
    index_path = dist / index_filename

    staged: List[Path] = []
    if stage_sources:
        _check_staging_collisions(accumulator, dist, (database_filename, index_filename))
        for doc in accumulator.sources:
            dest = dist.joinpath(*doc.location.split("/"))
            try:
                write_bytes(dest, doc.raw)
            except OSError as e:
                raise IOFailure(dest, "copy", e.strerror or str(e)) from e
            staged.append(dest)
        logger.info("Staged %d source files under %s", len(staged), str(dist))

    for path, payload in (
        (database_path, accumulator.merged_database()),
        (index_path, accumulator.index()),
    ):
        try:
            write_json(path, payload, indent=indent, sort_keys=False)
        except OSError as e:
            raise IOFailure(path, "write", e.strerror or str(e)) from e
        except ValueError as e:
            raise IOFailure(path, "encode", str(e)) from e

    return OutputArtifacts(
        database_path=database_path,
        index_path=index_path,
        staged_files=tuple(staged),
    )


__all__ = ["OutputArtifacts", "write_build_outputs"]
