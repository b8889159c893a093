# motodb/batch/build_database.py
"""
Build — merged motorcycle service database + lookup index.

Stages (linear, any failure goes straight to "failed")
    init -> clean -> validator_ready -> discover -> accumulate -> revalidate_merged -> write -> done

- clean:              delete and recreate dist_dir
- validator_ready:    load + compile the schema once
- discover:           glob the source root; zero documents is fatal (EmptyDiscovery)
- accumulate:         per file load -> validate -> uniqueness check (motodb.core.aggregator)
- revalidate_merged:  validate the merged database as a whole
- write:              staged copies, database, index (motodb.core.outputs)

Outputs (defaults, under dist/)
- motorcycle-service-intervals.json   {"motorcycles": [...]}
- motorcycle-service-index.json       {name: {"description", "location"}}
- <location> for every source document (verbatim copy)

Exit contract
- `run_build()` raises BuildError subclasses and never exits the process.
- `main()` is the only place that maps outcomes to exit codes: 0 on success, 1 on any failure.

Usage:
    python -m motodb.batch.build_database [--parameters-path configs/parameters.yaml]
    motodb-build --src-dir data --dist-dir dist
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence, Tuple

from motodb.core.aggregator import aggregate_sources, validate_merged
from motodb.core.errors import BuildError, EmptyDiscovery, IOFailure, SchemaViolation
from motodb.core.outputs import write_build_outputs
from motodb.core.validator import load_schema
from motodb.io.discovery import discover_source_files
from motodb.io.writers import reset_dir
from motodb.utils.config import ParametersConfig, load_parameters
from motodb.utils.hashing import sha1_file
from motodb.utils.logging import configure_logging, get_logger
from motodb.utils.paths import repo_root_from_parameters_path, resolve_path

DEFAULT_PARAMETERS_PATH = "configs/parameters.yaml"


class BuildStage(str, Enum):
    INIT = "init"
    CLEAN = "clean"
    VALIDATOR_READY = "validator_ready"
    DISCOVER = "discover"
    ACCUMULATE = "accumulate"
    REVALIDATE_MERGED = "revalidate_merged"
    WRITE = "write"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class BuildResult:
    n_records: int
    database_path: Path
    index_path: Path
    staged_files: Tuple[Path, ...]
    database_sha1: str
    index_sha1: str


def _check_dirs(src_dir: Path, dist_dir: Path) -> None:
    # cleaning dist_dir must never delete the sources
    src_dir, dist_dir = src_dir.resolve(), dist_dir.resolve()
    if src_dir == dist_dir or dist_dir in src_dir.parents:
        raise IOFailure(dist_dir, "clean", f"destination contains the source root {src_dir}")


def run_build(params: ParametersConfig, *, base_dir: str | Path = ".") -> BuildResult:
    """
    Run one full build. Raises BuildError (with `.stage` set) on the first failure.
    """
    logger = get_logger(__name__)

    src_dir = resolve_path(params.paths.src_dir, base_dir=base_dir)
    dist_dir = resolve_path(params.paths.dist_dir, base_dir=base_dir)
    schema_path = resolve_path(params.paths.schema_path, base_dir=base_dir)
    database_path = dist_dir / params.outputs.database_filename

    stage = BuildStage.INIT
    try:
        _check_dirs(src_dir, dist_dir)

        # ------------------------------------------------------------------
        # Clean
        # ------------------------------------------------------------------
        stage = BuildStage.CLEAN
        try:
            reset_dir(dist_dir)
        except OSError as e:
            raise IOFailure(dist_dir, "clean", e.strerror or str(e)) from e

        # ------------------------------------------------------------------
        # Compile schema once
        # ------------------------------------------------------------------
        stage = BuildStage.VALIDATOR_READY
        validator = load_schema(schema_path)
        logger.info("Schema loaded: %s (%s)", str(schema_path), validator.draft)

        # ------------------------------------------------------------------
        # Discover
        # ------------------------------------------------------------------
        stage = BuildStage.DISCOVER
        sources = discover_source_files(
            src_dir,
            pattern=params.discovery.pattern,
            exclude_suffixes=params.discovery.exclude_suffixes,
        )
        if not sources:
            raise EmptyDiscovery(src_dir, params.discovery.pattern)
        logger.info("Found %d source files", len(sources))

        # ------------------------------------------------------------------
        # Load -> validate -> accumulate
        # ------------------------------------------------------------------
        stage = BuildStage.ACCUMULATE
        acc = aggregate_sources(
            sources,
            src_root=src_dir,
            validator=validator,
            container_key=params.records.container_key,
        )
        logger.info("All files validated")

        stage = BuildStage.REVALIDATE_MERGED
        validate_merged(acc, validator, label=database_path)

        # ------------------------------------------------------------------
        # Write
        # ------------------------------------------------------------------
        stage = BuildStage.WRITE
        artifacts = write_build_outputs(
            acc,
            dist_dir,
            database_filename=params.outputs.database_filename,
            index_filename=params.outputs.index_filename,
            indent=params.outputs.indent,
            stage_sources=params.outputs.stage_sources,
        )
        try:
            db_sha1 = sha1_file(artifacts.database_path)
            index_sha1 = sha1_file(artifacts.index_path)
        except OSError as e:
            raise IOFailure(dist_dir, "fingerprint", e.strerror or str(e)) from e

        logger.info("Created %s (sha1=%s)", str(artifacts.database_path), db_sha1)
        logger.info("Created %s (sha1=%s)", str(artifacts.index_path), index_sha1)

        stage = BuildStage.DONE
    except BuildError as e:
        e.stage = stage.value
        raise

    logger.info("Build complete! %d motorcycles processed.", len(acc))

    return BuildResult(
        n_records=len(acc),
        database_path=artifacts.database_path,
        index_path=artifacts.index_path,
        staged_files=artifacts.staged_files,
        database_sha1=db_sha1,
        index_sha1=index_sha1,
    )


def report_failure(err: BuildError) -> None:
    """
    Log a failed build: every violation for SchemaViolation, the message otherwise.
    """
    logger = get_logger(__name__)

    if isinstance(err, SchemaViolation):
        logger.error("Validation failed for %s:", err.path)
        for issue in err.issues:
            logger.error("  - %s: %s", issue.path, issue.message)
    else:
        logger.error("%s", err.message)

    logger.error("Build failed: %s at stage=%s", err.kind, err.stage or BuildStage.FAILED.value)


def _apply_overrides(params: ParametersConfig, args: argparse.Namespace) -> ParametersConfig:
    paths_update = {
        k: v
        for k, v in (
            ("src_dir", args.src_dir),
            ("dist_dir", args.dist_dir),
            ("schema_path", args.schema_path),
        )
        if v is not None
    }
    logging_update = {
        k: v
        for k, v in (("level", args.log_level), ("log_file", args.log_file))
        if v is not None
    }
    return params.model_copy(
        update={
            "paths": params.paths.model_copy(update=paths_update),
            "logging": params.logging.model_copy(update=logging_update),
        }
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Validate motorcycle service documents and build the merged database + index."
    )
    parser.add_argument("--parameters-path", default=DEFAULT_PARAMETERS_PATH)
    parser.add_argument("--src-dir", default=None)
    parser.add_argument("--dist-dir", default=None)
    parser.add_argument("--schema-path", default=None)
    parser.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", default=None)
    args = parser.parse_args(argv)

    logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Load config (a missing default file means "use defaults from CWD")
    # ------------------------------------------------------------------
    parameters_path = Path(args.parameters_path)
    try:
        if parameters_path.exists():
            params = load_parameters(parameters_path)
            base_dir = repo_root_from_parameters_path(parameters_path)
        elif args.parameters_path == DEFAULT_PARAMETERS_PATH:
            params = ParametersConfig()
            base_dir = Path.cwd()
        else:
            logger.error("Parameters file not found: %s", str(parameters_path))
            return 1
    except ValueError as e:
        logger.error("Invalid configuration %s: %s", str(parameters_path), e)
        return 1

    params = _apply_overrides(params, args)

    log_file = params.logging.log_file
    if log_file:
        log_file = str(resolve_path(log_file, base_dir=base_dir))
    configure_logging(level=params.logging.level, log_file=log_file)

    logger.info("Building motorcycle service database (project=%s)", params.project.name)

    # ------------------------------------------------------------------
    # Run (single exit-code boundary)
    # ------------------------------------------------------------------
    try:
        result = run_build(params, base_dir=base_dir)
    except BuildError as e:
        report_failure(e)
        return 1
    except Exception:
        logger.exception("Build failed with an unexpected error")
        return 1

    logger.info(
        "Build completed | records=%d database=%s index=%s staged=%d",
        result.n_records,
        str(result.database_path),
        str(result.index_path),
        len(result.staged_files),
    )
    return 0


__all__ = ["BuildStage", "BuildResult", "run_build", "report_failure", "main"]


if __name__ == "__main__":
    raise SystemExit(main())
