# motodb/core/errors.py
"""Build error kinds.

Every error here is fatal: the build aborts on the first one and the
process boundary (`motodb.batch.build_database.main`) turns it into a
non-zero exit code. There is no retry or skip-and-continue mode.

The orchestrator sets `stage` on an error as it propagates, so the final
diagnostic can say where the build stopped.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

if TYPE_CHECKING:
    from motodb.core.validator import ValidationIssue

PathLike = Union[str, Path]


class BuildError(Exception):
    """Base class for every error that aborts a build."""

    kind = "BuildError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
        self.stage: Optional[str] = None


class SchemaCompileError(BuildError):
    """The schema document itself is invalid or unreadable as a schema."""

    kind = "SchemaCompileError"

    def __init__(self, message: str, *, schema_path: Optional[PathLike] = None) -> None:
        self.schema_path = str(schema_path) if schema_path is not None else None
        self.reason = message
        where = f" ({self.schema_path})" if self.schema_path else ""
        super().__init__(f"Invalid schema{where}: {message}")


class MalformedInput(BuildError, ValueError):
    """A source document cannot be parsed or lacks the expected record container.

    Also a ValueError, so callers that only care about "bad data" can catch that.
    """

    kind = "MalformedInput"

    def __init__(self, path: PathLike, reason: str) -> None:
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Malformed input {self.path}: {reason}")


class SchemaViolation(BuildError):
    """A document (source or merged database) failed schema validation.

    Attributes:
        path: document the issues belong to
        issues: every violated constraint, in validator order
    """

    kind = "SchemaViolation"

    def __init__(self, path: PathLike, issues: Sequence["ValidationIssue"]) -> None:
        self.path = str(path)
        self.issues: Tuple["ValidationIssue", ...] = tuple(issues)
        lines = [f"Validation failed for {self.path}:"]
        lines.extend(f"  - {i.path}: {i.message}" for i in self.issues)
        super().__init__("\n".join(lines))


class DuplicateKey(BuildError):
    """Two source documents claim the same record name."""

    kind = "DuplicateKey"

    def __init__(self, name: str, path: PathLike, first_path: PathLike) -> None:
        self.name = name
        self.path = str(path)
        self.first_path = str(first_path)
        super().__init__(
            f'Duplicate motorcycle name: "{name}" in {self.path} (first seen in {self.first_path})'
        )


class EmptyDiscovery(BuildError):
    """No eligible source documents were found."""

    kind = "EmptyDiscovery"

    def __init__(self, src_dir: PathLike, pattern: str) -> None:
        self.src_dir = str(src_dir)
        self.pattern = pattern
        super().__init__(f"No source JSON files found under {self.src_dir} (pattern={pattern})")


class IOFailure(BuildError):
    """Reading, writing, copying or deleting a file failed."""

    kind = "IOFailure"

    def __init__(self, path: PathLike, operation: str, reason: str) -> None:
        self.path = str(path)
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to {operation} {self.path}: {reason}")


__all__ = [
    "BuildError",
    "SchemaCompileError",
    "MalformedInput",
    "SchemaViolation",
    "DuplicateKey",
    "EmptyDiscovery",
    "IOFailure",
]
