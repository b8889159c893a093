# motodb/core/aggregator.py
"""
Aggregator — fold validated source documents into the merged database + index.

Intent
- One pass over the discovered sources: load -> validate -> check name uniqueness -> accumulate.
- Keep all state in an explicit BuildAccumulator owned by one build (no module-level globals),
  so the fold is reentrant and testable without touching the filesystem for outputs.
- Buffer everything in memory; nothing is written until the whole fold (and the merged
  re-validation) succeeded.

Ordering
- Sources are processed in lexicographic order of their '/'-separated location relative to the
  source root. The merged database and the index follow that order.

Primary API
- BuildAccumulator.add(document) -> None
- BuildAccumulator.merged_database() -> {"motorcycles": [...]}
- BuildAccumulator.index() -> {name: {"description": ..., "location": ...}}
- aggregate_sources(paths, *, src_root, validator, container_key) -> BuildAccumulator
- validate_merged(accumulator, validator, *, label) -> dict

Failure modes (fail-fast, first failure wins)
- MalformedInput / IOFailure from the loader
- SchemaViolation for a source document (all issues of that document)
- MalformedInput when a record's name/description are not strings
- DuplicateKey when a name was already accepted
- SchemaViolation for the merged database
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Tuple

from motodb.core.errors import DuplicateKey, MalformedInput, SchemaViolation
from motodb.core.records import DEFAULT_CONTAINER_KEY, SourceDocument, load_source_document
from motodb.core.validator import SchemaValidator
from motodb.utils.logging import get_logger
from motodb.utils.paths import relative_location


@dataclass(frozen=True)
class IndexEntry:
    description: str
    location: str

    def to_dict(self) -> Dict[str, str]:
        return {"description": self.description, "location": self.location}


class BuildAccumulator:
    """
    Running state of one build: accepted records, index entries and the seen-names map.
    """

    def __init__(self, container_key: str = DEFAULT_CONTAINER_KEY) -> None:
        self.container_key = container_key
        self._records: List[Dict[str, Any]] = []
        self._index: Dict[str, IndexEntry] = {}
        self._first_seen: Dict[str, Path] = {}
        self._sources: List[SourceDocument] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def sources(self) -> Tuple[SourceDocument, ...]:
        return tuple(self._sources)

    def add(self, document: SourceDocument) -> None:
        record = document.record

        name = record.get("name")
        if not isinstance(name, str):
            raise MalformedInput(document.path, 'record "name" must be a string')
        description = record.get("description")
        if not isinstance(description, str):
            raise MalformedInput(document.path, 'record "description" must be a string')

        if name in self._first_seen:
            raise DuplicateKey(name, document.path, self._first_seen[name])

        self._first_seen[name] = document.path
        self._records.append(record)
        self._index[name] = IndexEntry(description=description, location=document.location)
        self._sources.append(document)

    def merged_database(self) -> Dict[str, List[Dict[str, Any]]]:
        return {self.container_key: list(self._records)}

    def index(self) -> Dict[str, Dict[str, str]]:
        return {name: entry.to_dict() for name, entry in self._index.items()}


def aggregate_sources(
    paths: Iterable[str | Path],
    *,
    src_root: str | Path,
    validator: SchemaValidator,
    container_key: str = DEFAULT_CONTAINER_KEY,
) -> BuildAccumulator:
    logger = get_logger(__name__)

    ordered = sorted((Path(p) for p in paths), key=lambda p: relative_location(p, root=src_root))

    acc = BuildAccumulator(container_key=container_key)
    for path in ordered:
        document = load_source_document(path, src_root=src_root, container_key=container_key)

        result = validator(document.data)
        if not result.valid:
            raise SchemaViolation(document.path, result.errors)

        acc.add(document)
        logger.debug("Accepted %s (name=%s)", document.location, document.record["name"])

    return acc


def validate_merged(
    accumulator: BuildAccumulator,
    validator: SchemaValidator,
    *,
    label: str | Path,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Re-validate the merged database as a whole; returns it on success.
    `label` names the document in diagnostics (normally the database output path).
    """
    merged = accumulator.merged_database()
    result = validator(merged)
    if not result.valid:
        raise SchemaViolation(label, result.errors)
    return merged


__all__ = ["IndexEntry", "BuildAccumulator", "aggregate_sources", "validate_merged"]
