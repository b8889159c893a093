# motodb/core/validator.py
"""
Schema Validator

Intent
- Compile a JSON Schema once and reuse it as a pure predicate over documents.
- Report *every* violated constraint with a JSON Pointer to the offending location,
  so a failing document can be fixed in one pass.

Contract
- compile_schema(schema) -> SchemaValidator
    - raises SchemaCompileError if the schema itself is malformed
- SchemaValidator(document) -> ValidationResult(valid, errors)
    - never raises for a malformed document
    - errors are ValidationIssue(path, message), in validator traversal order
    - path is "/" for the document root, "/motorcycles/0/name" style otherwise

Draft selection
- The draft follows the schema's "$schema" keyword (Draft 2020-12 if absent).
- Format keywords (date, date-time, duration, uri, ...) are asserted, not just annotated.

External dependencies
- jsonschema: validator_for, FormatChecker, SchemaError
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Tuple

from jsonschema import FormatChecker
from jsonschema.exceptions import SchemaError
from jsonschema.validators import Draft202012Validator, validator_for

from motodb.core.errors import IOFailure, SchemaCompileError
from motodb.io.readers import read_json


@dataclass(frozen=True)
class ValidationIssue:
    path: str
    message: str


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[ValidationIssue, ...] = ()


def json_pointer(parts: Iterable[Any]) -> str:
    """
    RFC 6901 pointer for a sequence of keys / indices. Empty -> "/".
    """
    tokens = [str(p).replace("~", "~0").replace("/", "~1") for p in parts]
    if not tokens:
        return "/"
    return "/" + "/".join(tokens)


class SchemaValidator:
    """
    A compiled schema. Call it with a document to get a ValidationResult.
    """

    def __init__(self, schema: Any) -> None:
        if not isinstance(schema, (dict, bool)):
            raise SchemaCompileError(f"schema must be an object or boolean, got {type(schema).__name__}")
        cls = validator_for(schema, default=Draft202012Validator)
        try:
            cls.check_schema(schema)
        except SchemaError as e:
            raise SchemaCompileError(f"{e.message} (at {json_pointer(e.path)})") from e

        self.schema = schema
        self.draft = cls.__name__
        self._validator = cls(schema, format_checker=FormatChecker())

    def __call__(self, document: Any) -> ValidationResult:
        issues = tuple(
            ValidationIssue(path=json_pointer(err.absolute_path), message=err.message)
            for err in self._validator.iter_errors(document)
        )
        return ValidationResult(valid=not issues, errors=issues)


def compile_schema(schema: Mapping[str, Any] | bool) -> SchemaValidator:
    return SchemaValidator(schema)


def load_schema(path: str | Path) -> SchemaValidator:
    """
    Read a schema file and compile it.

    A missing or unreadable file is an IOFailure; a file that is not JSON, or is not a
    valid schema, is a SchemaCompileError.
    """
    try:
        schema = read_json(path)
    except OSError as e:
        raise IOFailure(path, "read", e.strerror or str(e)) from e
    except ValueError as e:
        raise SchemaCompileError(str(e), schema_path=path) from e

    try:
        return SchemaValidator(schema)
    except SchemaCompileError as e:
        raise SchemaCompileError(e.reason, schema_path=path) from e


__all__ = [
    "ValidationIssue",
    "ValidationResult",
    "SchemaValidator",
    "compile_schema",
    "load_schema",
    "json_pointer",
]
