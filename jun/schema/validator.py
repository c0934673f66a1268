"""Pass/fail validation of JUN documents.

A document is valid when it decodes. Field-level problems never fail
validation because the decoder degrades them to "not set"; only structural
problems do, and the first one found is reported.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jun.codec.decoder import decode_node
from jun.codec.dialects import Dialect, get_dialect
from jun.errors import DecodeError, InvalidJSONError
from jun.loader import load_from_path


@dataclass
class ValidationResult:
    """Outcome of validating one document."""

    passed: bool
    dialect: str = ""
    error_kind: str = ""  # DecodeError.kind, e.g. "MissingDiscriminator"
    message: str = ""
    path: str = ""  # JSON Pointer of the failing node

    def summary(self) -> str:
        if self.passed:
            return f"[PASS] valid {self.dialect} document"
        return f"[FAIL] {self.error_kind} at {self.path or '/'}: {self.message}"


def validate_document(
    data: Any,
    dialect: str | Dialect | None = None,
    max_depth: int | None = None,
) -> ValidationResult:
    """Validate an already-parsed document."""
    resolved = get_dialect(dialect)
    try:
        decode_node(data, resolved, max_depth)
    except DecodeError as e:
        return ValidationResult(
            passed=False,
            dialect=resolved.name,
            error_kind=e.kind,
            message=e.message,
            path=e.path,
        )
    return ValidationResult(passed=True, dialect=resolved.name)


def validate_file(
    path: str | Path,
    dialect: str | Dialect | None = None,
    max_depth: int | None = None,
) -> ValidationResult:
    """Validate a JSON or YAML document file."""
    resolved = get_dialect(dialect)
    try:
        load_from_path(path, resolved, max_depth)
    except InvalidJSONError as e:
        return ValidationResult(
            passed=False, dialect=resolved.name, error_kind=e.kind, message=str(e)
        )
    except DecodeError as e:
        return ValidationResult(
            passed=False,
            dialect=resolved.name,
            error_kind=e.kind,
            message=e.message,
            path=e.path,
        )
    return ValidationResult(passed=True, dialect=resolved.name)
