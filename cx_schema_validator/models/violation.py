# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Validation findings and the per-file result container."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from .path import Path


class ViolationKind(str, Enum):
    FILE_NOT_FOUND = "file_not_found"
    YAML_SYNTAX_ERROR = "yaml_syntax_error"
    MISSING_PROPERTY = "missing_property"
    SCHEMA_VIOLATION = "schema_violation"
    INVALID_COMPONENT = "invalid_component"
    INVALID_ACTIVITY = "invalid_activity"
    DEPRECATED_PROPERTY = "deprecated_property"
    UNEXPECTED_ERROR = "unexpected_error"

    def __str__(self) -> str:
        return self.value


ROOT_LOCATION = "/"

_MISSING = object()


@dataclass(frozen=True)
class Violation:
    """A single error or warning.

    ``location`` is the rendered structural path of the offending node, or
    the file path for failures that happen before the document is parsed.
    """

    kind: ViolationKind
    location: str
    message: str
    schema_location: Optional[str] = None
    example_value: Any = field(default=_MISSING, compare=False)
    line: Optional[int] = None
    column: Optional[int] = None

    @classmethod
    def at(
        cls,
        kind: ViolationKind,
        path: Union[Path, str],
        message: str,
        **extra: Any,
    ) -> "Violation":
        location = path.render() if isinstance(path, Path) else path
        return cls(kind=kind, location=location or ROOT_LOCATION, message=message, **extra)

    @property
    def has_example(self) -> bool:
        return self.example_value is not _MISSING

    def with_source(self, line: Optional[int], column: Optional[int]) -> "Violation":
        return replace(self, line=line, column=column)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "location": self.location,
            "message": self.message,
        }
        if self.schema_location is not None:
            data["schemaLocation"] = self.schema_location
        if self.has_example:
            data["exampleValue"] = self.example_value
        if self.line is not None:
            data["line"] = self.line
        if self.column is not None:
            data["column"] = self.column
        return data


@dataclass(frozen=True)
class ValidationSummary:
    file: str
    timestamp: str
    status: str
    error_count: int
    warning_count: int
    errors_by_kind: Dict[str, int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "timestamp": self.timestamp,
            "status": self.status,
            "errorCount": self.error_count,
            "warningCount": self.warning_count,
            "errorsByKind": dict(self.errors_by_kind),
        }


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: List[Violation]
    warnings: List[Violation]
    summary: ValidationSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "summary": self.summary.to_dict(),
        }


class ResultAssembler:
    """Collects violations in traversal order and builds the final result."""

    def __init__(self):
        self.errors: List[Violation] = []
        self.warnings: List[Violation] = []

    def error(
        self,
        kind: ViolationKind,
        path: Union[Path, str],
        message: str,
        **extra: Any,
    ) -> None:
        self.errors.append(Violation.at(kind, path, message, **extra))

    def warning(
        self,
        kind: ViolationKind,
        path: Union[Path, str],
        message: str,
        **extra: Any,
    ) -> None:
        self.warnings.append(Violation.at(kind, path, message, **extra))

    def extend_errors(self, violations: List[Violation]) -> None:
        self.errors.extend(violations)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def build(self, file_path: Union[str, os.PathLike], include_warnings: bool = True) -> ValidationResult:
        errors_by_kind: Dict[str, int] = {}
        for error in self.errors:
            errors_by_kind[error.kind.value] = errors_by_kind.get(error.kind.value, 0) + 1

        is_valid = not self.errors
        summary = ValidationSummary(
            file=str(file_path),
            timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            status="PASSED" if is_valid else "FAILED",
            error_count=len(self.errors),
            warning_count=len(self.warnings),
            errors_by_kind=errors_by_kind,
        )
        return ValidationResult(
            is_valid=is_valid,
            errors=list(self.errors),
            warnings=list(self.warnings) if include_warnings else [],
            summary=summary,
        )
