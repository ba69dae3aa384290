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

"""Draft-7 JSON Schema evaluation against the schema store."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError
from referencing import Registry
from referencing.exceptions import Unresolvable
from referencing.jsonschema import DRAFT7

from .path import Path
from .schema_store import SchemaDocument, SchemaStore
from .violation import Violation, ViolationKind

logger = logging.getLogger(__name__)

_NO_EXAMPLE = object()

# Base URI for store documents without their own $id. Never fetched.
SCHEMA_BASE_URI = "https://cx-schema.local/"


@dataclass(frozen=True)
class RawViolation:
    """An evaluator finding, located relative to the evaluated value."""

    instance_location: Tuple[Union[str, int], ...]
    schema_location: str
    message: str
    example: Any = field(default=_NO_EXAMPLE, compare=False)

    @property
    def has_example(self) -> bool:
        return self.example is not _NO_EXAMPLE


def extract_example_from_schema(schema: Any) -> Any:
    """Pick an illustrative value out of a (sub-)schema.

    Returns ``None`` when the schema carries no example.
    """
    if not isinstance(schema, dict):
        return None

    if schema.get("x-example") is not None:
        return schema["x-example"]

    if schema.get("x-examples") is not None:
        return schema["x-examples"]

    examples = schema.get("examples")
    if isinstance(examples, list) and examples:
        return examples[0]

    enum = schema.get("enum")
    if isinstance(enum, list) and enum:
        return enum

    return None


def _schema_pointer(parts) -> str:
    tokens = [str(p).replace("~", "~0").replace("/", "~1") for p in parts]
    return "#/" + "/".join(tokens) if tokens else "#"


def key_uri(key: str) -> str:
    return SCHEMA_BASE_URI + key


def _with_key_id(key: str, schema: SchemaDocument) -> SchemaDocument:
    # Relative $refs resolve against the document's own key unless it declares an $id.
    if isinstance(schema.get("$id"), str) and schema["$id"]:
        return schema
    return {**schema, "$id": key_uri(key)}


class SchemaEvaluator:
    """Evaluates values against store schemas by key.

    Unknown keys evaluate to no violations: unregistered component or task
    types are only subject to the structural checks of the validators.
    """

    def __init__(self, store: SchemaStore):
        self._store = store
        self._registry = self._build_registry(store)
        self._validators: Dict[str, Draft7Validator] = {}
        self._lock = threading.Lock()

    @property
    def store(self) -> SchemaStore:
        return self._store

    @staticmethod
    def _build_registry(store: SchemaStore) -> Registry:
        resources = []
        for key, schema in store.items():
            resource = DRAFT7.create_resource(_with_key_id(key, schema))
            resources.append((key, resource))
            resources.append((key_uri(key), resource))
            own_id = schema.get("$id")
            if isinstance(own_id, str) and own_id and own_id != key:
                resources.append((own_id, resource))
        return Registry().with_resources(resources).crawl()

    def _get_validator(self, key: str) -> Optional[Draft7Validator]:
        with self._lock:
            validator = self._validators.get(key)
            if validator is not None:
                return validator

            schema = self._store.lookup(key)
            if schema is None:
                return None

            schema = _with_key_id(key, schema)
            Draft7Validator.check_schema(schema)
            validator = Draft7Validator(
                schema,
                registry=self._registry,
                format_checker=Draft7Validator.FORMAT_CHECKER,
            )
            self._validators[key] = validator
            return validator

    def has_schema(self, key: str) -> bool:
        return key in self._store

    def evaluate(self, key: str, value: Any) -> List[RawViolation]:
        """Evaluate ``value`` against the schema registered under ``key``.

        Raises:
            SchemaError: If the registered schema is itself invalid
            Unresolvable: If a ``$ref`` cannot be resolved
        """
        validator = self._get_validator(key)
        if validator is None:
            return []

        raw: List[RawViolation] = []
        for error in validator.iter_errors(value):
            example = extract_example_from_schema(error.schema)
            raw.append(
                RawViolation(
                    instance_location=tuple(error.absolute_path),
                    schema_location=_schema_pointer(error.absolute_schema_path),
                    message=error.message,
                    example=example if example is not None else _NO_EXAMPLE,
                )
            )
        return raw

    def evaluate_at(self, key: str, value: Any, base_path: Path) -> List[Violation]:
        """Evaluate and translate findings into ``schema_violation`` entries
        located under ``base_path``."""
        try:
            raw_violations = self.evaluate(key, value)
        except (SchemaError, Unresolvable) as e:
            logger.warning(f"Schema evaluation failed for {key}: {e}")
            return [
                Violation.at(
                    ViolationKind.SCHEMA_VIOLATION,
                    base_path,
                    f"Schema evaluation failed: {e}",
                    schema_location=key,
                )
            ]

        violations: List[Violation] = []
        for raw in raw_violations:
            extra: Dict[str, Any] = {"schema_location": raw.schema_location}
            if raw.has_example:
                extra["example_value"] = raw.example
            violations.append(
                Violation.at(
                    ViolationKind.SCHEMA_VIOLATION,
                    base_path.extend(raw.instance_location),
                    raw.message or "Schema validation failed",
                    **extra,
                )
            )
        return violations
