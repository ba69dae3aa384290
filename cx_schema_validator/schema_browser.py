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

"""Lookup and inspection of the schema library.

Schemas are found by short name (``form``, ``foreach``) in a fixed directory
order, falling back to a fuzzy match on the file base name.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .exceptions import SchemaNotFoundError

logger = logging.getLogger(__name__)

MODULE_SCHEMA_DIRS = ("components", "fields", "actions")
WORKFLOW_SCHEMA_DIRS = ("workflows", "workflows/tasks", "workflows/common")

WORKFLOW_CORE_NAMES = ("workflow", "activity", "input", "output", "variable", "trigger", "schedule")
WORKFLOW_TASK_NAMES = (
    "foreach", "switch", "while", "validation", "map", "setvariable", "httprequest",
    "log", "error", "csv", "export", "template", "graphql", "order", "contact",
    "commodity", "job", "attachment", "email-send", "document-render", "document-send",
    "charge", "accounting-transaction", "payment", "workflow-execute", "condition",
    "expression", "mapping",
)

# (group title, directory relative to the schema root)
MODULE_GROUPS = (("Components", "components"), ("Fields", "fields"), ("Actions", "actions"))
WORKFLOW_GROUPS = (
    ("Core", "workflows"),
    ("Tasks", "workflows/tasks"),
    ("Common Definitions", "workflows/common"),
)


def _normalize(name: str) -> str:
    return re.sub(r"[^a-z0-9-]", "", name.lower())


def is_workflow_schema_name(name: str) -> bool:
    normalized = _normalize(name)
    return normalized in WORKFLOW_CORE_NAMES or normalized in WORKFLOW_TASK_NAMES


def get_all_schemas(schemas_path: Union[str, Path]) -> List[Path]:
    root = Path(schemas_path)
    if not root.is_dir():
        return []
    return sorted(p for p in root.rglob("*.json") if p.is_file())


def find_schema_file(
    schemas_path: Union[str, Path],
    name: str,
    prefer_workflow: bool = False,
) -> Optional[Path]:
    """Locate the schema file for a short name, or ``None``."""
    root = Path(schemas_path)
    if prefer_workflow or is_workflow_schema_name(name):
        search_dirs = WORKFLOW_SCHEMA_DIRS + MODULE_SCHEMA_DIRS
    else:
        search_dirs = MODULE_SCHEMA_DIRS + WORKFLOW_SCHEMA_DIRS

    for directory in search_dirs:
        candidate = root / directory / f"{name}.json"
        if candidate.is_file():
            return candidate

    wanted = re.sub(r"[^a-z0-9]", "", name.lower())
    if not wanted:
        return None
    for schema_file in get_all_schemas(root):
        base = re.sub(r"[^a-z0-9]", "", schema_file.stem.lower())
        if base == wanted or wanted in base:
            logger.debug(f"Fuzzy-matched schema '{name}' to {schema_file}")
            return schema_file
    return None


def load_schema_file(schemas_path: Union[str, Path], name: str) -> Tuple[str, Dict[str, Any]]:
    """Find and parse a schema by short name.

    Returns:
        The schema key (path relative to ``schemas_path``) and the parsed schema

    Raises:
        SchemaNotFoundError: If no schema matches ``name``
    """
    schema_file = find_schema_file(schemas_path, name)
    if schema_file is None:
        raise SchemaNotFoundError(f"Schema not found: {name}")
    with open(schema_file, "r", encoding="utf-8") as f:
        schema = json.load(f)
    return schema_file.relative_to(Path(schemas_path)).as_posix(), schema


def _names_in(directory: Path) -> List[str]:
    if not directory.is_dir():
        return []
    return sorted(p.stem for p in directory.iterdir() if p.is_file() and p.suffix == ".json")


def list_schemas(schemas_path: Union[str, Path], kind: str = "auto") -> Dict[str, Dict[str, List[str]]]:
    """Group available schema names for display.

    Returns ``{"module": {group: names}, "workflow": {group: names}}``; only
    the sections selected by ``kind`` (``module``, ``workflow`` or ``auto``)
    are present, and missing directories are left out.
    """
    root = Path(schemas_path)
    sections: Dict[str, Dict[str, List[str]]] = {}

    if kind in ("auto", "module"):
        sections["module"] = {
            title: _names_in(root / directory)
            for title, directory in MODULE_GROUPS
            if (root / directory).is_dir()
        }
    if kind in ("auto", "workflow"):
        sections["workflow"] = {
            title: _names_in(root / directory)
            for title, directory in WORKFLOW_GROUPS
            if (root / directory).is_dir()
        }
    return sections


def _placeholder(key: str, prop: Any) -> Any:
    if not isinstance(prop, dict):
        return None
    if prop.get("x-example") is not None:
        return prop["x-example"]
    if "const" in prop:
        return prop["const"]
    enum = prop.get("enum")
    if isinstance(enum, list) and enum:
        return enum[0]

    prop_type = prop.get("type")
    if prop_type == "string":
        return f"<{key}>" if prop.get("description") else "example"
    if prop_type in ("number", "integer"):
        return 1
    if prop_type == "boolean":
        return True
    if prop_type == "array":
        return []
    if prop_type == "object":
        return {}
    return None


def generate_example_from_schema(schema: Dict[str, Any]) -> Any:
    """Build an example document for a schema.

    Explicit examples (``x-example``, ``x-examples``, ``examples``) win;
    otherwise a skeleton is derived from the top-level ``properties``.
    """
    if schema.get("x-example"):
        return schema["x-example"]
    x_examples = schema.get("x-examples")
    if isinstance(x_examples, list) and x_examples:
        return x_examples[0]
    examples = schema.get("examples")
    if isinstance(examples, list) and examples:
        return examples[0]

    example: Dict[str, Any] = {}
    properties = schema.get("properties")
    if isinstance(properties, dict):
        for key, prop in properties.items():
            value = _placeholder(key, prop)
            if value is not None:
                example[key] = value
    return example
