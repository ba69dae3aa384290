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

"""JSON Schema library loader.

Schemas are read once from a directory tree and indexed by their POSIX path
relative to that tree, e.g. ``components/form.json`` or
``workflows/tasks/foreach.json``.
"""

import json
import logging
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from ..exceptions import SchemaLoadError

logger = logging.getLogger(__name__)

SchemaDocument = Dict[str, Any]

BUNDLED_SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"
LOCAL_SCHEMAS_DIR = ".cx-schema"


def default_schemas_path() -> Path:
    """Resolve the schema library location.

    Resolution order:
    - ``CX_SCHEMA_PATH`` environment variable (if it exists)
    - ``.cx-schema`` in the current working directory
    - the schemas bundled with this package
    """
    env_path = os.environ.get("CX_SCHEMA_PATH")
    if env_path and Path(env_path).exists():
        return Path(env_path)

    local_path = Path.cwd() / LOCAL_SCHEMAS_DIR
    if local_path.exists():
        return local_path

    return BUNDLED_SCHEMAS_DIR


class SchemaStore:
    """Read-only mapping from schema key to parsed schema document."""

    def __init__(self, schemas: Mapping[str, SchemaDocument], root: Optional[Path] = None):
        self._schemas = MappingProxyType(dict(schemas))
        self._root = root

    @classmethod
    def from_directory(cls, schemas_dir: Union[str, Path]) -> "SchemaStore":
        """Load every ``*.json`` file below ``schemas_dir``.

        Raises:
            SchemaLoadError: If the directory does not exist
        """
        root = Path(schemas_dir)
        if not root.is_dir():
            raise SchemaLoadError(f"Schemas directory not found: {root}")

        schemas: Dict[str, SchemaDocument] = {}
        for schema_path in sorted(root.rglob("*.json")):
            if not schema_path.is_file():
                continue
            key = schema_path.relative_to(root).as_posix()
            try:
                with open(schema_path, "r", encoding="utf-8") as f:
                    schema = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error loading schema {schema_path}: {e}")
                continue
            if not isinstance(schema, dict):
                logger.error(f"Schema {schema_path} is not a JSON object, skipping")
                continue
            schemas[key] = schema

        logger.debug(f"Loaded {len(schemas)} schemas from {root}")
        return cls(schemas, root=root)

    @classmethod
    def from_mapping(cls, schemas: Mapping[str, SchemaDocument]) -> "SchemaStore":
        return cls(schemas)

    @property
    def root(self) -> Optional[Path]:
        return self._root

    def lookup(self, key: str) -> Optional[SchemaDocument]:
        return self._schemas.get(key)

    def keys(self):
        return self._schemas.keys()

    def items(self):
        return self._schemas.items()

    def __contains__(self, key: object) -> bool:
        return key in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)
