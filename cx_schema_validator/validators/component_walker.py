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

"""Recursive validation of nested module components.

A component node declares its type in ``component`` and may nest further
components in ``children`` (a list) and in the values of ``props`` (one hop
only: a prop value that is itself a component-tagged mapping). Each typed node
is checked against ``components/<type>.json`` when such a schema is
registered; unregistered types are accepted as-is.

Findings for a node are ordered: its own schema violations, then each child
(depth-first, in list order), then component-valued props in mapping order.
"""

import logging
from typing import Any, Set

from ..models.path import Path
from ..models.schema_evaluator import SchemaEvaluator
from ..models.violation import ResultAssembler, ViolationKind
from .base import is_present

logger = logging.getLogger(__name__)

COMPONENT_SCHEMA_KEY = "components/{component_type}.json"


def component_schema_key(component_type: Any) -> str:
    return COMPONENT_SCHEMA_KEY.format(component_type=component_type)


class ComponentTreeWalker:
    """Walks a component subtree, appending findings to an assembler."""

    def __init__(self, evaluator: SchemaEvaluator):
        self.evaluator = evaluator

    def walk(self, node: Any, path: Path, assembler: ResultAssembler) -> None:
        self._walk(node, path, assembler, set())

    def _walk(self, node: Any, path: Path, assembler: ResultAssembler, ancestors: Set[int]) -> None:
        if not isinstance(node, dict):
            return

        # YAML aliases can make a node its own descendant.
        if id(node) in ancestors:
            logger.debug(f"Skipping recursive component reference at {path}")
            return

        if not is_present(node, "component"):
            assembler.error(
                ViolationKind.MISSING_PROPERTY,
                path.append("component"),
                "Component must have a component type",
            )
            return

        schema_key = component_schema_key(node["component"])
        if self.evaluator.has_schema(schema_key):
            assembler.extend_errors(self.evaluator.evaluate_at(schema_key, node, path))

        ancestors.add(id(node))
        try:
            children = node.get("children")
            if isinstance(children, list):
                for index, child in enumerate(children):
                    self._walk(child, path.append("children").append(index), assembler, ancestors)

            props = node.get("props")
            if isinstance(props, dict):
                props_path = path.append("props")
                for key, value in props.items():
                    if isinstance(value, dict) and is_present(value, "component"):
                        self._walk(value, props_path.append(key if isinstance(key, (str, int)) else str(key)), assembler, ancestors)
        finally:
            ancestors.discard(id(node))
