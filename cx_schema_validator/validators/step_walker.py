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

"""Recursive validation of workflow steps.

Control-flow tasks nest further steps:

- ``foreach`` / ``while``: ``steps``
- ``switch``: ``cases[*].steps`` and ``default.steps``

Every other task value is an opaque leaf.
"""

import logging
from typing import Any, Optional, Set

from ..models.path import Path
from ..models.schema_evaluator import SchemaEvaluator
from ..models.violation import ResultAssembler, ViolationKind
from .base import is_present

logger = logging.getLogger(__name__)

TASK_SCHEMA_KEY = "workflows/tasks/{task_type}.json"

LOOP_TASKS = ("foreach", "while")
SWITCH_TASK = "switch"


def task_schema_key(task_type: Any) -> str:
    return TASK_SCHEMA_KEY.format(task_type=task_type)


class StepTreeWalker:
    """Walks a step subtree, appending findings to an assembler.

    Per-task schemas are only consulted when ``validate_task_schemas`` is
    set; by default the root workflow schema is the only schema evaluated.
    """

    def __init__(self, evaluator: Optional[SchemaEvaluator] = None, validate_task_schemas: bool = False):
        self.evaluator = evaluator
        self.validate_task_schemas = validate_task_schemas and evaluator is not None

    def walk(self, step: Any, path: Path, assembler: ResultAssembler) -> None:
        self._walk(step, path, assembler, set())

    def _walk(self, step: Any, path: Path, assembler: ResultAssembler, ancestors: Set[int]) -> None:
        if not isinstance(step, dict):
            assembler.error(ViolationKind.SCHEMA_VIOLATION, path, "Step must be an object")
            return

        if id(step) in ancestors:
            logger.debug(f"Skipping recursive step reference at {path}")
            return

        if not is_present(step, "task"):
            assembler.error(
                ViolationKind.MISSING_PROPERTY,
                path.append("task"),
                "Step must have a task property",
            )
            return

        task_type = step["task"]
        if self.validate_task_schemas:
            schema_key = task_schema_key(task_type)
            if self.evaluator.has_schema(schema_key):
                assembler.extend_errors(self.evaluator.evaluate_at(schema_key, step, path))

        ancestors.add(id(step))
        try:
            if task_type in LOOP_TASKS:
                self._walk_steps(step.get("steps"), path.append("steps"), assembler, ancestors)
            elif task_type == SWITCH_TASK:
                self._walk_switch(step, path, assembler, ancestors)
        finally:
            ancestors.discard(id(step))

    def _walk_switch(self, step: dict, path: Path, assembler: ResultAssembler, ancestors: Set[int]) -> None:
        cases = step.get("cases")
        if isinstance(cases, list):
            for case_index, case in enumerate(cases):
                if isinstance(case, dict):
                    case_path = path.append("cases").append(case_index).append("steps")
                    self._walk_steps(case.get("steps"), case_path, assembler, ancestors)

        default = step.get("default")
        if isinstance(default, dict):
            self._walk_steps(default.get("steps"), path.append("default").append("steps"), assembler, ancestors)

    def _walk_steps(self, steps: Any, steps_path: Path, assembler: ResultAssembler, ancestors: Set[int]) -> None:
        if not isinstance(steps, list):
            return
        for index, nested in enumerate(steps):
            self._walk(nested, steps_path.append(index), assembler, ancestors)
