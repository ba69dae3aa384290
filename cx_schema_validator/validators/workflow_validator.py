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

"""Validator for automation workflow documents."""

from typing import Any, Dict, List, Mapping, Optional

from ..config import ValidatorConfig
from ..models.path import Path
from ..models.schema_evaluator import SchemaEvaluator
from ..models.schema_store import SchemaStore
from ..models.violation import ResultAssembler, ViolationKind
from .base import BaseValidator, check_deprecated_properties, is_present
from .step_walker import StepTreeWalker

WORKFLOW_SCHEMA_KEY = "workflows/workflow.json"

# Deprecated workflow metadata fields and their replacement guidance.
WORKFLOW_DEPRECATIONS: Dict[str, str] = {}

WORKFLOW_REQUIRED_FIELDS = ("workflowId", "name")


class WorkflowValidator(BaseValidator):
    """Validator for workflow documents (metadata, activities, steps)."""

    def __init__(
        self,
        store: Optional[SchemaStore] = None,
        config: Optional[ValidatorConfig] = None,
        evaluator: Optional[SchemaEvaluator] = None,
        deprecations: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(store=store, config=config, evaluator=evaluator)
        self.deprecations = dict(WORKFLOW_DEPRECATIONS if deprecations is None else deprecations)
        self.step_walker = StepTreeWalker(
            self.evaluator,
            validate_task_schemas=self.config.validate_task_schemas,
        )

    def check_document(self, document: Dict[str, Any], assembler: ResultAssembler) -> None:
        if not self.check_structure(document, assembler):
            return

        assembler.extend_errors(self.evaluator.evaluate_at(WORKFLOW_SCHEMA_KEY, document, Path.root()))

        activities = document.get("activities")
        if isinstance(activities, list):
            for index, activity in enumerate(activities):
                self.check_activity(activity, Path.of("activities", index), assembler)

    def check_structure(self, document: Dict[str, Any], assembler: ResultAssembler) -> bool:
        """Check the top-level shape. Returns False when the ``workflow``
        block is missing, in which case nothing else is checked."""
        if not is_present(document, "workflow"):
            assembler.error(ViolationKind.MISSING_PROPERTY, Path.of("workflow"), "Missing required property: workflow")
            return False

        if not is_present(document, "activities"):
            assembler.error(
                ViolationKind.MISSING_PROPERTY,
                Path.of("activities"),
                "Missing required property: activities",
            )

        workflow = document["workflow"]
        if not isinstance(workflow, dict):
            workflow = {}
        for field_name in WORKFLOW_REQUIRED_FIELDS:
            if not is_present(workflow, field_name):
                assembler.error(
                    ViolationKind.MISSING_PROPERTY,
                    Path.of("workflow", field_name),
                    f"Missing required property: workflow.{field_name}",
                )

        check_deprecated_properties(workflow, Path.of("workflow"), self.deprecations, assembler)
        return True

    def check_activity(self, activity: Any, path: Path, assembler: ResultAssembler) -> None:
        if not isinstance(activity, dict):
            assembler.error(ViolationKind.INVALID_ACTIVITY, path, "Activity must be an object")
            return

        if not is_present(activity, "name"):
            assembler.error(ViolationKind.MISSING_PROPERTY, path.append("name"), "Activity must have a name property")

        steps = activity.get("steps")
        if not isinstance(steps, list):
            assembler.error(ViolationKind.MISSING_PROPERTY, path.append("steps"), "Activity must have a steps array")
            return

        for index, step in enumerate(steps):
            self.step_walker.walk(step, path.append("steps").append(index), assembler)

    def task_types(self) -> List[str]:
        """Task types that have a registered schema."""
        prefix = "workflows/tasks/"
        return sorted(
            key[len(prefix):-len(".json")]
            for key in self.store.keys()
            if key.startswith(prefix) and key.endswith(".json")
        )
