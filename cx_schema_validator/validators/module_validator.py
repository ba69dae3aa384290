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

"""Validator for UI module documents."""

from typing import Any, Dict, Mapping, Optional

from ..config import ValidatorConfig
from ..models.path import Path
from ..models.schema_evaluator import SchemaEvaluator
from ..models.schema_store import SchemaStore
from ..models.violation import ResultAssembler, ViolationKind
from .base import BaseValidator, check_deprecated_properties, is_present
from .component_walker import ComponentTreeWalker

COMPONENT_DEPRECATIONS: Dict[str, str] = {
    "key": 'Use "name" instead of "key"',
    "type": 'Use "fieldType" instead of "type" for fields',
}

MODULE_REQUIRED_FIELDS = ("name", "appModuleId", "displayName")


class ModuleValidator(BaseValidator):
    """Validator for module documents (components, routes, entities)."""

    def __init__(
        self,
        store: Optional[SchemaStore] = None,
        config: Optional[ValidatorConfig] = None,
        evaluator: Optional[SchemaEvaluator] = None,
        deprecations: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(store=store, config=config, evaluator=evaluator)
        self.deprecations = dict(COMPONENT_DEPRECATIONS if deprecations is None else deprecations)
        self.component_walker = ComponentTreeWalker(self.evaluator)

    def check_document(self, document: Dict[str, Any], assembler: ResultAssembler) -> None:
        if not self.check_structure(document, assembler):
            return

        components = document.get("components")
        if isinstance(components, list):
            for index, component in enumerate(components):
                self.check_component(component, Path.of("components", index), assembler)

        routes = document.get("routes")
        if isinstance(routes, list):
            for index, route in enumerate(routes):
                self.check_route(route, Path.of("routes", index), assembler)

        entities = document.get("entities")
        if isinstance(entities, list):
            for index, entity in enumerate(entities):
                self.check_entity(entity, Path.of("entities", index), assembler)

    def check_structure(self, document: Dict[str, Any], assembler: ResultAssembler) -> bool:
        """Check the top-level shape. Returns False when the ``module`` block
        is missing, in which case nothing else is checked."""
        if not is_present(document, "module"):
            assembler.error(ViolationKind.MISSING_PROPERTY, Path.of("module"), "Missing required property: module")
            return False

        if not is_present(document, "components"):
            assembler.error(
                ViolationKind.MISSING_PROPERTY,
                Path.of("components"),
                "Missing required property: components",
            )

        module = document["module"]
        if not isinstance(module, dict):
            module = {}
        for field_name in MODULE_REQUIRED_FIELDS:
            if not is_present(module, field_name):
                assembler.error(
                    ViolationKind.MISSING_PROPERTY,
                    Path.of("module", field_name),
                    f"Missing required property: module.{field_name}",
                )
        return True

    def check_component(self, component: Any, path: Path, assembler: ResultAssembler) -> None:
        if not isinstance(component, dict):
            assembler.error(ViolationKind.INVALID_COMPONENT, path, "Component must be an object")
            return

        if not is_present(component, "name"):
            assembler.error(ViolationKind.MISSING_PROPERTY, path.append("name"), "Component must have a name property")

        if is_present(component, "layout"):
            self.component_walker.walk(component["layout"], path.append("layout"), assembler)

        check_deprecated_properties(component, path, self.deprecations, assembler)

    def check_route(self, route: Any, path: Path, assembler: ResultAssembler) -> None:
        route = route if isinstance(route, dict) else {}
        if not is_present(route, "path"):
            assembler.error(ViolationKind.MISSING_PROPERTY, path.append("path"), "Route must have a path property")
        if not is_present(route, "component"):
            assembler.error(
                ViolationKind.MISSING_PROPERTY,
                path.append("component"),
                "Route must have a component property",
            )

    def check_entity(self, entity: Any, path: Path, assembler: ResultAssembler) -> None:
        entity = entity if isinstance(entity, dict) else {}
        if not is_present(entity, "name"):
            assembler.error(ViolationKind.MISSING_PROPERTY, path.append("name"), "Entity must have a name property")
