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

import logging
from abc import ABC, abstractmethod
from pathlib import Path as FilePath
from typing import Any, Dict, Mapping, Optional, Union

from ..config import ValidatorConfig
from ..exceptions import DocumentNotFoundError, YamlSyntaxError
from ..file_io.source_location import attach_source
from ..models.path import Path
from ..models.schema_evaluator import SchemaEvaluator
from ..models.schema_store import SchemaStore, default_schemas_path
from ..models.violation import ResultAssembler, ValidationResult, ViolationKind
from ..models.yaml_parser import SourceMap, yaml_parser

logger = logging.getLogger(__name__)


def is_present(mapping: Mapping[str, Any], key: str) -> bool:
    """Presence test shared by all structural checks.

    Absent keys, null, false, zero and the empty string count as missing.
    Empty sequences and mappings are present.
    """
    value = mapping.get(key)
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return False
    return True


def check_deprecated_properties(
    obj: Any,
    path: Path,
    deprecations: Mapping[str, str],
    assembler: ResultAssembler,
) -> None:
    """Warn for each deprecated field present on ``obj``."""
    if not isinstance(obj, dict):
        return
    for old_prop, message in deprecations.items():
        if old_prop in obj:
            assembler.warning(ViolationKind.DEPRECATED_PROPERTY, path.append(old_prop), message)


class BaseValidator(ABC):
    """Abstract base validator.

    Owns the file → parse → validate → result pipeline. Subclasses only
    implement :meth:`check_document`, which walks an already parsed document.
    """

    def __init__(
        self,
        store: Optional[SchemaStore] = None,
        config: Optional[ValidatorConfig] = None,
        evaluator: Optional[SchemaEvaluator] = None,
    ):
        self.config = config if config is not None else ValidatorConfig()
        if evaluator is not None:
            self.evaluator = evaluator
        else:
            if store is None:
                store = SchemaStore.from_directory(self.config.schemas_path or default_schemas_path())
            self.evaluator = SchemaEvaluator(store)

    @property
    def store(self) -> SchemaStore:
        return self.evaluator.store

    @abstractmethod
    def check_document(self, document: Dict[str, Any], assembler: ResultAssembler) -> None:
        """Append every structural and schema finding for ``document``."""
        pass

    def validate(self, file_path: Union[str, FilePath]) -> ValidationResult:
        """Validate a YAML file. Never raises for a file-path input."""
        assembler = ResultAssembler()
        location = str(file_path)

        try:
            data, source_map = yaml_parser.load_document(file_path)
        except DocumentNotFoundError:
            assembler.error(ViolationKind.FILE_NOT_FOUND, location, f"File not found: {location}")
            return self._finish(assembler, location)
        except YamlSyntaxError as e:
            assembler.error(ViolationKind.YAML_SYNTAX_ERROR, location, f"YAML syntax error: {e}")
            return self._finish(assembler, location)
        except Exception as e:
            logger.exception(f"Failed to read {location}")
            assembler.error(ViolationKind.UNEXPECTED_ERROR, location, f"Unexpected error: {e}")
            return self._finish(assembler, location)

        return self._run(data, source_map, assembler, location)

    def validate_string(self, content: str, source_name: str = "<string>") -> ValidationResult:
        """Validate YAML content that is already in memory."""
        assembler = ResultAssembler()
        try:
            data, source_map = yaml_parser.load_from_string(content)
        except YamlSyntaxError as e:
            assembler.error(ViolationKind.YAML_SYNTAX_ERROR, source_name, f"YAML syntax error: {e}")
            return self._finish(assembler, source_name)
        return self._run(data, source_map, assembler, source_name)

    def validate_data(self, data: Any, source_name: str = "<data>") -> ValidationResult:
        """Validate an already parsed document tree."""
        return self._run(data, None, ResultAssembler(), source_name)

    def _run(
        self,
        data: Any,
        source_map: Optional[SourceMap],
        assembler: ResultAssembler,
        location: str,
    ) -> ValidationResult:
        document = data if isinstance(data, dict) else {}
        failure: Optional[Exception] = None
        try:
            self.check_document(document, assembler)
        except Exception as e:
            logger.exception(f"Unexpected error while validating {location}")
            failure = e

        assembler.errors[:] = attach_source(assembler.errors, source_map)
        assembler.warnings[:] = attach_source(assembler.warnings, source_map)
        if failure is not None:
            assembler.error(ViolationKind.UNEXPECTED_ERROR, location, f"Unexpected error: {failure}")
        return self._finish(assembler, location)

    def _finish(self, assembler: ResultAssembler, location: str) -> ValidationResult:
        result = assembler.build(location, include_warnings=self.config.include_warnings)
        logger.debug(
            f"{location}: {result.summary.status} "
            f"({result.summary.error_count} errors, {result.summary.warning_count} warnings)"
        )
        return result
