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

"""Document validators and batch helpers.

``validate_file`` picks the validator from the document contents (or an
explicit ``file_type``) and ``validate_files`` reuses one schema store for a
whole batch.
"""

import logging
from dataclasses import dataclass
from pathlib import Path as FilePath
from typing import Dict, Iterable, List, Optional, Union

import yaml

from ..config import ValidatorConfig
from ..models.schema_evaluator import SchemaEvaluator
from ..models.schema_store import SchemaStore, default_schemas_path
from ..models.violation import ValidationResult
from .base import BaseValidator, check_deprecated_properties, is_present
from .component_walker import ComponentTreeWalker
from .module_validator import ModuleValidator
from .step_walker import StepTreeWalker
from .workflow_validator import WorkflowValidator

logger = logging.getLogger(__name__)

FILE_TYPE_MODULE = "module"
FILE_TYPE_WORKFLOW = "workflow"
FILE_TYPE_AUTO = "auto"
FILE_TYPES = (FILE_TYPE_MODULE, FILE_TYPE_WORKFLOW)

YAML_SUFFIXES = (".yaml", ".yml")


class ValidatorFactory:
    """Factory for creating validators."""

    _validators = {
        FILE_TYPE_MODULE: ModuleValidator,
        FILE_TYPE_WORKFLOW: WorkflowValidator,
    }

    @classmethod
    def get_validator(
        cls,
        file_type: str,
        config: Optional[ValidatorConfig] = None,
        evaluator: Optional[SchemaEvaluator] = None,
    ) -> BaseValidator:
        """Get validator for a document type."""
        if file_type not in cls._validators:
            raise ValueError(f"Unknown document type: {file_type}")
        return cls._validators[file_type](config=config, evaluator=evaluator)


@dataclass
class FileValidationResult:
    file: str
    file_type: str
    result: ValidationResult

    @property
    def is_valid(self) -> bool:
        return self.result.is_valid


def detect_file_type(file_path: Union[str, FilePath]) -> str:
    """Guess whether a YAML file is a module or a workflow.

    The document keys win over the file name; anything unreadable is treated
    as a module so that the module validator reports the actual problem.
    """
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError):
        return FILE_TYPE_MODULE

    if isinstance(data, dict):
        if "workflow" in data:
            return FILE_TYPE_WORKFLOW
        if "module" in data or "components" in data:
            return FILE_TYPE_MODULE

    name = str(file_path)
    if FILE_TYPE_WORKFLOW in name:
        return FILE_TYPE_WORKFLOW
    return FILE_TYPE_MODULE


def find_yaml_files(paths: Iterable[Union[str, FilePath]]) -> List[FilePath]:
    """Expand directories into the YAML files beneath them.

    Plain file arguments are kept as given (even if missing) so the validator
    can report them; directory contents are sorted for stable output.
    """
    files: List[FilePath] = []
    for entry in paths:
        entry = FilePath(entry)
        if entry.is_dir():
            files.extend(
                sorted(p for p in entry.rglob("*") if p.is_file() and p.suffix.lower() in YAML_SUFFIXES)
            )
        else:
            files.append(entry)
    return files


def _resolve_type(file_path: Union[str, FilePath], file_type: str) -> str:
    if file_type == FILE_TYPE_AUTO:
        return detect_file_type(file_path)
    if file_type not in FILE_TYPES:
        raise ValueError(f"Unknown document type: {file_type}")
    return file_type


def validate_file(
    file_path: Union[str, FilePath],
    config: Optional[ValidatorConfig] = None,
    file_type: str = FILE_TYPE_AUTO,
) -> FileValidationResult:
    """Validate a single YAML document."""
    return validate_files([file_path], config=config, file_type=file_type)[0]


def validate_files(
    file_paths: Iterable[Union[str, FilePath]],
    config: Optional[ValidatorConfig] = None,
    file_type: str = FILE_TYPE_AUTO,
    store: Optional[SchemaStore] = None,
) -> List[FileValidationResult]:
    """Validate documents one after another, sharing a single schema store."""
    config = config if config is not None else ValidatorConfig()
    if store is None:
        store = SchemaStore.from_directory(config.schemas_path or default_schemas_path())
    evaluator = SchemaEvaluator(store)
    validators: Dict[str, BaseValidator] = {}

    results: List[FileValidationResult] = []
    for file_path in file_paths:
        resolved = _resolve_type(file_path, file_type)
        if resolved not in validators:
            validators[resolved] = ValidatorFactory.get_validator(resolved, config=config, evaluator=evaluator)
        logger.info(f"Validating {file_path} as {resolved}")
        result = validators[resolved].validate(file_path)
        results.append(FileValidationResult(file=str(file_path), file_type=resolved, result=result))
    return results


__all__ = [
    "BaseValidator",
    "ComponentTreeWalker",
    "FILE_TYPES",
    "FileValidationResult",
    "ModuleValidator",
    "StepTreeWalker",
    "ValidatorFactory",
    "WorkflowValidator",
    "check_deprecated_properties",
    "detect_file_type",
    "find_yaml_files",
    "is_present",
    "validate_file",
    "validate_files",
]
