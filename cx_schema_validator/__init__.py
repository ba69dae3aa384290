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

"""Structural and JSON-Schema validation of CX module and workflow YAML files."""

__version__ = "0.1.0"

from .config import ValidatorConfig
from .exceptions import (
    CxSchemaValidatorError,
    DocumentLoadError,
    DocumentNotFoundError,
    ScaffoldError,
    SchemaLoadError,
    SchemaNotFoundError,
    YamlSyntaxError,
)
from .models import (
    Path,
    ResultAssembler,
    SchemaEvaluator,
    SchemaStore,
    ValidationResult,
    ValidationSummary,
    Violation,
    ViolationKind,
    default_schemas_path,
)
from .validators import (
    FileValidationResult,
    ModuleValidator,
    WorkflowValidator,
    detect_file_type,
    validate_file,
    validate_files,
)

__all__ = [
    "__version__",
    "CxSchemaValidatorError",
    "DocumentLoadError",
    "DocumentNotFoundError",
    "FileValidationResult",
    "ModuleValidator",
    "Path",
    "ResultAssembler",
    "ScaffoldError",
    "SchemaEvaluator",
    "SchemaLoadError",
    "SchemaNotFoundError",
    "SchemaStore",
    "ValidationResult",
    "ValidationSummary",
    "ValidatorConfig",
    "Violation",
    "ViolationKind",
    "WorkflowValidator",
    "YamlSyntaxError",
    "default_schemas_path",
    "detect_file_type",
    "validate_file",
    "validate_files",
]
