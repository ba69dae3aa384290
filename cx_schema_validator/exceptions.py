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

"""Custom exceptions for the CX schema validator."""


class CxSchemaValidatorError(Exception):
    """Base exception for schema-validator related errors."""
    pass


class SchemaLoadError(CxSchemaValidatorError):
    """Exception raised when the schema library cannot be loaded."""
    pass


class SchemaNotFoundError(CxSchemaValidatorError):
    """Exception raised when a named schema cannot be located."""
    pass


class DocumentLoadError(CxSchemaValidatorError):
    """Exception raised when a YAML document cannot be read or parsed."""
    pass


class DocumentNotFoundError(DocumentLoadError):
    """Exception raised when a YAML document does not exist."""
    pass


class YamlSyntaxError(DocumentLoadError):
    """Exception raised for malformed YAML content."""
    pass


class ScaffoldError(CxSchemaValidatorError):
    """Exception raised when project scaffolding fails."""
    pass
