"""Data models shared by the validators.

Nothing here imports from the validators package; the schema store and
evaluator can be used on their own.
"""

from .path import Path
from .schema_evaluator import RawViolation, SchemaEvaluator, extract_example_from_schema
from .schema_store import SchemaStore, default_schemas_path
from .violation import (
    ResultAssembler,
    ValidationResult,
    ValidationSummary,
    Violation,
    ViolationKind,
)
from .yaml_parser import YamlParser, yaml_parser
