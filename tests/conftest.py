import json
import logging
import textwrap

import pytest

from cx_schema_validator.config import ValidatorConfig
from cx_schema_validator.models.schema_evaluator import SchemaEvaluator
from cx_schema_validator.models.schema_store import SchemaStore
from cx_schema_validator.validators.module_validator import ModuleValidator
from cx_schema_validator.validators.workflow_validator import WorkflowValidator


SCHEMAS = {
    "components/layout.json": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "component": {"const": "layout"},
            "props": {
                "type": "object",
                "properties": {
                    "orientation": {"type": "string", "enum": ["horizontal", "vertical"]},
                    "title": {"$ref": "common/text.json"},
                },
            },
            "children": {"type": "array"},
        },
    },
    "components/common/text.json": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "string",
        "x-example": "Orders",
    },
    "components/form.json": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "required": ["name"],
        "properties": {
            "component": {"const": "form"},
            "name": {"type": "string"},
        },
    },
    "components/dataGrid.json": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "props": {
                "type": "object",
                "properties": {"pageSize": {"type": "integer", "minimum": 1, "examples": [20]}},
            },
        },
    },
    "workflows/workflow.json": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {
            "workflow": {
                "type": "object",
                "properties": {
                    "workflowId": {"type": "string"},
                    "executionMode": {"enum": ["Sync", "Async"]},
                },
            },
            "activities": {"type": "array", "items": {"$ref": "activity.json"}},
        },
    },
    "workflows/activity.json": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "properties": {"name": {"type": "string"}},
    },
    "workflows/tasks/foreach.json": {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "required": ["collection"],
        "properties": {"collection": {"type": "string"}},
    },
}


@pytest.fixture(autouse=True)
def reset_package_logger():
    """The CLI installs handlers on the package logger; undo that between tests."""
    yield
    package_logger = logging.getLogger("cx_schema_validator")
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def schemas_dir(tmp_path):
    root = tmp_path / "schemas"
    for key, schema in SCHEMAS.items():
        target = root / key
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(schema), encoding="utf-8")
    return root


@pytest.fixture
def store(schemas_dir):
    return SchemaStore.from_directory(schemas_dir)


@pytest.fixture
def evaluator(store):
    return SchemaEvaluator(store)


@pytest.fixture
def module_validator(store):
    return ModuleValidator(store=store)


@pytest.fixture
def workflow_validator(store):
    return WorkflowValidator(store=store)


@pytest.fixture
def task_schema_validator(store):
    return WorkflowValidator(store=store, config=ValidatorConfig(validate_task_schemas=True))


@pytest.fixture
def write_yaml(tmp_path):
    """Write dedented YAML text to ``tmp_path/<name>`` and return the path."""

    def _write(name, content):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
        return path

    return _write


def locations(violations):
    return [v.location for v in violations]


def kinds(violations):
    return [v.kind.value for v in violations]
