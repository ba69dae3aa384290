import pytest

from cx_schema_validator.config import ValidatorConfig
from cx_schema_validator.validators import (
    ModuleValidator,
    ValidatorFactory,
    WorkflowValidator,
    detect_file_type,
    find_yaml_files,
    validate_file,
    validate_files,
)


def test_factory_returns_validators(evaluator):
    assert isinstance(ValidatorFactory.get_validator("module", evaluator=evaluator), ModuleValidator)
    assert isinstance(ValidatorFactory.get_validator("workflow", evaluator=evaluator), WorkflowValidator)


def test_factory_rejects_unknown_type(evaluator):
    with pytest.raises(ValueError):
        ValidatorFactory.get_validator("pipeline", evaluator=evaluator)


def test_detect_by_content(write_yaml):
    assert detect_file_type(write_yaml("a.yaml", "workflow: {name: W}\n")) == "workflow"
    assert detect_file_type(write_yaml("b.yaml", "module: {name: M}\n")) == "module"
    assert detect_file_type(write_yaml("c.yaml", "components: []\n")) == "module"


def test_content_wins_over_file_name(write_yaml):
    assert detect_file_type(write_yaml("my-workflow.yaml", "module: {name: M}\n")) == "module"


def test_detect_by_file_name(write_yaml):
    assert detect_file_type(write_yaml("nightly-workflow.yaml", "something: else\n")) == "workflow"
    assert detect_file_type(write_yaml("other.yaml", "something: else\n")) == "module"


def test_unreadable_files_default_to_module(tmp_path, write_yaml):
    assert detect_file_type(tmp_path / "missing-workflow.yaml") == "module"
    assert detect_file_type(write_yaml("broken.yaml", "workflow: [\n")) == "module"


def test_find_yaml_files(tmp_path, write_yaml):
    write_yaml("modules/b.yaml", "module: {}\n")
    write_yaml("modules/nested/a.yml", "module: {}\n")
    write_yaml("modules/notes.txt", "ignored\n")
    explicit = tmp_path / "does-not-exist.yaml"

    files = find_yaml_files([tmp_path / "modules", explicit])
    assert files == [
        tmp_path / "modules" / "b.yaml",
        tmp_path / "modules" / "nested" / "a.yml",
        explicit,
    ]


def test_validate_files_mixes_types(store, write_yaml):
    module = write_yaml("orders.yaml", "module:\n  name: X\ncomponents: []\n")
    workflow = write_yaml("flow.yaml", "workflow:\n  workflowId: '1'\n  name: W\nactivities: []\n")

    results = validate_files([module, workflow], store=store)
    assert [r.file_type for r in results] == ["module", "workflow"]
    assert [r.is_valid for r in results] == [False, True]
    assert results[0].file == str(module)
    assert results[0].result.summary.error_count == 2


def test_validate_files_forced_type(store, write_yaml):
    path = write_yaml("flow.yaml", "workflow:\n  workflowId: '1'\n  name: W\nactivities: []\n")
    [result] = validate_files([path], file_type="module", store=store)
    assert result.file_type == "module"
    assert [e.location for e in result.result.errors] == ["module"]


def test_validate_files_rejects_unknown_type(store, write_yaml):
    with pytest.raises(ValueError):
        validate_files([write_yaml("a.yaml", "module: {}\n")], file_type="pipeline", store=store)


def test_validate_file_uses_configured_schemas(schemas_dir, write_yaml):
    path = write_yaml(
        "orders.yaml",
        """
        module: {name: X, appModuleId: "1", displayName: X}
        components:
          - name: c
            layout: {component: layout, props: {orientation: diagonal}}
        """,
    )
    result = validate_file(path, config=ValidatorConfig(schemas_path=str(schemas_dir)))
    assert result.file_type == "module"
    assert [e.location for e in result.result.errors] == ["components[0].layout.props.orientation"]


def test_missing_file_is_reported(store, tmp_path):
    [result] = validate_files([tmp_path / "gone.yaml"], store=store)
    assert result.file_type == "module"
    assert [e.kind.value for e in result.result.errors] == ["file_not_found"]


def test_undecodable_file_defaults_to_module(tmp_path):
    path = tmp_path / "binary-workflow.yaml"
    path.write_bytes(b"workflow:\n  name: \xff\xfe\n")
    assert detect_file_type(path) == "module"


def test_auto_mode_reports_undecodable_file(schemas_dir, tmp_path):
    path = tmp_path / "binary.yaml"
    path.write_bytes(b"module:\n  name: \xff\xfe\n")
    result = validate_file(path, config=ValidatorConfig(schemas_path=str(schemas_dir)))
    assert result.file_type == "module"
    assert [e.kind.value for e in result.result.errors] == ["yaml_syntax_error"]
    assert result.result.errors[0].location == str(path)


def test_auto_mode_reports_malformed_yaml(schemas_dir, write_yaml):
    path = write_yaml("broken-workflow.yaml", "workflow: [\n")
    result = validate_file(path, config=ValidatorConfig(schemas_path=str(schemas_dir)))
    assert result.file_type == "module"
    assert [e.kind.value for e in result.result.errors] == ["yaml_syntax_error"]
