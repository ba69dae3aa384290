import json

import pytest
import yaml

from cx_schema_validator.cli.run_validate import get_suggestion, main
from cx_schema_validator.models.path import Path
from cx_schema_validator.models.violation import Violation, ViolationKind

VALID_MODULE = "module:\n  name: X\n  appModuleId: '1'\n  displayName: X\ncomponents: []\n"
INVALID_MODULE = "module:\n  name: X\ncomponents:\n  - {}\n"
VALID_WORKFLOW = "workflow:\n  workflowId: '1'\n  name: W\nactivities: []\n"


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in ("CX_SCHEMA_PATH", "CX_INCLUDE_WARNINGS", "CX_VALIDATE_TASK_SCHEMAS", "CX_VALIDATOR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def run(capsys):
    def _run(*argv):
        with pytest.raises(SystemExit) as exc_info:
            main(list(argv))
        captured = capsys.readouterr()
        return exc_info.value.code, captured.out, captured.err

    return _run


def test_valid_file_exits_zero(run, write_yaml, schemas_dir):
    code, out, _ = run(str(write_yaml("ok.yaml", VALID_MODULE)), "-s", str(schemas_dir))
    assert code == 0
    assert "✓ PASSED" in out


def test_invalid_file_exits_one(run, write_yaml, schemas_dir):
    code, out, _ = run("validate", str(write_yaml("bad.yaml", INVALID_MODULE)), "-s", str(schemas_dir))
    assert code == 1
    assert "✗ FAILED" in out
    assert "Path:    components[0].name" in out
    assert "Source:  " in out
    assert "Suggestion: Add the required property 'name' to your YAML" in out


def test_json_output_single_file(run, write_yaml, schemas_dir):
    code, out, _ = run(str(write_yaml("bad.yaml", INVALID_MODULE)), "--json", "-s", str(schemas_dir))
    payload = json.loads(out)
    assert code == 1
    assert payload["isValid"] is False
    assert [e["location"] for e in payload["errors"]] == ["module.appModuleId", "module.displayName", "components[0].name"]
    assert payload["errors"][2]["line"] == 4


def test_json_output_multiple_files(run, write_yaml, schemas_dir):
    write_yaml("project/modules/a.yaml", VALID_MODULE)
    write_yaml("project/workflows/flow.yaml", VALID_WORKFLOW)
    code, out, _ = run("project", "--format", "json", "-s", str(schemas_dir))
    payload = json.loads(out)
    assert code == 0
    assert [entry["fileType"] for entry in payload] == ["module", "workflow"]


def test_compact_and_quiet(run, write_yaml, schemas_dir):
    good = write_yaml("good.yaml", VALID_MODULE)
    bad = write_yaml("bad.yaml", INVALID_MODULE)
    code, out, _ = run(str(good), str(bad), "-f", "compact", "-s", str(schemas_dir))
    assert code == 1
    assert out.splitlines() == [f"PASS {good}", f"FAIL {bad} (3 errors)"]

    code, out, _ = run(str(good), str(bad), "-f", "compact", "-q", "-s", str(schemas_dir))
    assert out.splitlines() == [f"FAIL {bad} (3 errors)"]


def test_github_actions_format(run, write_yaml, schemas_dir):
    bad = write_yaml("bad.yaml", INVALID_MODULE)
    _, out, _ = run(str(bad), "-f", "github-actions", "-s", str(schemas_dir))
    lines = out.splitlines()
    assert len(lines) == 3
    assert lines[2] == f"::error file={bad},line=4::[missing_property] components[0].name: Component must have a name property"


def test_forced_type(run, write_yaml, schemas_dir):
    path = write_yaml("ok.yaml", VALID_MODULE)
    code, out, _ = run(str(path), "-t", "workflow", "--json", "-s", str(schemas_dir))
    assert code == 1
    assert [e["location"] for e in json.loads(out)["errors"]] == ["workflow"]


def test_no_warnings_flag(run, write_yaml, schemas_dir):
    path = write_yaml("warn.yaml", VALID_MODULE.replace("components: []", "components:\n  - name: c\n    key: k"))
    _, out, _ = run(str(path), "--json", "-s", str(schemas_dir))
    assert len(json.loads(out)["warnings"]) == 1
    _, out, _ = run(str(path), "--json", "--no-warnings", "-s", str(schemas_dir))
    assert json.loads(out)["warnings"] == []


def test_task_schema_flag(run, write_yaml, schemas_dir):
    path = write_yaml(
        "flow.yaml",
        VALID_WORKFLOW.replace("activities: []", "activities:\n  - name: A\n    steps:\n      - task: foreach\n"),
    )
    code, _, _ = run(str(path), "--json", "-s", str(schemas_dir))
    assert code == 0
    code, out, _ = run(str(path), "--json", "--validate-task-schemas", "-s", str(schemas_dir))
    assert code == 1
    assert json.loads(out)["errors"][0]["location"] == "activities[0].steps[0]"


def test_task_schema_env(run, write_yaml, schemas_dir, monkeypatch):
    path = write_yaml(
        "flow.yaml",
        VALID_WORKFLOW.replace("activities: []", "activities:\n  - name: A\n    steps:\n      - task: foreach\n"),
    )
    monkeypatch.setenv("CX_VALIDATE_TASK_SCHEMAS", "true")
    code, _, _ = run(str(path), "-s", str(schemas_dir))
    assert code == 1


def test_schema_path_from_env(run, write_yaml, schemas_dir, monkeypatch):
    monkeypatch.setenv("CX_SCHEMA_PATH", str(schemas_dir))
    path = write_yaml(
        "ok.yaml",
        VALID_MODULE.replace("components: []", "components:\n  - name: c\n    layout: {component: layout, props: {orientation: up}}"),
    )
    code, out, _ = run(str(path), "--json")
    assert code == 1
    assert json.loads(out)["errors"][0]["location"] == "components[0].layout.props.orientation"


def test_missing_file_is_a_validation_error(run, schemas_dir):
    code, out, _ = run("nowhere.yaml", "--json", "-s", str(schemas_dir))
    assert code == 1
    assert json.loads(out)["errors"][0]["kind"] == "file_not_found"


def test_usage_errors_exit_two(run, tmp_path):
    code, _, err = run()
    assert code == 2
    assert "No input file specified" in err

    (tmp_path / "empty").mkdir()
    code, _, err = run("empty")
    assert code == 2
    assert "No YAML files found" in err

    code, _, err = run("x.yaml", "-s", str(tmp_path / "no-schemas"))
    assert code == 2
    assert "Could not find schemas directory" in err

    code, _, _ = run("x.yaml", "--format", "xml")
    assert code == 2


def test_report_command(run, write_yaml, schemas_dir, tmp_path):
    write_yaml("project/a.yaml", VALID_MODULE)
    write_yaml("project/b.yaml", INVALID_MODULE)
    target = tmp_path / "reports" / "result.md"
    code, out, _ = run("report", "project", "--report", str(target), "-s", str(schemas_dir))
    assert code == 1
    assert "Pass Rate:    50.0%" in out
    assert f"Report (markdown) saved to: {target}" in out
    assert "| Failed | 1 |" in target.read_text(encoding="utf-8")


def test_report_default_path(run, write_yaml, schemas_dir, tmp_path):
    write_yaml("project/a.yaml", VALID_MODULE)
    code, _, _ = run("report", "project", "-s", str(schemas_dir))
    assert code == 0
    payload = json.loads((tmp_path / "validation-report.json").read_text(encoding="utf-8"))
    assert payload["passedFiles"] == 1


def test_list_command(run):
    code, out, _ = run("list")
    assert code == 0
    assert "MODULE SCHEMAS:" in out
    assert "WORKFLOW SCHEMAS:" in out
    assert "foreach, switch, while" in out


def test_list_by_type(run):
    _, out, _ = run("list", "-t", "workflow")
    assert "MODULE SCHEMAS:" not in out
    assert "WORKFLOW SCHEMAS:" in out


def test_schema_command(run):
    code, out, _ = run("schema", "dataGrid")
    assert code == 0
    assert "Schema: components/dataGrid.json" in out
    assert '"const": "dataGrid"' in out


def test_unknown_schema_exits_two(run):
    code, _, err = run("schema", "nothing-like-this")
    assert code == 2
    assert "Schema not found: nothing-like-this" in err


def test_example_command(run):
    code, out, _ = run("example", "foreach")
    assert code == 0
    body = out.split("─" * 70)[1]
    assert yaml.safe_load(body)["task"] == "foreach"


def test_init_and_create(run, tmp_path):
    code, out, _ = run("init", "app")
    assert code == 0
    assert "✓ app.yaml" in out

    code, out, _ = run("create", "module", "orders", "--dir", "app")
    assert code == 0
    assert (tmp_path / "app" / "modules" / "orders.yaml").is_file()

    code, _, err = run("create", "module", "orders", "--dir", "app")
    assert code == 2
    assert "File already exists" in err

    code, out, _ = run("app/modules/orders.yaml")
    assert code == 0


def test_suggestions():
    missing = Violation.at(ViolationKind.MISSING_PROPERTY, Path.of("module", "name"), "m")
    assert get_suggestion(missing) == "Add the required property 'name' to your YAML"

    enum = Violation.at(ViolationKind.SCHEMA_VIOLATION, Path.of("x"), "m", schema_location="#/properties/x/enum")
    assert get_suggestion(enum).startswith("The value must be one of the allowed values")

    assert get_suggestion(Violation.at(ViolationKind.FILE_NOT_FOUND, "a.yaml", "m")) is None


def test_undecodable_file_is_reported(run, schemas_dir, tmp_path):
    path = tmp_path / "binary.yaml"
    path.write_bytes(b"module:\n  name: \xff\xfe\n")
    code, out, _ = run("-s", str(schemas_dir), "--format", "json", str(path))
    assert code == 1
    assert json.loads(out)["errors"][0]["kind"] == "yaml_syntax_error"
