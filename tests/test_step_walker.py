from cx_schema_validator.models.path import Path
from cx_schema_validator.models.violation import ResultAssembler
from cx_schema_validator.validators.step_walker import StepTreeWalker, task_schema_key

from conftest import kinds, locations

BASE = Path.of("activities", 0, "steps", 0)


def walk(step, evaluator=None, validate_task_schemas=False, path=BASE):
    assembler = ResultAssembler()
    StepTreeWalker(evaluator, validate_task_schemas=validate_task_schemas).walk(step, path, assembler)
    return assembler.errors


def test_schema_key_format():
    assert task_schema_key("foreach") == "workflows/tasks/foreach.json"


def test_non_object_step():
    errors = walk("just a string")
    assert kinds(errors) == ["schema_violation"]
    assert locations(errors) == ["activities[0].steps[0]"]
    assert errors[0].message == "Step must be an object"


def test_missing_task():
    errors = walk({"name": "NoTask", "steps": [{}]})
    assert kinds(errors) == ["missing_property"]
    assert locations(errors) == ["activities[0].steps[0].task"]


def test_leaf_task_is_not_descended():
    assert walk({"task": "Log@1", "steps": [{}], "cases": [{"steps": [{}]}]}) == []


def test_task_match_is_case_sensitive():
    assert walk({"task": "ForEach", "steps": [{}]}) == []


def test_foreach_and_while_descend_into_steps():
    for task in ("foreach", "while"):
        errors = walk({"task": task, "steps": [{"task": "Log@1"}, {}, 7]})
        assert locations(errors) == [
            "activities[0].steps[0].steps[1].task",
            "activities[0].steps[0].steps[2]",
        ]


def test_loop_without_steps_is_fine():
    assert walk({"task": "foreach"}) == []
    assert walk({"task": "while", "steps": "not a list"}) == []


def test_switch_completeness():
    step = {
        "task": "switch",
        "cases": [
            {"when": "a", "steps": [{"name": "bad"}]},
            {"when": "b", "steps": [{"name": "bad"}]},
        ],
        "default": {"steps": [{"name": "bad"}]},
    }
    errors = walk(step)
    assert kinds(errors) == ["missing_property"] * 3
    assert locations(errors) == [
        "activities[0].steps[0].cases[0].steps[0].task",
        "activities[0].steps[0].cases[1].steps[0].task",
        "activities[0].steps[0].default.steps[0].task",
    ]


def test_switch_ignores_malformed_cases():
    step = {"task": "switch", "cases": ["oops", {"steps": "nope"}, {"steps": [{}]}], "default": ["x"]}
    assert locations(walk(step)) == ["activities[0].steps[0].cases[2].steps[0].task"]


def test_deep_nesting_paths():
    step = {
        "task": "foreach",
        "steps": [
            {
                "task": "switch",
                "cases": [{"steps": [{"task": "while", "steps": [{"task": None}]}]}],
            }
        ],
    }
    assert locations(walk(step)) == [
        "activities[0].steps[0].steps[0].cases[0].steps[0].steps[0].task",
    ]


def test_task_schemas_are_off_by_default(evaluator):
    assert walk({"task": "foreach", "steps": []}, evaluator=evaluator) == []


def test_task_schemas_opt_in(evaluator):
    errors = walk({"task": "foreach", "steps": [{"task": "foreach"}]}, evaluator=evaluator, validate_task_schemas=True)
    assert kinds(errors) == ["schema_violation", "schema_violation"]
    assert locations(errors) == ["activities[0].steps[0]", "activities[0].steps[0].steps[0]"]


def test_task_schema_opt_in_skips_unregistered_tasks(evaluator):
    assert walk({"task": "Log@1"}, evaluator=evaluator, validate_task_schemas=True) == []


def test_recursive_step_alias_terminates():
    step = {"task": "foreach"}
    step["steps"] = [step, {}]
    assert locations(walk(step)) == ["activities[0].steps[0].steps[1].task"]
