"""
gp-publisher — unit tests for host contract implementations

File: tests/unit/task/test_host.py

Purpose
- Validate parameter coercion, task definition immutability, error
  collection bookkeeping and the no-op base configurator.
"""

from __future__ import annotations

import dataclasses

import pytest

from gp_publisher.task.fields import FieldIssue, IssueKind
from gp_publisher.task.host import (
    ActionParameters,
    BaseTaskConfigurator,
    ErrorCollection,
    ParameterSource,
    TaskDefinition,
)


def test_action_parameters_satisfy_parameter_source_protocol() -> None:
    assert isinstance(ActionParameters(), ParameterSource)


def test_get_string_returns_none_for_missing_and_text_for_scalars() -> None:
    params = ActionParameters({"name": "Acme", "count": 3, "flag": True, "off": False})

    assert params.get_string("missing") is None
    assert params.get_string("name") == "Acme"
    assert params.get_string("count") == "3"
    assert params.get_string("flag") == "true"
    assert params.get_string("off") == "false"


def test_get_string_reads_first_value_of_form_arrays() -> None:
    params = ActionParameters({"track": ["beta", "alpha"], "empty": []})

    assert params.get_string("track") == "beta"
    assert params.get_string("empty") is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (True, True),
        (False, False),
        ("true", True),
        ("TRUE", True),
        ("on", True),
        ("yes", True),
        ("1", True),
        ("false", False),
        ("", False),
        ("nope", False),
        (None, False),
        (["on"], True),
    ],
)
def test_get_boolean_coerces_form_values(raw: object, expected: bool) -> None:
    assert ActionParameters({"flag": raw}).get_boolean("flag") is expected


def test_get_boolean_is_false_for_missing_key() -> None:
    assert ActionParameters().get_boolean("flag") is False


def test_action_parameters_do_not_alias_input_mapping() -> None:
    values: dict[str, object] = {"track": "beta"}
    params = ActionParameters(values)
    values["track"] = "alpha"

    assert params.get_string("track") == "beta"
    assert repr(params) == "ActionParameters({'track': 'beta'})"


def test_task_definition_carries_only_identity_and_configuration() -> None:
    names = [item.name for item in dataclasses.fields(TaskDefinition)]

    assert names == ["task_id", "plugin_key", "configuration"]


def test_task_definition_configuration_is_read_only() -> None:
    source = {"track": "beta"}
    definition = TaskDefinition(task_id=7, plugin_key="gp:publish", configuration=source)
    source["track"] = "alpha"

    assert definition.configuration["track"] == "beta"
    with pytest.raises(TypeError):
        definition.configuration["track"] = "alpha"  # type: ignore[index]
    with pytest.raises(dataclasses.FrozenInstanceError):
        definition.task_id = 8  # type: ignore[misc]


def test_error_collection_starts_empty() -> None:
    errors = ErrorCollection()

    assert not errors.has_any_errors()
    assert errors.total_errors == 0
    assert len(errors) == 0
    assert errors.to_dict() == {"field_errors": {}, "error_messages": []}


def test_error_collection_keeps_multiple_messages_per_field_in_order() -> None:
    errors = ErrorCollection()
    errors.add_error("apkPath", "first")
    errors.add_error("track", "other")
    errors.add_error("apkPath", "second")

    assert errors.field_errors == {"apkPath": ("first", "second"), "track": ("other",)}
    assert errors.errors == {"apkPath": "first", "track": "other"}
    assert errors.total_errors == 3
    assert errors.has_any_errors()


def test_error_collection_form_level_messages_count_as_errors() -> None:
    errors = ErrorCollection()
    errors.add_error_message("Task could not be saved")

    assert errors.has_any_errors()
    assert errors.error_messages == ("Task could not be saved",)
    assert errors.field_errors == {}


def test_error_collection_add_issues_and_equality() -> None:
    issues = (
        FieldIssue("applicationName", IssueKind.REQUIRED_FIELD, "This field can't be empty"),
        FieldIssue("apkPath", IssueKind.FORMAT, "Should be path to *.apk file"),
    )
    left = ErrorCollection()
    right = ErrorCollection()
    left.add_issues(issues)
    right.add_issues(issues)

    assert left == right
    assert left.to_dict()["field_errors"] == {
        "applicationName": ["This field can't be empty"],
        "apkPath": ["Should be path to *.apk file"],
    }


def test_base_configurator_contributes_nothing() -> None:
    base = BaseTaskConfigurator()
    params = ActionParameters({"track": "beta"})
    context: dict[str, object] = {"existing": 1}
    errors = ErrorCollection()

    assert base.generate_task_config_map(params, None) == {}
    base.populate_context_for_create(context)
    base.populate_context_for_edit(context, TaskDefinition(task_id=1, plugin_key="gp:publish"))
    base.validate(params, errors)

    assert context == {"existing": 1}
    assert not errors.has_any_errors()
