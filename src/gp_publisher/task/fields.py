"""
gp-publisher — publish task field rules.

File: src/gp_publisher/task/fields.py

Purpose
- Map publish-task form fields to the persisted configuration, supply
  defaults for the create and edit forms, and validate submitted values.

Functional requirements
- Every rule runs; all failing fields are reported in rule order.
- ``findJsonKeyInFile`` decides whether ``jsonKeyPath`` or ``jsonKeyContent``
  is required. Only one of them is ever checked.
- ``rolloutFraction`` is required only on the rollout track.
- Blank (whitespace-only) values count as empty.

Non-functional requirements
- Pure functions over their inputs; results are fresh objects.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from gp_publisher.constants import (
    APK_FORMAT_MESSAGE,
    APK_SUFFIX,
    DEFAULT_FIND_JSON_KEY_IN_FILE,
    DEFAULT_ROLLOUT_FRACTION,
    DEFAULT_TRACK,
    FIELD_KEYS,
    REQUIRED_FIELD_MESSAGE,
    ROLLOUT_FRACTION_CHOICES,
    ROLLOUT_FRACTIONS,
    TRACK_CHOICES,
    TRACK_TYPES,
    FieldKey,
    TrackChoice,
)
from gp_publisher.task.host import ParameterSource


class IssueKind(StrEnum):
    """User-input error taxonomy. None of these are faults."""

    REQUIRED_FIELD = "required_field"
    FORMAT = "format"
    CHOICE = "choice"


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """Single field-level validation failure."""

    field: str
    kind: IssueKind
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "kind": self.kind.value, "message": self.message}


def produce_defaults() -> dict[str, Any]:
    """Return the context for a blank creation form."""

    return {
        TRACK_TYPES: list(TRACK_CHOICES),
        FieldKey.TRACK.value: DEFAULT_TRACK,
        FieldKey.FIND_JSON_KEY_IN_FILE.value: DEFAULT_FIND_JSON_KEY_IN_FILE,
        FieldKey.ROLLOUT_FRACTION.value: DEFAULT_ROLLOUT_FRACTION,
        ROLLOUT_FRACTIONS: list(ROLLOUT_FRACTION_CHOICES),
    }


def produce_persisted(params: ParameterSource) -> dict[str, str | None]:
    """Copy submitted values verbatim under the persisted field keys."""

    return {key.value: params.get_string(key.value) for key in FIELD_KEYS}


def produce_edit_context(configuration: Mapping[str, str | None]) -> dict[str, Any]:
    """Return the context for re-editing a saved task."""

    context: dict[str, Any] = {key.value: configuration.get(key.value) for key in FIELD_KEYS}
    fraction = configuration.get(FieldKey.ROLLOUT_FRACTION.value)
    context[FieldKey.ROLLOUT_FRACTION.value] = (
        fraction if fraction is not None else DEFAULT_ROLLOUT_FRACTION
    )
    context[TRACK_TYPES] = list(TRACK_CHOICES)
    context[ROLLOUT_FRACTIONS] = list(ROLLOUT_FRACTION_CHOICES)
    return context


def validate_task_params(
    params: ParameterSource,
    *,
    strict_choices: bool = False,
) -> tuple[FieldIssue, ...]:
    """Validate submitted publish-task parameters.

    With ``strict_choices`` a non-empty ``track`` must be a known track and,
    on the rollout track, a non-empty ``rolloutFraction`` must be one of the
    accepted fractions.
    """

    issues: list[FieldIssue] = []

    _require(params, FieldKey.APPLICATION_NAME, issues)
    _require(params, FieldKey.PACKAGE_NAME, issues)
    if params.get_boolean(FieldKey.FIND_JSON_KEY_IN_FILE.value):
        _require(params, FieldKey.JSON_KEY_PATH, issues)
    else:
        _require(params, FieldKey.JSON_KEY_CONTENT, issues)

    apk_path = _require(params, FieldKey.APK_PATH, issues)
    if apk_path is not None and not apk_path.endswith(APK_SUFFIX):
        issues.append(FieldIssue(FieldKey.APK_PATH.value, IssueKind.FORMAT, APK_FORMAT_MESSAGE))

    track = _require(params, FieldKey.TRACK, issues)
    if strict_choices and track is not None:
        _check_choice(FieldKey.TRACK, track, TRACK_CHOICES, issues)

    if track == TrackChoice.ROLLOUT.value:
        fraction = _require(params, FieldKey.ROLLOUT_FRACTION, issues)
        if strict_choices and fraction is not None:
            _check_choice(FieldKey.ROLLOUT_FRACTION, fraction, ROLLOUT_FRACTION_CHOICES, issues)

    return tuple(issues)


def is_empty(value: str | None) -> bool:
    return value is None or not value.strip()


def _require(params: ParameterSource, key: FieldKey, issues: list[FieldIssue]) -> str | None:
    value = params.get_string(key.value)
    if is_empty(value):
        issues.append(FieldIssue(key.value, IssueKind.REQUIRED_FIELD, REQUIRED_FIELD_MESSAGE))
        return None
    return value


def _check_choice(
    key: FieldKey,
    value: str,
    allowed_values: tuple[str, ...],
    issues: list[FieldIssue],
) -> None:
    if value in allowed_values:
        return
    expected = ", ".join(allowed_values)
    issues.append(FieldIssue(key.value, IssueKind.CHOICE, f"Should be one of: {expected}"))


__all__ = [
    "FieldIssue",
    "IssueKind",
    "is_empty",
    "produce_defaults",
    "produce_edit_context",
    "produce_persisted",
    "validate_task_params",
]
