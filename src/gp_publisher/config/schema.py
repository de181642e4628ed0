"""
gp-publisher — runtime settings schema and validation.

File: src/gp_publisher/config/schema.py

Purpose
- Define built-in settings defaults and strict validation rules.

What should be included in this file
- One table of known settings (section, key, allowed values) that drives
  defaults, validation, env bindings and the typed ``Settings`` view.
- Deterministic deep-merge helper for layering settings sources.
- Structured issues (dotted path + message).

Functional requirements
- Unknown keys are rejected with their full path.
- Validation reports every issue, not just the first.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Final

LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS: Final[tuple[str, ...]] = ("console", "json")


@dataclass(frozen=True, slots=True)
class SettingField:
    """One known setting: ``[section] key`` mapped onto a ``Settings`` attribute.

    ``choices`` of ``None`` marks an on/off flag; otherwise the value is a
    name from ``choices`` (matched case-insensitively when ``upper_case``).
    """

    section: str
    key: str
    attribute: str
    default: str | bool
    choices: tuple[str, ...] | None = None
    upper_case: bool = False

    @property
    def path(self) -> str:
        return f"{self.section}.{self.key}"

    @property
    def is_flag(self) -> bool:
        return self.choices is None


SETTING_FIELDS: Final[tuple[SettingField, ...]] = (
    SettingField("logging", "level", "log_level", "WARNING", LOG_LEVELS, upper_case=True),
    SettingField("logging", "format", "log_format", "console", LOG_FORMATS),
    SettingField("validation", "strict_choices", "strict_choices", False),
)

_FIELDS_BY_PATH: Final[dict[str, SettingField]] = {item.path: item for item in SETTING_FIELDS}
_SECTIONS: Final[tuple[str, ...]] = tuple(dict.fromkeys(item.section for item in SETTING_FIELDS))


def _build_defaults() -> dict[str, Any]:
    defaults: dict[str, Any] = {}
    for item in SETTING_FIELDS:
        defaults.setdefault(item.section, {})[item.key] = item.default
    return defaults


DEFAULT_SETTINGS: Final[dict[str, Any]] = _build_defaults()


def _default_of(path: str) -> Any:
    return field(default=_FIELDS_BY_PATH[path].default)


@dataclass(frozen=True, slots=True)
class Settings:
    """Typed view of validated runtime settings."""

    log_level: str = _default_of("logging.level")
    log_format: str = _default_of("logging.format")
    strict_choices: bool = _default_of("validation.strict_choices")

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> Settings:
        normalized = assert_valid_settings(payload)
        return cls(
            **{item.attribute: normalized[item.section][item.key] for item in SETTING_FIELDS}
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for item in SETTING_FIELDS:
            payload.setdefault(item.section, {})[item.key] = getattr(self, item.attribute)
        return payload


@dataclass(frozen=True, slots=True)
class SettingsValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class SettingsValidationResult:
    """Validation result with normalized settings when no issues were found."""

    settings: dict[str, Any] | None
    issues: tuple[SettingsValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.settings is not None and not self.issues


class SettingsValidationError(ValueError):
    """Raised when strict settings validation fails."""

    def __init__(self, issues: Sequence[SettingsValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid settings:\n{rendered}")


def setting_field(path: str) -> SettingField | None:
    """Look up a known setting by its dotted ``section.key`` path."""

    return _FIELDS_BY_PATH.get(path)


def default_settings() -> dict[str, Any]:
    """Return a deep copy of the built-in defaults."""

    return copy.deepcopy(DEFAULT_SETTINGS)


def merge_settings(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deterministically deep-merge ``overlay`` onto ``base``."""

    merged = copy.deepcopy(dict(base))
    _merge_into(merged, overlay)
    return merged


def validate_settings(payload: Mapping[str, object] | object) -> SettingsValidationResult:
    """Validate a full settings payload and return structured issues."""

    if not isinstance(payload, Mapping):
        issue = SettingsValidationIssue("<root>", f"expected object, got {type(payload).__name__}")
        return SettingsValidationResult(settings=None, issues=(issue,))

    issues: list[SettingsValidationIssue] = []
    for key in sorted(payload, key=str):
        if key not in _SECTIONS:
            issues.append(SettingsValidationIssue(str(key), "unknown field"))

    normalized: dict[str, Any] = {}
    for section in _SECTIONS:
        table = payload.get(section)
        if table is None:
            issues.append(SettingsValidationIssue(section, "missing required section"))
            continue
        if not isinstance(table, Mapping):
            issues.append(
                SettingsValidationIssue(section, f"expected object, got {type(table).__name__}")
            )
            continue
        for key in sorted(table, key=str):
            if f"{section}.{key}" not in _FIELDS_BY_PATH:
                issues.append(SettingsValidationIssue(f"{section}.{key}", "unknown field"))
        normalized[section] = {}

    for item in SETTING_FIELDS:
        if item.section not in normalized:
            continue
        value, message = _check_value(item, payload[item.section].get(item.key))
        if message is not None:
            issues.append(SettingsValidationIssue(item.path, message))
            continue
        normalized[item.section][item.key] = value

    if issues:
        return SettingsValidationResult(settings=None, issues=tuple(issues))
    return SettingsValidationResult(settings=normalized, issues=())


def assert_valid_settings(payload: Mapping[str, object] | object) -> dict[str, Any]:
    """Validate settings and raise ``SettingsValidationError`` on failure."""

    result = validate_settings(payload)
    if result.settings is None:
        raise SettingsValidationError(result.issues)
    return result.settings


def _check_value(item: SettingField, value: object) -> tuple[object, str | None]:
    if item.is_flag:
        if isinstance(value, bool):
            return value, None
        return None, f"expected boolean, got {type(value).__name__}"

    if not isinstance(value, str):
        return None, f"expected string, got {type(value).__name__}"
    parsed = value.strip().upper() if item.upper_case else value.strip()
    assert item.choices is not None
    if parsed not in item.choices:
        expected = ", ".join(item.choices)
        return None, f"invalid value {parsed!r}; expected one of: {expected}"
    return parsed, None


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key in sorted(overlay):
        value = overlay[key]
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            _merge_into(current, value)
        elif isinstance(value, Mapping):
            target[key] = copy.deepcopy(dict(value))
        else:
            target[key] = copy.deepcopy(value)


__all__ = [
    "DEFAULT_SETTINGS",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "SETTING_FIELDS",
    "SettingField",
    "Settings",
    "SettingsValidationError",
    "SettingsValidationIssue",
    "SettingsValidationResult",
    "assert_valid_settings",
    "default_settings",
    "merge_settings",
    "setting_field",
    "validate_settings",
]
