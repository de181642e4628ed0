"""
gp-publisher — build-server host contracts.

File: src/gp_publisher/task/host.py

Purpose
- Define the narrow read/write contracts the plugin host hands to a task
  configurator, plus plain Python implementations of them.

What should be included in this file
- ``ParameterSource`` protocol (submitted form values).
- ``ActionParameters``: mapping-backed parameter source.
- ``TaskDefinition``: persisted task snapshot handed back on edit.
- ``ErrorCollection``: per-field and form-level validation messages.
- ``BaseTaskConfigurator``: generic behaviour that task configurators layer on.

Functional requirements
- Absent parameters read as ``None``; nothing is silently dropped.
- Error collections keep insertion order and allow several messages per field.

Non-functional requirements
- No I/O and no state shared between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, MutableMapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gp_publisher.task.fields import FieldIssue

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})


@runtime_checkable
class ParameterSource(Protocol):
    """Read-only view of submitted form parameters."""

    def get_string(self, key: str) -> str | None: ...

    def get_boolean(self, key: str) -> bool: ...


class ActionParameters:
    """Parameter source backed by a plain mapping of submitted values."""

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, object] | None = None) -> None:
        self._values: dict[str, object] = dict(values or {})

    def get_string(self, key: str) -> str | None:
        value = self._values.get(key)
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            # Form posts deliver every parameter as an array of values.
            value = value[0] if value else None
        if value is None:
            return None
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_boolean(self, key: str) -> bool:
        raw = self._values.get(key)
        if isinstance(raw, bool):
            return raw
        text = self.get_string(key)
        if text is None:
            return False
        return text.strip().lower() in _BOOLEAN_TRUE

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._values!r})"


@dataclass(frozen=True, slots=True)
class TaskDefinition:
    """Saved task snapshot; ``configuration`` may lack keys added after it was saved."""

    task_id: int
    plugin_key: str
    configuration: Mapping[str, str | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "configuration", MappingProxyType(dict(self.configuration)))


class ErrorCollection:
    """Validation messages keyed by form field, plus form-level messages."""

    __slots__ = ("_field_errors", "_messages")

    def __init__(self) -> None:
        self._field_errors: dict[str, list[str]] = {}
        self._messages: list[str] = []

    def add_error(self, field_name: str, message: str) -> None:
        self._field_errors.setdefault(field_name, []).append(message)

    def add_error_message(self, message: str) -> None:
        self._messages.append(message)

    def add_issues(self, issues: Iterable[FieldIssue]) -> None:
        for issue in issues:
            self.add_error(issue.field, issue.message)

    def has_any_errors(self) -> bool:
        return bool(self._field_errors) or bool(self._messages)

    @property
    def field_errors(self) -> dict[str, tuple[str, ...]]:
        return {name: tuple(messages) for name, messages in self._field_errors.items()}

    @property
    def errors(self) -> dict[str, str]:
        """First message per field, the way the edit form shows them inline."""

        return {name: messages[0] for name, messages in self._field_errors.items()}

    @property
    def error_messages(self) -> tuple[str, ...]:
        return tuple(self._messages)

    @property
    def total_errors(self) -> int:
        return sum(len(messages) for messages in self._field_errors.values()) + len(
            self._messages
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "field_errors": {name: list(messages) for name, messages in self.field_errors.items()},
            "error_messages": list(self._messages),
        }

    def __len__(self) -> int:
        return self.total_errors

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCollection):
            return NotImplemented
        return self.field_errors == other.field_errors and self._messages == other._messages

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"


class HostConfigurator(Protocol):
    """The four calls a plugin host makes on a task configurator."""

    def generate_task_config_map(
        self, params: ParameterSource, previous: TaskDefinition | None
    ) -> dict[str, str | None]: ...

    def populate_context_for_create(self, context: MutableMapping[str, object]) -> None: ...

    def populate_context_for_edit(
        self, context: MutableMapping[str, object], task_definition: TaskDefinition
    ) -> None: ...

    def validate(self, params: ParameterSource, error_collection: ErrorCollection) -> None: ...


class BaseTaskConfigurator:
    """Generic configurator: empty config map, no context, no validation."""

    def generate_task_config_map(
        self, params: ParameterSource, previous: TaskDefinition | None
    ) -> dict[str, str | None]:
        return {}

    def populate_context_for_create(self, context: MutableMapping[str, object]) -> None:
        return None

    def populate_context_for_edit(
        self, context: MutableMapping[str, object], task_definition: TaskDefinition
    ) -> None:
        return None

    def validate(self, params: ParameterSource, error_collection: ErrorCollection) -> None:
        return None


__all__ = [
    "ActionParameters",
    "BaseTaskConfigurator",
    "ErrorCollection",
    "HostConfigurator",
    "ParameterSource",
    "TaskDefinition",
]
