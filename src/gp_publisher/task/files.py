"""Read task parameter / task definition files (TOML or YAML).

A file holds one flat table of form values, either at the top level or under
a ``task`` table. YAML files follow the layout of exported build specs.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

import yaml

TASK_TABLE: Final[str] = "task"
_YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yaml", ".yml"})
_SCALAR_TYPES: Final[tuple[type, ...]] = (str, bool, int, float)


class TaskFileError(ValueError):
    """Raised when a task file is missing, unreadable or not a flat table."""


def load_task_file(path: str | Path) -> dict[str, Any]:
    """Load the flat table of task values from ``path``."""

    resolved = Path(path).expanduser()
    if not resolved.is_file():
        raise TaskFileError(f"task file not found: {resolved}")

    if resolved.suffix.lower() in _YAML_SUFFIXES:
        payload = _load_yaml(resolved)
    else:
        payload = _load_toml(resolved)

    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise TaskFileError(f"task file root must be a table: {resolved}")

    table = payload.get(TASK_TABLE, payload)
    if not isinstance(table, Mapping):
        raise TaskFileError(f"{TASK_TABLE!r} must be a table in {resolved}")
    return _flatten_values(table, resolved)


def _load_toml(path: Path) -> object:
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise TaskFileError(f"invalid TOML in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise TaskFileError(f"invalid encoding in {path}: {exc.reason}") from exc
    except OSError as exc:
        raise TaskFileError(f"unable to read task file {path}: {exc}") from exc


def _load_yaml(path: Path) -> object:
    try:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle)
    except yaml.YAMLError as exc:
        raise TaskFileError(f"invalid YAML in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise TaskFileError(f"invalid encoding in {path}: {exc.reason}") from exc
    except OSError as exc:
        raise TaskFileError(f"unable to read task file {path}: {exc}") from exc


def _flatten_values(table: Mapping[Any, Any], path: Path) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, value in table.items():
        if not isinstance(key, str):
            raise TaskFileError(f"task keys must be strings in {path}, got {key!r}")
        if value is None or isinstance(value, _SCALAR_TYPES):
            values[key] = value
            continue
        if isinstance(value, list) and all(isinstance(item, _SCALAR_TYPES) for item in value):
            values[key] = list(value)
            continue
        raise TaskFileError(f"{key!r} must be a scalar value in {path}")
    return values


__all__ = ["TASK_TABLE", "TaskFileError", "load_task_file"]
