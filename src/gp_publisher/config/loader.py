"""
gp-publisher — runtime settings loader.

File: src/gp_publisher/config/loader.py

Purpose
- Load effective runtime settings from defaults, TOML file, env vars, and
  CLI overrides.

What should be included in this file
- Precedence logic: CLI > env (GP_PUBLISHER_) > file > defaults.
- TOML loading via ``tomllib``.
- One env var per known setting, e.g. ``GP_PUBLISHER_LOGGING_LEVEL``.

Functional requirements
- An explicitly named settings file must exist; the default one is optional.
- Unreadable, undecodable or malformed files raise ``SettingsLoadError``.
- Reject invalid settings via schema validation.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from gp_publisher.config.schema import (
    SETTING_FIELDS,
    SettingField,
    Settings,
    default_settings,
    merge_settings,
    setting_field,
)

DEFAULT_SETTINGS_FILE: Final[str] = "gp_publisher.toml"
ENV_PREFIX: Final[str] = "GP_PUBLISHER_"

_FLAG_VALUES: Final[dict[str, bool]] = {
    "1": True,
    "true": True,
    "yes": True,
    "on": True,
    "0": False,
    "false": False,
    "no": False,
    "off": False,
}


class SettingsLoadError(ValueError):
    """Raised when settings cannot be loaded or overrides cannot be coerced."""


def load_settings(
    settings_path: str | Path | None = None,
    *,
    cli_overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load effective settings with precedence: CLI > env > file > defaults.

    ``cli_overrides`` maps dotted setting paths (``logging.level``) to values;
    ``None`` values are ignored so unset CLI options fall through.
    """

    resolved_path = _resolve_settings_path(settings_path)
    file_payload = _load_toml_file(resolved_path, required=settings_path is not None)
    env_map = os.environ if environ is None else environ

    merged = merge_settings(default_settings(), file_payload)
    merged = merge_settings(merged, _env_overrides(env_map))
    merged = merge_settings(merged, _cli_overrides(cli_overrides or {}))
    return Settings.from_mapping(merged)


def env_name_for_path(path: tuple[str, ...]) -> str:
    return ENV_PREFIX + "_".join(part.upper() for part in path)


def _resolve_settings_path(settings_path: str | Path | None) -> Path:
    if settings_path is None:
        return (Path.cwd() / DEFAULT_SETTINGS_FILE).resolve()
    return Path(settings_path).expanduser().resolve()


def _load_toml_file(path: Path, *, required: bool) -> dict[str, Any]:
    if not path.exists():
        if required:
            raise SettingsLoadError(f"settings file not found: {path}")
        return {}

    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise SettingsLoadError(f"invalid TOML in {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise SettingsLoadError(f"invalid encoding in {path}: {exc.reason}") from exc
    except OSError as exc:
        raise SettingsLoadError(f"unable to read settings file {path}: {exc}") from exc


def _env_overrides(environ: Mapping[str, str]) -> dict[str, dict[str, object]]:
    overrides: dict[str, dict[str, object]] = {}
    for item in SETTING_FIELDS:
        env_name = env_name_for_path((item.section, item.key))
        raw = environ.get(env_name)
        if raw is None:
            continue
        overrides.setdefault(item.section, {})[item.key] = _parse_env_value(item, raw, env_name)
    return overrides


def _parse_env_value(item: SettingField, raw: str, env_name: str) -> object:
    value = raw.strip()
    if not item.is_flag:
        # Choice validation happens in the schema, alongside file values.
        return value
    flag = _FLAG_VALUES.get(value.lower())
    if flag is None:
        choices = "/".join(_FLAG_VALUES)
        raise SettingsLoadError(f"{env_name} -> {item.path} must be a boolean ({choices})")
    return flag


def _cli_overrides(cli_overrides: Mapping[str, object]) -> dict[str, dict[str, object]]:
    overrides: dict[str, dict[str, object]] = {}
    for path in sorted(cli_overrides):
        value = cli_overrides[path]
        if value is None:
            continue
        item = setting_field(path)
        if item is None:
            raise SettingsLoadError(f"unknown setting in CLI override {path!r}")
        overrides.setdefault(item.section, {})[item.key] = value
    return overrides


__all__ = [
    "DEFAULT_SETTINGS_FILE",
    "ENV_PREFIX",
    "SettingsLoadError",
    "env_name_for_path",
    "load_settings",
]
