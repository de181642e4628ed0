"""
gp-publisher config package public API.

File: src/gp_publisher/config/__init__.py

Purpose
- Export runtime settings loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``gp_publisher.toml`` + ``GP_PUBLISHER_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from gp_publisher.config.loader import (
    DEFAULT_SETTINGS_FILE,
    ENV_PREFIX,
    SettingsLoadError,
    env_name_for_path,
    load_settings,
)
from gp_publisher.config.schema import (
    DEFAULT_SETTINGS,
    LOG_FORMATS,
    LOG_LEVELS,
    SETTING_FIELDS,
    SettingField,
    Settings,
    SettingsValidationError,
    SettingsValidationIssue,
    SettingsValidationResult,
    assert_valid_settings,
    default_settings,
    merge_settings,
    setting_field,
    validate_settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "DEFAULT_SETTINGS_FILE",
    "ENV_PREFIX",
    "LOG_FORMATS",
    "LOG_LEVELS",
    "SETTING_FIELDS",
    "SettingField",
    "Settings",
    "SettingsLoadError",
    "SettingsValidationError",
    "SettingsValidationIssue",
    "SettingsValidationResult",
    "assert_valid_settings",
    "default_settings",
    "env_name_for_path",
    "load_settings",
    "merge_settings",
    "setting_field",
    "validate_settings",
]
