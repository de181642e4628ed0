"""
gp-publisher — unit tests for runtime settings schema and loader

File: tests/unit/config/test_settings.py

Purpose
- Validate settings defaults, structured validation issues and load
  precedence (CLI > env > file > defaults).

Functional requirements
- No dependence on the caller's environment: every load passes ``environ``.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from gp_publisher.config import (
    DEFAULT_SETTINGS,
    SETTING_FIELDS,
    Settings,
    SettingsLoadError,
    SettingsValidationError,
    default_settings,
    env_name_for_path,
    load_settings,
    merge_settings,
    setting_field,
    validate_settings,
)


def _write_settings(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_default_settings_validate_and_are_copies() -> None:
    defaults = default_settings()
    defaults["logging"]["level"] = "DEBUG"

    result = validate_settings(default_settings())

    assert result.is_valid
    assert DEFAULT_SETTINGS["logging"]["level"] == "WARNING"
    assert Settings.from_mapping(default_settings()) == Settings()


def test_unknown_keys_are_reported_with_paths() -> None:
    payload = merge_settings(default_settings(), {"logging": {"colour": True}, "extra": 1})

    result = validate_settings(payload)

    assert not result.is_valid
    paths = {issue.path: issue.message for issue in result.issues}
    assert paths == {"extra": "unknown field", "logging.colour": "unknown field"}


def test_type_and_enum_violations_are_all_reported() -> None:
    payload = merge_settings(
        default_settings(),
        {"logging": {"level": "LOUD", "format": 3}, "validation": {"strict_choices": "yes"}},
    )

    result = validate_settings(payload)

    messages = {issue.path: issue.message for issue in result.issues}
    assert set(messages) == {"logging.level", "logging.format", "validation.strict_choices"}
    assert messages["logging.level"].startswith("invalid value 'LOUD'")
    assert messages["logging.format"] == "expected string, got int"
    assert messages["validation.strict_choices"] == "expected boolean, got str"


def test_missing_sections_and_non_object_root_are_reported() -> None:
    assert {issue.path for issue in validate_settings({}).issues} == {"logging", "validation"}
    assert validate_settings(["not", "a", "table"]).issues[0].path == "<root>"


def test_settings_validation_error_renders_every_issue() -> None:
    with pytest.raises(SettingsValidationError) as excinfo:
        Settings.from_mapping({"logging": {}, "validation": {}})

    rendered = str(excinfo.value)
    assert "- logging.level:" in rendered
    assert "- validation.strict_choices:" in rendered
    assert len(excinfo.value.issues) == 3


def test_log_level_is_case_insensitive() -> None:
    payload = merge_settings(default_settings(), {"logging": {"level": "debug"}})

    assert Settings.from_mapping(payload).log_level == "DEBUG"


def test_missing_default_settings_file_falls_back_to_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    assert load_settings(environ={}) == Settings()


def test_missing_explicit_settings_file_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(SettingsLoadError, match="settings file not found"):
        load_settings(tmp_path / "absent.toml", environ={})


def test_invalid_toml_is_a_load_error(tmp_path: Path) -> None:
    path = _write_settings(tmp_path / "gp_publisher.toml", "[logging\n")

    with pytest.raises(SettingsLoadError, match="invalid TOML"):
        load_settings(path, environ={})


def test_non_utf8_settings_file_is_a_load_error(tmp_path: Path) -> None:
    path = tmp_path / "gp_publisher.toml"
    path.write_bytes(b'[logging]\nlevel = "INFO\xff"\n')

    with pytest.raises(SettingsLoadError, match="invalid encoding"):
        load_settings(path, environ={})


def test_unknown_cli_override_is_a_load_error() -> None:
    with pytest.raises(SettingsLoadError, match="unknown setting in CLI override"):
        load_settings(environ={}, cli_overrides={"logging.colour": True})


def test_settings_defaults_come_from_the_setting_table() -> None:
    assert Settings().to_dict() == DEFAULT_SETTINGS
    for item in SETTING_FIELDS:
        assert setting_field(item.path) is item
        assert getattr(Settings(), item.attribute) == item.default
    assert setting_field("logging.colour") is None


def test_env_overrides_cover_every_known_setting() -> None:
    environ = {
        env_name_for_path((item.section, item.key)): "1" if item.is_flag else item.choices[0]
        for item in SETTING_FIELDS
    }

    loaded = load_settings(environ=environ)

    assert loaded == Settings(log_level="DEBUG", log_format="console", strict_choices=True)


def test_load_precedence_cli_env_file_defaults(tmp_path: Path) -> None:
    path = _write_settings(
        tmp_path / "gp_publisher.toml",
        '[logging]\nlevel = "INFO"\nformat = "json"\n',
    )

    file_loaded = load_settings(path, environ={})
    env_loaded = load_settings(
        path,
        environ={
            "GP_PUBLISHER_LOGGING_LEVEL": "error",
            "GP_PUBLISHER_VALIDATION_STRICT_CHOICES": "on",
        },
    )
    cli_loaded = load_settings(
        path,
        environ={"GP_PUBLISHER_LOGGING_LEVEL": "error"},
        cli_overrides={"logging.level": "DEBUG", "logging.format": None},
    )

    assert file_loaded == Settings(log_level="INFO", log_format="json", strict_choices=False)
    assert env_loaded == Settings(log_level="ERROR", log_format="json", strict_choices=True)
    assert cli_loaded == Settings(log_level="DEBUG", log_format="json", strict_choices=False)


def test_invalid_boolean_env_override_is_a_load_error() -> None:
    with pytest.raises(SettingsLoadError, match="must be a boolean"):
        load_settings(environ={"GP_PUBLISHER_VALIDATION_STRICT_CHOICES": "maybe"})


def test_invalid_settings_file_content_raises_validation_error(tmp_path: Path) -> None:
    path = _write_settings(tmp_path / "gp_publisher.toml", '[logging]\nformat = "xml"\n')

    with pytest.raises(SettingsValidationError) as excinfo:
        load_settings(path, environ={})

    assert [issue.path for issue in excinfo.value.issues] == ["logging.format"]


def test_env_names_are_derived_from_paths() -> None:
    assert env_name_for_path(("validation", "strict_choices")) == (
        "GP_PUBLISHER_VALIDATION_STRICT_CHOICES"
    )


def test_settings_round_trip_to_dict() -> None:
    settings = Settings(log_level="INFO", log_format="json", strict_choices=True)

    assert Settings.from_mapping(settings.to_dict()) == settings
